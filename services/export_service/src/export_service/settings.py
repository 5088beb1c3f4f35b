from __future__ import annotations

from pathlib import Path

from contentbridge_core.settings import Settings, settings

ENTRIES_DIRNAME = "entries"


def entries_dir(s: Settings = settings) -> Path:
    return s.data_dir / ENTRIES_DIRNAME
