from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from contentbridge_core.settings import settings


def engine_for(database_url: str | None = None) -> Engine:
    """Engine for the legacy source database; defaults to the configured URL."""
    return create_engine(database_url or settings.database_url, pool_pre_ping=True)
