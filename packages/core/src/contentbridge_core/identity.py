from __future__ import annotations

import enum
from typing import Any


class LinkType(str, enum.Enum):
    author = "Author"
    entry_tag = "EntryTag"
    file = "File"
    entry = "Entry"


def content_id(content_type: str, numeric_id: Any) -> str:
    return f"{content_type}_{numeric_id}"


def _link(link_type: LinkType, link_id: str) -> dict[str, str]:
    return {"type": link_type.value, "id": link_id}


def author_link(user_id: Any) -> dict[str, str]:
    return _link(LinkType.author, f"user_{user_id}")


def tag_link(tag_id: Any) -> dict[str, str]:
    return _link(LinkType.entry_tag, f"tag_{tag_id}")


def file_link(file_id: Any) -> dict[str, str]:
    return _link(LinkType.file, f"file_{file_id}")


def entry_link(target_type: str, target_id: Any) -> dict[str, str]:
    # Same format as content_id so references line up with exported entry ids.
    return _link(LinkType.entry, content_id(target_type, target_id))
