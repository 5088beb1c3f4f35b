"""Exceptions raised while loading schemas and resolving documents."""

from __future__ import annotations


class ContentBridgeError(Exception):
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class SchemaError(ContentBridgeError, ValueError):
    """A field descriptor or schema file cannot be interpreted."""


class FieldResolutionError(ContentBridgeError):
    """A related row does not carry the columns its descriptor promises."""

    def __init__(self, message: str, *, field_key: str, table_name: str):
        super().__init__(message)
        self.field_key = field_key
        self.table_name = table_name


class FileNotRegisteredError(ContentBridgeError, LookupError):
    """A field references a file id that has no `file_managed` row."""

    def __init__(self, file_id: object):
        super().__init__(f"file_managed has no row for fid={file_id!r}")
        self.file_id = file_id
