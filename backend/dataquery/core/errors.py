from __future__ import annotations


class EngineError(Exception):
    """Base class for failures surfaced by the lookup engine."""

    kind = "engine_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message}


class ParseError(EngineError):
    """A single file could not be read as a supported table format."""

    kind = "parse_error"

    def __init__(self, file_name: str, reason: str):
        super().__init__(f"{file_name}: {reason}")
        self.file_name = file_name
        self.reason = reason


class NotFoundError(EngineError):
    kind = "not_found"


class DataIOError(EngineError, OSError):
    """Folder unreadable or a write to the data directory failed."""

    kind = "io_error"
