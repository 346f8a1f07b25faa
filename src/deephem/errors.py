"""Error kinds raised by the ephemeris reader."""

from typing import Optional


class EphemerisError(Exception):
    """Base class for every failure surfaced by deephem.

    Each subclass carries a short ``kind`` identifier and a fixed cause; an
    optional detail string is appended to the message.
    """

    kind = "error"
    cause = "ephemeris error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        message = self.cause if not detail else f"{self.cause}: {detail}"
        super().__init__(message)


class FileOpenError(EphemerisError):
    kind = "file_open"
    cause = "file open failed"


class FileReadError(EphemerisError):
    kind = "file_read"
    cause = "file read failed"


class InvalidArgument(EphemerisError):
    kind = "invalid_argument"
    cause = "bad argument"


class ItemNotFound(EphemerisError):
    kind = "item_not_found"
    cause = "item not found"


class DateOutOfRange(EphemerisError):
    kind = "date_out_of_range"
    cause = "date out of range"


__all__ = [
    "EphemerisError",
    "FileOpenError",
    "FileReadError",
    "InvalidArgument",
    "ItemNotFound",
    "DateOutOfRange",
]
