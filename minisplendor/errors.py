"""
Exceptions raised by Mini Splendor.

Rejected actions are not exceptions: validate() returns False and
submit() returns a failed ActionResult.
"""


class MiniSplendorError(Exception):
    """Base class for all Mini Splendor errors."""


class SaveFileError(MiniSplendorError):
    """A save file could not be written, read or decoded."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path
