"""Exception taxonomy for a refresh run. None of these are retried."""

from typing import Optional


class SyncError(Exception):
    """Base class for every failure that aborts a refresh run."""


class ConfigError(SyncError):
    """Missing or invalid settings / credentials."""


class FetchError(SyncError):
    """The source answered with a non-success status (or not at all)."""

    def __init__(self, status: Optional[int], body: str = "", message: str = ""):
        self.status = status
        self.body = body
        if not message:
            message = f"Source returned HTTP {status}" if status is not None else "Source request failed"
        super().__init__(f"{message}: {body}" if body else message)


class DecodeError(SyncError):
    """The source body is not a JSON list of records."""

    def __init__(self, message: str, body: str = ""):
        self.body = body
        super().__init__(f"{message}: {body[:500]}" if body else message)


class WriteError(SyncError):
    """The destination rejected a batch write."""

    def __init__(self, batch_number: int, start_row: int, message: str = ""):
        self.batch_number = batch_number
        self.start_row = start_row
        text = f"Batch {batch_number} (row {start_row}) rejected"
        super().__init__(f"{text}: {message}" if message else text)


class SwapError(SyncError):
    """The staged sheet could not be swapped in as the live sheet."""
