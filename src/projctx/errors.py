# src/projctx/errors.py
from pathlib import Path
from typing import Union


class ContextError(Exception):
    """Base class for every error raised by the context engine."""

    def __init__(self, path: Union[str, Path, None], reason: str):
        self.path = str(path) if path is not None else None
        self.reason = reason
        super().__init__(f"{reason}: {self.path}" if self.path else reason)


class NotFoundError(ContextError):
    """The scan root does not exist or is not a directory."""


class ScanPermissionError(ContextError):
    """A directory under the scan root could not be listed."""


class NotScannedError(ContextError):
    """Assemble was called without a scanned tree."""

    def __init__(self, path=None, reason: str = "Project has not been scanned yet"):
        super().__init__(path, reason)


class FileReadError(ContextError):
    """A single selected file could not be read."""
