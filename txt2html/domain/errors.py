"""Error taxonomy for the layer around the conversion core.

The conversion core itself never raises; these errors come from loading
configuration and resolving source and destination paths. Hook failures are
not wrapped.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class Txt2HtmlError(Exception):
    """Base class for errors the CLI reports and exits on."""


class ConfigurationError(Txt2HtmlError):
    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class SourceNotFoundError(Txt2HtmlError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Source not found: {path}")


class DestinationError(Txt2HtmlError):
    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        super().__init__(f"{message}: {path}" if path else message)


__all__ = [
    "Txt2HtmlError",
    "ConfigurationError",
    "SourceNotFoundError",
    "DestinationError",
]
