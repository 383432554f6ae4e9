"""Error definitions for the Lingo content model."""

from __future__ import annotations

from typing import Optional


class LingoError(Exception):
    """Base exception for all custom errors."""


class StructuralMismatch(LingoError):
    """Raised when an instance does not satisfy the declared shape."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path


class OutOfRangeCombination(LingoError, IndexError):
    """Raised when a plural row index or category tuple is out of range."""


class UnknownLanguageError(LingoError, KeyError):
    """Raised when a language identifier is not present in the registry."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0]) if self.args else ""


class DocumentError(LingoError):
    """Raised when a shape or instance document cannot be read."""


class ConfigurationError(LingoError):
    """Raised when the configuration is missing or invalid."""


class OverwriteRefusedError(LingoError):
    """Raised when attempting to overwrite an output without consent."""
