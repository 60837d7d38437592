"""Error codes and error handling utilities for themekit."""

from __future__ import annotations

import errno
from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for style build stages."""

    # File system errors
    DIR_NOT_FOUND = auto()
    FILE_NOT_FOUND = auto()
    ACCESS_DENIED = auto()
    DIR_NOT_EMPTY = auto()
    DISK_FULL = auto()
    IO_FAILED = auto()

    # Theme errors
    THEME_NAME_INVALID = auto()
    AGGREGATE_PARTIAL = auto()
    COMPILE_FAILED = auto()

    # Build errors
    STAGE_FAILED = auto()


ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.DIR_NOT_FOUND: "The directory does not exist.",
    ErrorCode.FILE_NOT_FOUND: "The file was not found. It may have been moved or deleted.",
    ErrorCode.ACCESS_DENIED: "Access denied. Check file and directory permissions.",
    ErrorCode.DIR_NOT_EMPTY: "The output directory contains subdirectories and cannot be cleaned.",
    ErrorCode.DISK_FULL: "The destination disk is full. Free up space and try again.",
    ErrorCode.IO_FAILED: "A filesystem operation failed.",

    ErrorCode.THEME_NAME_INVALID: "Theme files must be named <name>.theme.scss.",
    ErrorCode.AGGREGATE_PARTIAL: "Some import directives could not be written to the aggregate stylesheet.",
    ErrorCode.COMPILE_FAILED: "The stylesheet failed to compile.",

    ErrorCode.STAGE_FAILED: "A build stage failed. See the log for details.",
}


@dataclass
class ThemekitError(Exception):
    """Base exception for themekit with error code and context."""

    code: ErrorCode
    message: str = ""
    path: Path | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.message:
            self.message = ERROR_MESSAGES.get(self.code, "An unexpected error occurred.")

    def __str__(self) -> str:
        parts = [self.message]
        if self.path:
            parts.append(f" ({self.path})")
        if self.details:
            details_str = " | ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f" [{details_str}]")
        return "".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging or reports."""
        return {
            "code": self.code.name,
            "message": self.message,
            "path": str(self.path) if self.path else None,
            "details": self.details,
        }


@dataclass
class ScanError(ThemekitError):
    """Raised when a directory cannot be listed."""


@dataclass
class ThemeNamingError(ThemekitError):
    """Raised when a theme filename does not follow <name>.theme.<ext>."""

    code: ErrorCode = ErrorCode.THEME_NAME_INVALID


@dataclass
class StyleCompileError(ThemekitError):
    """Raised when the sass compiler rejects a stylesheet."""

    code: ErrorCode = ErrorCode.COMPILE_FAILED
    line: int | None = None
    column: int | None = None

    def location(self) -> str:
        return f"line: {self.line}, column: {self.column}"


def classify_exception(exc: Exception, path: Path | None = None) -> ThemekitError:
    """Classify a generic exception into a ThemekitError with an appropriate code."""
    if isinstance(exc, ThemekitError):
        return exc
    details = {"original": str(exc)}
    if isinstance(exc, FileNotFoundError):
        return ThemekitError(ErrorCode.FILE_NOT_FOUND, path=path, details=details)
    if isinstance(exc, PermissionError):
        return ThemekitError(ErrorCode.ACCESS_DENIED, path=path, details=details)
    if isinstance(exc, IsADirectoryError) or getattr(exc, "errno", None) in (
        errno.ENOTEMPTY,
        errno.EISDIR,
    ):
        return ThemekitError(ErrorCode.DIR_NOT_EMPTY, path=path, details=details)
    if getattr(exc, "errno", None) == errno.ENOSPC:
        return ThemekitError(ErrorCode.DISK_FULL, path=path, details=details)
    if isinstance(exc, OSError):
        return ThemekitError(ErrorCode.IO_FAILED, path=path, details=details)
    return ThemekitError(
        ErrorCode.STAGE_FAILED,
        message=f"{type(exc).__name__}: {exc}",
        path=path,
        details=details,
    )
