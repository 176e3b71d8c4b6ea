"""Fatal errors raised by the PWA Builder tools."""

from __future__ import annotations

from typing import Optional


class PwaBuilderError(Exception):
    """Base exception for all fatal PWA Builder errors."""

    def __init__(self, message: str, hint: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}


class ConfigError(PwaBuilderError):
    """Raised when build-config.json is missing or not valid JSON."""

    def __init__(self, path, cause: Optional[Exception] = None):
        self.path = path
        self.cause = cause
        details = {"path": str(path)}
        if cause:
            details["cause"] = str(cause)
        super().__init__(
            f"{path} not found or invalid",
            hint="Make sure build-config.json exists in the project root",
            details=details,
        )


class CreateError(PwaBuilderError):
    """Raised when a new project cannot be scaffolded."""


class InvalidAppIdError(CreateError):
    """Raised when the app ID is not a reverse-domain name."""

    def __init__(self, app_id: str):
        self.app_id = app_id
        super().__init__(
            f"Invalid App ID format: {app_id!r}",
            hint="Use format like: com.yourname.appname",
            details={"app_id": app_id},
        )


class BuildError(PwaBuilderError):
    """Raised when a build step that cannot be skipped fails."""

    def __init__(self, step: str, message: str, hint: Optional[str] = None, exit_code: Optional[int] = None):
        self.step = step
        self.exit_code = exit_code
        super().__init__(message, hint=hint, details={"step": step, "exit_code": exit_code})


class IconError(PwaBuilderError):
    """Raised when icons cannot be generated."""
