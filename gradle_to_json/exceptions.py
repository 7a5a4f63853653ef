"""Custom exceptions for gradle-to-json."""


class GradleToJsonError(Exception):
    """Base exception for all gradle-to-json errors."""


class ScriptReadError(GradleToJsonError):
    """Raised when a build script (file or stream) cannot be read."""

    def __init__(self, path: str, cause: BaseException):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot read build script '{path}': {cause}")
