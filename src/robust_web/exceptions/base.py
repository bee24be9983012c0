"""
Base exceptions for robust-web.
"""


class RobustWebError(Exception):
    """
    Base exception for all robust-web errors.

    All custom exceptions inherit from this class, making it easy
    to catch any error raised by the library itself.

    Attributes:
        message: Human-readable error message
        details: Optional additional error details
    """

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - Details: {self.details}"
        return self.message


class ConfigurationError(RobustWebError):
    """
    Error in configuration.

    Raised when there's an issue with settings, environment variables,
    or configuration files.
    """
    pass


class InvalidArgumentError(RobustWebError, ValueError):
    """
    Invalid argument supplied when building an element reference.

    Raised immediately (never retried) for a missing context, a missing
    or malformed locator, or an out-of-range index.
    """

    def __init__(self, message: str, argument: str):
        super().__init__(message, {"argument": argument})
        self.argument = argument
