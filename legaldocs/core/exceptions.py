"""Custom exception hierarchy."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""
    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class APIClientError(AppError):
    """Raised when an external API call fails."""
    pass


class APITimeoutError(APIClientError):
    """Raised when an external API call times out."""
    pass


class ExtractionRejectedError(APIClientError):
    """Raised when the extraction service answers but reports a failure."""
    pass


class ValidationError(AppError):
    """Raised when input validation fails."""
    pass


class ConfigurationError(AppError):
    """Raised when configuration is invalid or missing."""
    pass


class ExtractionError(AppError):
    """Raised when the extraction source returns no usable record."""
    pass


class ExtractionTimeoutError(ExtractionError):
    """Raised when the extraction source does not answer in time."""
    pass


class InvalidDocumentError(AppError):
    """Raised when an uploaded document is rejected before extraction."""
    pass


class ProfileStorageError(AppError):
    """Raised by profile storage backends when a read or write fails."""
    pass


class ProfileNotFoundError(AppError):
    """Raised when a saved profile id does not exist."""
    pass
