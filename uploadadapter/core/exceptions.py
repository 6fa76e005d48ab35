"""
Exceptions raised by the upload adapter.

Runtime upload failures derive from UploadError and terminate the attempt
they belong to. Configuration problems derive from ConfigurationError.
"""
from typing import Optional, Any, Sequence


class UploadAdapterError(Exception):
    """Base exception for all upload adapter errors."""

    def __init__(self, message: Optional[str] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Human readable reason, None when there is none
        """
        self.message = message
        if message is None:
            super().__init__()
        else:
            super().__init__(message)


class ConfigurationError(UploadAdapterError):
    """Raised when required configuration fields are missing."""

    def __init__(self, missing_fields: Sequence[Any]) -> None:
        """
        Initialize the exception.

        Args:
            missing_fields: MissingField members that were absent
        """
        self.missing_fields = list(missing_fields)
        names = ', '.join(str(getattr(f, 'value', f)) for f in self.missing_fields)
        super().__init__(f"Missing upload adapter configuration: {names}")


class UploadError(UploadAdapterError):
    """Raised when an upload attempt fails."""
    pass


class TransportError(UploadError):
    """Network-level failure while sending the upload request."""
    pass


class ServerReportedError(UploadError):
    """The server answered with an ``error`` object."""

    def __init__(self, message: Optional[str], payload: Any = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Message reported by the server (or the generic one)
            payload: Raw ``error`` value from the response body
        """
        self.payload = payload
        super().__init__(message)


class MalformedResponseError(UploadError):
    """The response body was absent or falsy."""
    pass


class UploadAborted(UploadError):
    """The upload was cancelled with ``abort()``. Carries no message."""

    def __init__(self) -> None:
        super().__init__(None)
