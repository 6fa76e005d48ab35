"""Core upload adapter components."""
from .config import (
    UploadAdapterConfig,
    TransportConfig,
    StaticTokenProvider,
    MissingField,
    validate_config,
    CONFIG_KEY,
)
from .exceptions import (
    UploadAdapterError,
    ConfigurationError,
    UploadError,
    TransportError,
    ServerReportedError,
    MalformedResponseError,
    UploadAborted,
)

__all__ = [
    'UploadAdapterConfig',
    'TransportConfig',
    'StaticTokenProvider',
    'MissingField',
    'validate_config',
    'CONFIG_KEY',
    'UploadAdapterError',
    'ConfigurationError',
    'UploadError',
    'TransportError',
    'ServerReportedError',
    'MalformedResponseError',
    'UploadAborted',
]
