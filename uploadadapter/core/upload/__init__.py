"""
Upload module.

Provides the per-file upload adapter, its HTTP transport and the models
they exchange.
"""
from .adapter import UploadAdapter, generic_error_message
from .models import (
    UploadFile,
    UploadRequest,
    ProgressEvent,
    UploadProgress,
    UploadResult,
    Loaded,
    Errored,
    Aborted,
    TransportOutcome,
)
from .protocols import AuthTokenProvider, FileLoaderProtocol, UploadTransport
from .services import AiohttpUploadTransport, read_upload_file

__all__ = [
    # Main classes
    'UploadAdapter',
    'AiohttpUploadTransport',
    'read_upload_file',
    'generic_error_message',

    # Models
    'UploadFile',
    'UploadRequest',
    'ProgressEvent',
    'UploadProgress',
    'UploadResult',
    'Loaded',
    'Errored',
    'Aborted',
    'TransportOutcome',

    # Protocols
    'AuthTokenProvider',
    'FileLoaderProtocol',
    'UploadTransport',
]
