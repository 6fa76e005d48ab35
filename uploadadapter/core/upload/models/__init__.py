"""Upload data models."""
from .upload_models import (
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

__all__ = [
    'UploadFile',
    'UploadRequest',
    'ProgressEvent',
    'UploadProgress',
    'UploadResult',
    'Loaded',
    'Errored',
    'Aborted',
    'TransportOutcome',
]
