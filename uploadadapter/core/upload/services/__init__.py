"""Upload services module."""
from .file_service import read_upload_file, validate_path, guess_content_type
from .transport_service import AiohttpUploadTransport

__all__ = [
    'read_upload_file',
    'validate_path',
    'guess_content_type',
    'AiohttpUploadTransport',
]
