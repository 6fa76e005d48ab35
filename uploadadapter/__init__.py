"""
uploadadapter - image upload adapter for rich-text editor hosts.

Usage:
    >>> from uploadadapter import Editor, StaticTokenProvider, custom_image_upload_adapter_plugin
    >>>
    >>> editor = Editor(
    ...     config={'custom_image_upload': {
    ...         'base_api_url': 'https://api.example.com',
    ...         'api': 'images',
    ...         'auth_open_id_service': StaticTokenProvider('token'),
    ...     }},
    ...     plugins=[custom_image_upload_adapter_plugin],
    ... )
    >>> loader = editor.plugins.get('FileRepository').create_loader(file)
    >>> await loader.upload()
    {'default': 'https://api.example.com/images/abc123'}
"""
import logging

from .core import (
    UploadAdapterConfig,
    TransportConfig,
    StaticTokenProvider,
    MissingField,
    validate_config,
    UploadAdapterError,
    ConfigurationError,
    UploadError,
    TransportError,
    ServerReportedError,
    MalformedResponseError,
    UploadAborted,
)
from .core.upload import (
    UploadAdapter,
    AiohttpUploadTransport,
    UploadFile,
    UploadResult,
    UploadProgress,
    read_upload_file,
)
from .editor import Editor, EditorConfig, FileLoader, FileRepository
from .plugin import custom_image_upload_adapter_plugin

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for uploadadapter modules.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'uploadadapter',
        'uploadadapter.plugin',
        'uploadadapter.editor',
        'uploadadapter.upload.adapter',
        'uploadadapter.upload.transport',
        'uploadadapter.upload.file',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'UploadAdapter',
    'AiohttpUploadTransport',
    'UploadAdapterConfig',
    'TransportConfig',
    'StaticTokenProvider',
    'MissingField',
    'validate_config',
    'UploadFile',
    'UploadResult',
    'UploadProgress',
    'read_upload_file',
    'Editor',
    'EditorConfig',
    'FileLoader',
    'FileRepository',
    'custom_image_upload_adapter_plugin',
    'UploadAdapterError',
    'ConfigurationError',
    'UploadError',
    'TransportError',
    'ServerReportedError',
    'MalformedResponseError',
    'UploadAborted',
    'setup_logging',
]
