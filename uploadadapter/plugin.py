"""
Custom image upload plugin.

Validates the ``custom_image_upload`` configuration and registers an
upload adapter factory with the editor's file repository.
"""
from typing import Any, List

from .core.config import CONFIG_KEY, MissingField, UploadAdapterConfig, validate_config
from .core.logging import get_logger
from .core.upload import UploadAdapter

logger = get_logger('uploadadapter.plugin')


def report_missing_fields(missing: List[MissingField]) -> None:
    """Log one diagnostic per missing configuration entry."""
    for field in missing:
        logger.error(f"{field.error_code}: {field.description}")


def custom_image_upload_adapter_plugin(editor: Any) -> bool:
    """
    Install the upload adapter on an editor.

    When configuration is incomplete, each missing entry is logged and the
    editor keeps running without an upload adapter.

    Args:
        editor: Host exposing ``config.get()`` and ``plugins.get('FileRepository')``

    Returns:
        True if the adapter factory was registered
    """
    options = editor.config.get(CONFIG_KEY)
    missing = validate_config(options)
    if missing:
        report_missing_fields(missing)
        return False

    config = UploadAdapterConfig.from_mapping(options)

    def create_upload_adapter(loader):
        return UploadAdapter(loader, config)

    editor.plugins.get('FileRepository').create_upload_adapter = create_upload_adapter
    logger.debug(f"Upload adapter registered for {config.endpoint}")
    return True
