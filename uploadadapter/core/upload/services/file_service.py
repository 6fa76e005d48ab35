"""
File reading service.

Turns a path on disk into the UploadFile payload the adapter sends.
"""
from pathlib import Path
from typing import Optional, Union
import logging
import mimetypes

import aiofiles

from ..models import UploadFile

_logger = logging.getLogger('uploadadapter.upload.file')


def validate_path(file_path: Union[str, Path]) -> Path:
    """
    Validate a file for upload.

    Args:
        file_path: Path to the file

    Returns:
        Validated Path

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If path is not a regular file
    """
    path = Path(file_path) if isinstance(file_path, str) else file_path

    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    if not path.is_file():
        raise ValueError(f"Path is not a file: {path}")

    return path


def guess_content_type(name: str) -> str:
    """MIME type for a file name, ``application/octet-stream`` if unknown."""
    return mimetypes.guess_type(name)[0] or 'application/octet-stream'


async def read_upload_file(
    file_path: Union[str, Path],
    name: Optional[str] = None,
    content_type: Optional[str] = None
) -> UploadFile:
    """
    Read a file from disk into an UploadFile.

    Args:
        file_path: Path to the file
        name: Optional name override (defaults to the path's name)
        content_type: Optional MIME type override

    Returns:
        UploadFile with the file's content
    """
    path = validate_path(file_path)
    async with aiofiles.open(path, 'rb') as f:
        data = await f.read()

    name = name or path.name
    _logger.debug(f"Read {name} ({len(data)} bytes)")
    return UploadFile(
        name=name,
        data=data,
        content_type=content_type or guess_content_type(name)
    )
