"""Pytest fixtures for uploadadapter tests."""
import pytest

from uploadadapter.core.config import UploadAdapterConfig, StaticTokenProvider
from uploadadapter.core.upload.models import UploadFile

from .fakes import FakeLoader


@pytest.fixture
def upload_config():
    """Adapter configuration pointing at a fake backend."""
    return UploadAdapterConfig(
        base_api_url="https://api.example.com",
        api="images",
        auth_open_id_service=StaticTokenProvider("secret-token"),
    )


@pytest.fixture
def cat_file():
    """Small PNG-named payload."""
    return UploadFile(name="cat.png", data=b"\x89PNG fake image bytes", content_type="image/png")


@pytest.fixture
def loader(cat_file):
    return FakeLoader(cat_file)
