"""Tests for adapter configuration."""
import aiohttp
import pytest

from uploadadapter.core.config import (
    UploadAdapterConfig,
    TransportConfig,
    StaticTokenProvider,
    MissingField,
    validate_config,
)
from uploadadapter.core.exceptions import ConfigurationError
from uploadadapter.core.upload.protocols import AuthTokenProvider


@pytest.fixture
def complete_options():
    return {
        'base_api_url': "https://api.example.com",
        'api': "images",
        'auth_open_id_service': StaticTokenProvider("tok"),
    }


class TestValidateConfig:
    """Test suite for validate_config."""

    def test_complete(self, complete_options):
        assert validate_config(complete_options) == []

    def test_missing_block(self):
        assert validate_config(None) == [MissingField.CONFIG]

    def test_empty_block_lists_every_field(self):
        assert validate_config({}) == [
            MissingField.BASE_API_URL,
            MissingField.API,
            MissingField.AUTH_OPEN_ID_SERVICE,
        ]

    @pytest.mark.parametrize("field", [
        MissingField.BASE_API_URL,
        MissingField.API,
        MissingField.AUTH_OPEN_ID_SERVICE,
    ])
    def test_single_missing_field(self, complete_options, field):
        del complete_options[field.value]

        assert validate_config(complete_options) == [field]

    def test_empty_string_counts_as_missing(self, complete_options):
        complete_options['api'] = ""

        assert validate_config(complete_options) == [MissingField.API]

    def test_error_codes(self):
        assert MissingField.CONFIG.error_code == "custom-image-upload-adapter-missing-custom_image_upload"
        assert MissingField.BASE_API_URL.error_code == "custom-image-upload-adapter-missing-base_api_url"
        assert MissingField.API.error_code == "custom-image-upload-adapter-missing-api"
        assert MissingField.AUTH_OPEN_ID_SERVICE.error_code == (
            "custom-image-upload-adapter-missing-auth_open_id_service"
        )


class TestUploadAdapterConfig:
    """Test suite for UploadAdapterConfig."""

    def test_from_mapping(self, complete_options):
        config = UploadAdapterConfig.from_mapping(complete_options)

        assert config.base_api_url == "https://api.example.com"
        assert config.api == "images"
        assert isinstance(config.transport, TransportConfig)

    def test_from_mapping_missing(self):
        with pytest.raises(ConfigurationError) as exc_info:
            UploadAdapterConfig.from_mapping({'api': "images"})

        assert exc_info.value.missing_fields == [
            MissingField.BASE_API_URL,
            MissingField.AUTH_OPEN_ID_SERVICE,
        ]
        assert "base_api_url" in str(exc_info.value)

    def test_from_mapping_with_transport(self, complete_options):
        complete_options['transport'] = {'chunk_size': 1024, 'unknown': True}

        config = UploadAdapterConfig.from_mapping(complete_options)

        assert config.transport.chunk_size == 1024

    def test_endpoint_and_image_url(self, upload_config):
        assert upload_config.endpoint == "https://api.example.com/images"
        assert upload_config.image_url("abc123") == "https://api.example.com/images/abc123"


class TestTransportConfig:
    """Test suite for TransportConfig."""

    def test_defaults(self):
        config = TransportConfig()

        assert config.timeout is None
        assert config.verify_ssl is True
        assert config.proxy is None

    def test_invalid_chunk_size(self):
        with pytest.raises(ValueError):
            TransportConfig(chunk_size=0)

    def test_session_kwargs(self):
        config = TransportConfig(user_agent="ua/1", extra_headers={'X-Team': "docs"})

        kwargs = config.get_session_kwargs()

        assert kwargs['headers'] == {'User-Agent': "ua/1", 'X-Team': "docs"}
        assert isinstance(kwargs['timeout'], aiohttp.ClientTimeout)
        assert kwargs['timeout'].total is None

    def test_connector_kwargs(self):
        assert TransportConfig(verify_ssl=False).get_connector_kwargs() == {'ssl': False}


class TestStaticTokenProvider:

    def test_returns_token(self):
        provider = StaticTokenProvider("tok")

        assert provider.get_auth_token() == "tok"
        assert isinstance(provider, AuthTokenProvider)
