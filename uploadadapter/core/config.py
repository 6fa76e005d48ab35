"""
Upload adapter configuration.

The editor host supplies a ``custom_image_upload`` block; this module
validates it and turns it into typed configuration objects.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Dict, Any, List, Mapping, TYPE_CHECKING

from .exceptions import ConfigurationError

if TYPE_CHECKING:
    from .upload.protocols import AuthTokenProvider

CONFIG_KEY = 'custom_image_upload'
ERROR_CODE_PREFIX = 'custom-image-upload-adapter-missing-'


class MissingField(Enum):
    """Configuration entries the installer requires."""

    CONFIG = CONFIG_KEY
    BASE_API_URL = 'base_api_url'
    API = 'api'
    AUTH_OPEN_ID_SERVICE = 'auth_open_id_service'

    @property
    def error_code(self) -> str:
        """Diagnostic code logged when this entry is missing."""
        return f"{ERROR_CODE_PREFIX}{self.value}"

    @property
    def description(self) -> str:
        if self is MissingField.CONFIG:
            return (
                f"The `config.{CONFIG_KEY}` block required by the upload adapter "
                "is missing."
            )
        return (
            f"The `config.{CONFIG_KEY}.{self.value}` setting required by the "
            "upload adapter is missing."
        )


REQUIRED_FIELDS = (
    MissingField.BASE_API_URL,
    MissingField.API,
    MissingField.AUTH_OPEN_ID_SERVICE,
)


def validate_config(options: Optional[Mapping[str, Any]]) -> List[MissingField]:
    """
    Check the ``custom_image_upload`` block for required entries.

    Args:
        options: Configuration mapping, or None when the block is absent

    Returns:
        Missing entries in declaration order; empty when complete
    """
    if options is None:
        return [MissingField.CONFIG]
    return [f for f in REQUIRED_FIELDS if not options.get(f.value)]


@dataclass
class StaticTokenProvider:
    """Auth service that always hands out the same bearer token."""

    token: str

    def get_auth_token(self) -> str:
        return self.token


@dataclass
class TransportConfig:
    """
    HTTP transport settings.

    Attributes:
        user_agent: User-Agent header sent with uploads
        extra_headers: Additional headers merged into every request
        chunk_size: Size of the body pieces streamed to the server
        verify_ssl: Verify TLS certificates
        proxy: Optional proxy URL
        timeout: Total request timeout in seconds, None waits forever
    """
    user_agent: str = 'uploadadapter/1.0.0'
    extra_headers: Dict[str, str] = field(default_factory=dict)
    chunk_size: int = 64 * 1024
    verify_ssl: bool = True
    proxy: Optional[str] = None
    timeout: Optional[float] = None

    def __post_init__(self):
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> 'TransportConfig':
        """Create from a plain mapping, ignoring unknown keys."""
        if not data:
            return cls()
        known = {
            'user_agent', 'extra_headers', 'chunk_size',
            'verify_ssl', 'proxy', 'timeout',
        }
        return cls(**{k: v for k, v in data.items() if k in known})

    def to_aiohttp_timeout(self):
        """Convert to aiohttp ClientTimeout."""
        import aiohttp
        return aiohttp.ClientTimeout(total=self.timeout)

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {'ssl': self.verify_ssl}

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {'User-Agent': self.user_agent, **self.extra_headers},
            'timeout': self.to_aiohttp_timeout(),
        }


@dataclass
class UploadAdapterConfig:
    """
    Complete adapter configuration.

    Attributes:
        base_api_url: Backend root, e.g. ``https://api.example.com``
        api: Endpoint path appended to the root, e.g. ``images``
        auth_open_id_service: Object exposing ``get_auth_token()``
        transport: HTTP transport settings
    """
    base_api_url: str
    api: str
    auth_open_id_service: 'AuthTokenProvider'
    transport: TransportConfig = field(default_factory=TransportConfig)

    @property
    def endpoint(self) -> str:
        """URL the upload form is posted to."""
        return f"{self.base_api_url}/{self.api}"

    def image_url(self, image_id: Any) -> str:
        """URL of an uploaded image."""
        return f"{self.endpoint}/{image_id}"

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]]) -> 'UploadAdapterConfig':
        """
        Build configuration from the host's ``custom_image_upload`` block.

        Raises:
            ConfigurationError: If any required entry is missing
        """
        missing = validate_config(options)
        if missing:
            raise ConfigurationError(missing)

        transport = options.get('transport')
        if not isinstance(transport, TransportConfig):
            transport = TransportConfig.from_mapping(transport)

        return cls(
            base_api_url=options['base_api_url'],
            api=options['api'],
            auth_open_id_service=options['auth_open_id_service'],
            transport=transport,
        )
