"""
Upload adapter.

Drives one file's upload on behalf of the editor host: sends the request
through an injected transport, mirrors progress into the loader and turns
the transport outcome into an UploadResult or an UploadError.
"""
import inspect
from typing import Any, Callable, Optional

from ..config import UploadAdapterConfig
from ..exceptions import (
    TransportError,
    ServerReportedError,
    MalformedResponseError,
    UploadAborted,
)
from ..logging import get_logger
from .models import (
    UploadFile,
    UploadRequest,
    UploadProgress,
    UploadResult,
    ProgressEvent,
    TransportOutcome,
    Loaded,
    Errored,
    Aborted,
)
from .protocols import FileLoaderProtocol, UploadTransport
from .services import AiohttpUploadTransport

logger = get_logger('uploadadapter.upload.adapter')

MISSING_IMAGE_ID = 'undefined'


def _is_truthy(value: Any) -> bool:
    """JSON truthiness as the upload backend defines it: containers always count."""
    if isinstance(value, (dict, list)):
        return True
    return bool(value)


def format_image_id(value: Any) -> str:
    """Render a JSON imageId the way the backend's URL scheme expects it."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dict):
        return '[object Object]'
    if isinstance(value, list):
        return ','.join('' if item is None else format_image_id(item) for item in value)
    return str(value)


def generic_error_message(file: UploadFile) -> str:
    """Message used when the server gives no reason of its own."""
    return f"Couldn't upload file: {file.name}."


class UploadAdapter:
    """
    Uploads a single file for an editor file loader.

    Each adapter handles exactly one attempt: ``upload()`` settles once and
    a failed attempt is retried by creating a new adapter.

    Example:
        >>> adapter = UploadAdapter(loader, config)
        >>> result = await adapter.upload()
        >>> result.to_dict()
        {'default': 'https://api.example.com/images/abc123'}
    """

    def __init__(
        self,
        loader: FileLoaderProtocol,
        config: UploadAdapterConfig,
        transport_factory: Optional[Callable[[], UploadTransport]] = None
    ):
        """
        Initialize the adapter.

        Args:
            loader: Host loader providing the file and progress fields
            config: Adapter configuration
            transport_factory: Builds the one-shot transport for the attempt
        """
        self.loader = loader
        self.config = config
        self.progress = UploadProgress()
        self._transport_factory = transport_factory or (
            lambda: AiohttpUploadTransport(config.transport)
        )
        self._transport: Optional[UploadTransport] = None
        self._started = False
        self._settled = False

    @property
    def settled(self) -> bool:
        """True once the attempt resolved or failed."""
        return self._settled

    async def upload(self) -> UploadResult:
        """
        Upload the loader's file.

        Returns:
            UploadResult whose ``default`` is ``{base_api_url}/{api}/{imageId}``

        Raises:
            UploadAborted: If ``abort()`` cancelled the request
            TransportError: If the request failed at the network level
            MalformedResponseError: If the response body was absent or falsy
            ServerReportedError: If the response carried an ``error`` object
            RuntimeError: If called more than once
        """
        if self._started:
            raise RuntimeError("UploadAdapter.upload() may only be called once")
        self._started = True

        try:
            file = await self.loader.file
            transport = self._transport = self._transport_factory()

            try:
                token = await self._get_auth_token()
            except Exception as e:
                logger.error(f"Could not obtain auth token for {file.name}: {e}")
                raise TransportError(generic_error_message(file)) from e

            request = UploadRequest(file=file, url=self.config.endpoint, auth_token=token)
            logger.info(f"Uploading {file.name} ({file.size} bytes) to {request.url}")
            outcome = await transport.send(request, on_progress=self._on_progress)
        finally:
            self._settled = True

        return self._resolve(outcome, file)

    def abort(self) -> None:
        """Cancel the in-flight request. No-op when nothing is in flight."""
        if self._transport is None or self._settled:
            return
        self._transport.abort()

    async def _get_auth_token(self) -> str:
        token = self.config.auth_open_id_service.get_auth_token()
        if inspect.isawaitable(token):
            token = await token
        return token

    def _on_progress(self, event: ProgressEvent) -> None:
        if self._settled or not event.length_computable:
            return
        if event.loaded < self.progress.loaded:
            return

        self.progress.loaded = event.loaded
        self.progress.total = event.total
        self.loader.upload_total = event.total
        self.loader.uploaded = event.loaded

    def _resolve(self, outcome: TransportOutcome, file: UploadFile) -> UploadResult:
        """Map the transport's terminal signal to a result or an error."""
        generic = generic_error_message(file)

        if isinstance(outcome, Aborted):
            logger.info(f"Upload of {file.name} aborted")
            raise UploadAborted()

        if isinstance(outcome, Errored):
            raise TransportError(generic) from outcome.error

        if not isinstance(outcome, Loaded):
            raise TypeError(f"Unknown transport outcome: {outcome!r}")

        response = outcome.response
        if not _is_truthy(response):
            logger.warning(f"Upload of {file.name} returned an empty response")
            raise MalformedResponseError(generic)

        error = response.get('error') if isinstance(response, dict) else None
        if _is_truthy(error):
            message = error.get('message') if isinstance(error, dict) else None
            logger.warning(f"Server rejected {file.name}: {message or generic}")
            raise ServerReportedError(message or generic, payload=error)

        if isinstance(response, dict) and 'imageId' in response:
            image_id = format_image_id(response['imageId'])
        else:
            logger.warning(f"Upload response for {file.name} has no imageId")
            image_id = MISSING_IMAGE_ID

        url = self.config.image_url(image_id)
        logger.info(f"Uploaded {file.name}: {url}")
        return UploadResult(
            default=url,
            response=response if isinstance(response, dict) else {}
        )
