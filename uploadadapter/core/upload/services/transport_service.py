"""
HTTP upload transport.

Sends the multipart upload form with aiohttp and reports body progress.
"""
from typing import Optional, Any, AsyncIterator
import asyncio
import json
import logging
import time

import aiohttp
from requests_toolbelt.multipart.encoder import MultipartEncoder, MultipartEncoderMonitor

from ...config import TransportConfig
from ..models import UploadRequest, ProgressEvent, TransportOutcome, Loaded, Errored, Aborted
from ..protocols import ProgressCallback


class AiohttpUploadTransport:
    """
    Performs one multipart POST to the upload endpoint.

    Responsibilities:
    - Encode the ``name``/``description``/``file`` form
    - Stream the body and report length-computable progress
    - Translate the exchange into Loaded, Errored or Aborted

    A transport is one-shot: calling ``send()`` twice raises RuntimeError.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ):
        """
        Initialize the transport.

        Args:
            config: Transport settings, defaults to TransportConfig()
            session: Optional shared session; created and closed here if omitted
        """
        self._config = config or TransportConfig()
        self._session = session
        self._owns_session = False
        self._task: Optional[asyncio.Task] = None
        self._on_progress: Optional[ProgressCallback] = None
        self._used = False
        self._aborted = False
        self._settled = False
        self._logger = logging.getLogger('uploadadapter.upload.transport')

    @property
    def aborted(self) -> bool:
        """True once ``abort()`` took effect."""
        return self._aborted

    @property
    def settled(self) -> bool:
        """True once ``send()`` produced its outcome."""
        return self._settled

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create HTTP session."""
        if self._session is None:
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(**self._config.get_connector_kwargs()),
                **self._config.get_session_kwargs()
            )
            self._owns_session = True
        return self._session

    async def close(self):
        """Close session if we own it."""
        if self._owns_session and self._session:
            await self._session.close()
            self._session = None

    def abort(self) -> None:
        """Cancel the in-flight request. No-op once settled."""
        if self._aborted or self._settled:
            return
        # The response already arrived; load wins.
        if self._task is not None and self._task.done():
            return
        self._aborted = True
        self._logger.debug("Upload request aborted")
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def send(
        self,
        request: UploadRequest,
        on_progress: Optional[ProgressCallback] = None
    ) -> TransportOutcome:
        """
        POST the upload form.

        Args:
            request: Upload request to send
            on_progress: Called with a ProgressEvent for each body piece

        Returns:
            Loaded with the parsed JSON body (None if not JSON),
            Errored on network failure, Aborted after ``abort()``

        Raises:
            RuntimeError: If the transport was already used
        """
        if self._used:
            raise RuntimeError("AiohttpUploadTransport instances are one-shot")
        self._used = True
        self._on_progress = on_progress

        if self._aborted:
            self._settled = True
            return Aborted()

        upload_start = time.time()
        self._task = asyncio.ensure_future(self._post(request))
        try:
            response = await self._task
        except asyncio.CancelledError:
            if not self._aborted:
                raise
            self._logger.info(f"Upload of {request.file.name} aborted after {time.time() - upload_start:.2f}s")
            return Aborted()
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            self._logger.error(f"Upload of {request.file.name} failed after {time.time() - upload_start:.2f}s: {e}")
            return Errored(e)
        finally:
            self._settled = True
            await self.close()

        self._logger.debug(f"Upload of {request.file.name} answered in {time.time() - upload_start:.2f}s")
        return Loaded(response)

    def _build_monitor(self, request: UploadRequest) -> MultipartEncoderMonitor:
        encoder = MultipartEncoder(fields=request.form_fields())
        return MultipartEncoderMonitor(encoder, self._emit_progress)

    def _emit_progress(self, monitor: MultipartEncoderMonitor) -> None:
        if self._aborted or self._settled or self._on_progress is None:
            return
        self._on_progress(ProgressEvent(
            loaded=monitor.bytes_read,
            total=monitor.len,
            length_computable=True
        ))

    async def _body(self, monitor: MultipartEncoderMonitor) -> AsyncIterator[bytes]:
        """Stream the encoded form in ``chunk_size`` pieces."""
        while True:
            chunk = monitor.read(self._config.chunk_size)
            if not chunk:
                break
            yield chunk

    async def _post(self, request: UploadRequest) -> Any:
        monitor = self._build_monitor(request)
        headers = {
            'authorization': request.authorization_header,
            'Accept': 'application/json',
            'Content-Type': monitor.content_type,
            'Content-Length': str(monitor.len),
        }
        session = await self._get_session()

        self._logger.debug(
            f"POST {request.url} ({request.file.name}, {monitor.len / 1024:.1f} KB)"
        )
        async with session.post(
            request.url,
            data=self._body(monitor),
            headers=headers,
            proxy=self._config.proxy,
            timeout=self._config.to_aiohttp_timeout()
        ) as response:
            raw = await response.read()
            if response.status >= 400:
                self._logger.warning(f"Upload endpoint answered HTTP {response.status} for {request.file.name}")
            return self._parse_body(raw)

    def _parse_body(self, raw: bytes) -> Any:
        """
        Parse a JSON response body.

        Returns:
            Decoded JSON value, or None when the body is empty or not JSON
        """
        if not raw:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            self._logger.warning("Upload endpoint returned a non-JSON body")
            return None
