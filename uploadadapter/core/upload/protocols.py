"""
Protocol definitions for the upload module.

The adapter depends on these interfaces rather than on aiohttp or on a
concrete editor, so tests can substitute fakes that emit signals
deterministically.
"""
from typing import Protocol, Optional, Callable, Awaitable, Union, runtime_checkable

from .models import UploadRequest, ProgressEvent, TransportOutcome, UploadFile


ProgressCallback = Callable[[ProgressEvent], None]


@runtime_checkable
class AuthTokenProvider(Protocol):
    """Hands out the bearer token attached to each upload."""

    def get_auth_token(self) -> Union[str, Awaitable[str]]:
        """
        Return the current token.

        Implementations may return the string directly or an awaitable.
        """
        ...


class UploadTransport(Protocol):
    """
    One-shot network exchange for a single upload.

    Terminates with exactly one of Loaded, Errored or Aborted and may report
    progress before that. Instances must not be reused.
    """

    async def send(
        self,
        request: UploadRequest,
        on_progress: Optional[ProgressCallback] = None
    ) -> TransportOutcome:
        """
        Perform the POST.

        Args:
            request: Upload request to send
            on_progress: Called for each progress signal while sending

        Returns:
            The terminal outcome
        """
        ...

    def abort(self) -> None:
        """Cancel the in-flight request. No-op once settled."""
        ...


class FileLoaderProtocol(Protocol):
    """
    Host object giving the adapter its file and progress fields.

    ``file`` is awaitable and resolves to the payload; ``upload_total`` and
    ``uploaded`` are written by the adapter.
    """

    upload_total: Optional[int]
    uploaded: int

    @property
    def file(self) -> Awaitable[UploadFile]:
        ...
