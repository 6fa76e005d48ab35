"""
Data models for the upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from typing import Dict, Any, Optional, Union


@dataclass(frozen=True)
class UploadFile:
    """
    Binary payload handed to the adapter by the host.

    Attributes:
        name: File name, used for the form fields and error messages
        data: Raw file content
        content_type: MIME type sent with the ``file`` part
    """
    name: str
    data: bytes = field(repr=False)
    content_type: str = 'application/octet-stream'

    @property
    def size(self) -> int:
        """Returns payload size in bytes."""
        return len(self.data)


@dataclass(frozen=True)
class UploadRequest:
    """
    Everything the transport needs for one POST.

    Attributes:
        file: File to upload
        url: Destination, ``{base_api_url}/{api}``
        auth_token: Short-lived bearer credential
    """
    file: UploadFile
    url: str
    auth_token: str = field(repr=False)

    @property
    def authorization_header(self) -> str:
        """Value of the ``authorization`` header."""
        return f"bearer {self.auth_token}"

    def form_fields(self):
        """
        Multipart fields in wire order.

        Returns:
            List of (field name, value) tuples, ``file`` last
        """
        return [
            ('name', self.file.name),
            ('description', self.file.name),
            ('file', (self.file.name, self.file.data, self.file.content_type)),
        ]


@dataclass(frozen=True)
class ProgressEvent:
    """
    Progress signal emitted by a transport while the body is sent.

    Attributes:
        loaded: Bytes sent so far
        total: Expected total bytes, None when unknown
        length_computable: True when ``total`` is meaningful
    """
    loaded: int
    total: Optional[int] = None
    length_computable: bool = False


@dataclass
class UploadProgress:
    """
    Upload progress of one attempt.

    Attributes:
        loaded: Bytes transferred so far
        total: Expected total bytes, known only for length-computable events
    """
    loaded: int = 0
    total: Optional[int] = None

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if not self.total:
            return 0.0
        return (self.loaded / self.total) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True once every byte has been sent."""
        return self.total is not None and self.loaded >= self.total


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.

    Attributes:
        default: URL of the uploaded image
        response: Raw JSON body returned by the server
    """
    default: str
    response: Dict[str, Any] = field(default_factory=dict, compare=False)

    def to_dict(self) -> Dict[str, str]:
        """Shape the host editor expects from an upload adapter."""
        return {'default': self.default}


@dataclass(frozen=True)
class Loaded:
    """The server answered; ``response`` is the parsed JSON body or None."""
    response: Any = None


@dataclass(frozen=True)
class Errored:
    """The request failed at the network level."""
    error: Optional[BaseException] = None


@dataclass(frozen=True)
class Aborted:
    """The request was cancelled with ``abort()``."""
    pass


TransportOutcome = Union[Loaded, Errored, Aborted]
