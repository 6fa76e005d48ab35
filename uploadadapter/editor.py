"""
Editor host collaborators.

Minimal models of the editor objects the upload adapter plugs into: the
configuration store, the plugin registry, the file repository that owns
upload adapter creation, and the per-file loaders it hands out.
"""
import inspect
import uuid
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Union

from .core.exceptions import UploadAborted, UploadError
from .core.logging import get_logger
from .core.upload import UploadFile, UploadResult

logger = get_logger('uploadadapter.editor')

AdapterFactory = Callable[['FileLoader'], Any]
Plugin = Callable[['Editor'], Any]


class EditorConfig:
    """Configuration store with dotted-path lookups."""

    def __init__(self, config: Optional[Mapping[str, Any]] = None):
        self._config: Dict[str, Any] = dict(config or {})

    def get(self, name: str, default: Any = None) -> Any:
        """
        Read a value, e.g. ``get('custom_image_upload.api')``.

        Returns:
            The stored value, or ``default`` if any path segment is missing
        """
        value: Any = self._config
        for part in name.split('.'):
            if not isinstance(value, Mapping) or part not in value:
                return default
            value = value[part]
        return value

    def set(self, name: str, value: Any) -> None:
        """Store a value, creating intermediate mappings as needed."""
        parts = name.split('.')
        target = self._config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value


class FileLoader:
    """
    Tracks one file through its upload.

    The adapter reads ``file`` and writes ``upload_total``/``uploaded``;
    the host reads the progress fields and ``status``.
    """

    def __init__(
        self,
        file: Union[UploadFile, Awaitable[UploadFile]],
        adapter_factory: AdapterFactory
    ):
        """
        Args:
            file: The payload, or an awaitable resolving to it
            adapter_factory: Called once with this loader to build its adapter
        """
        self.id = uuid.uuid4().hex
        self.status = 'idle'
        self.upload_total: Optional[int] = None
        self.uploaded = 0
        self.upload_response: Optional[Dict[str, str]] = None
        self.error: Optional[Exception] = None
        self._file_source = file
        self._file: Optional[UploadFile] = file if isinstance(file, UploadFile) else None
        self._adapter = adapter_factory(self)

    @property
    def adapter(self) -> Any:
        return self._adapter

    @property
    def file(self) -> Awaitable[UploadFile]:
        """Awaitable resolving to the file being uploaded."""
        return self._read_file()

    async def _read_file(self) -> UploadFile:
        if self._file is None:
            if inspect.isawaitable(self._file_source):
                self._file = await self._file_source
            else:
                self._file = self._file_source
        return self._file

    @property
    def uploaded_percent(self) -> float:
        if not self.upload_total:
            return 0.0
        return self.uploaded / self.upload_total * 100

    async def upload(self) -> Dict[str, str]:
        """
        Upload the file through the adapter.

        Returns:
            The adapter's result, e.g. ``{'default': url}``

        Raises:
            UploadError: Whatever the adapter raised; ``status`` is set to
                ``aborted`` or ``error`` first. Any other exception, e.g. from
                reading the file, also sets ``error`` and is re-raised.
        """
        if self.status != 'idle':
            raise RuntimeError(f"Cannot upload a loader in '{self.status}' state")

        self.status = 'uploading'
        try:
            result: UploadResult = await self._adapter.upload()
        except UploadAborted:
            self.status = 'aborted'
            raise
        except UploadError as e:
            self.status = 'error'
            self.error = e
            raise
        except Exception as e:
            logger.error(f"Loader {self.id} failed: {e}")
            self.status = 'error'
            self.error = e
            raise

        self.upload_response = result.to_dict()
        self.status = 'idle'
        return self.upload_response

    def abort(self) -> None:
        """Abort the upload if one is running."""
        if self.status == 'uploading':
            self._adapter.abort()


class FileRepository:
    """
    Creates file loaders backed by the registered upload adapter.

    Plugins assign ``create_upload_adapter``; until they do, no loaders
    can be created.
    """

    plugin_name = 'FileRepository'

    def __init__(self):
        self.create_upload_adapter: Optional[AdapterFactory] = None
        self.loaders: List[FileLoader] = []

    def create_loader(
        self,
        file: Union[UploadFile, Awaitable[UploadFile]]
    ) -> Optional[FileLoader]:
        """
        Create a loader for a file.

        Returns:
            The new loader, or None when no upload adapter is registered
        """
        if self.create_upload_adapter is None:
            logger.error(
                "filerepository-no-upload-adapter: Upload adapter is not defined. "
                "Configure the image upload plugin."
            )
            return None

        loader = FileLoader(file, self.create_upload_adapter)
        self.loaders.append(loader)
        return loader

    def get_loader(self, loader_id: str) -> Optional[FileLoader]:
        for loader in self.loaders:
            if loader.id == loader_id:
                return loader
        return None

    def destroy_loader(self, loader: FileLoader) -> None:
        """Abort and forget a loader."""
        loader.abort()
        if loader in self.loaders:
            self.loaders.remove(loader)

    @property
    def uploaded(self) -> int:
        return sum(loader.uploaded for loader in self.loaders)

    @property
    def upload_total(self) -> Optional[int]:
        totals = [loader.upload_total for loader in self.loaders]
        if not totals or any(t is None for t in totals):
            return None
        return sum(totals)

    @property
    def uploaded_percent(self) -> float:
        total = self.upload_total
        if not total:
            return 0.0
        return self.uploaded / total * 100


class Editor:
    """
    Editor host: configuration plus plugin registry.

    Example:
        >>> editor = Editor(
        ...     config={'custom_image_upload': {...}},
        ...     plugins=[custom_image_upload_adapter_plugin],
        ... )
        >>> loader = editor.plugins.get('FileRepository').create_loader(file)
    """

    def __init__(
        self,
        config: Optional[Mapping[str, Any]] = None,
        plugins: Iterable[Plugin] = ()
    ):
        self.config = EditorConfig(config)
        self.plugins = PluginCollection()
        self.plugins.add(FileRepository.plugin_name, FileRepository())
        for plugin in plugins:
            plugin(self)


class PluginCollection:
    """Named plugin instances."""

    def __init__(self):
        self._plugins: Dict[str, Any] = {}

    def add(self, name: str, plugin: Any) -> None:
        self._plugins[name] = plugin

    def get(self, name: str) -> Any:
        """
        Raises:
            KeyError: If no plugin is registered under ``name``
        """
        try:
            return self._plugins[name]
        except KeyError:
            raise KeyError(f"Plugin not loaded: {name}") from None

    def has(self, name: str) -> bool:
        return name in self._plugins
