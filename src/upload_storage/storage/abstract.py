"""Abstract base class for upload storage backends."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Uploader(Protocol):
    """
    What a storage backend reads from the uploader it is attached to.

    Uploaders may additionally define ``grid_fs_access_url`` (public base
    path for stored files) and ``database_for_mounted_file`` (namespace
    override); both are optional and looked up with ``getattr``.
    """

    model: Any
    mounted_as: str

    def store_path(self, identifier: Optional[str] = None) -> str:
        ...


class AbstractStorage(ABC):
    """
    Abstract base for upload storage backends.

    A storage is created per uploader and turns the uploader's
    store paths into backend-specific file handles.
    """

    def __init__(self, uploader: Uploader):
        self.uploader = uploader

    @property
    def identifier(self) -> Optional[str]:
        """Return the identifier persisted on the model for this upload."""
        return getattr(self.uploader, "filename", None)

    @abstractmethod
    def store(self, file):
        """
        Persist a file at the uploader's store path.

        Args:
            file: Raw bytes or a file-like object to store

        Returns:
            A file handle for the stored file
        """
        pass

    @abstractmethod
    def retrieve(self, identifier: str):
        """
        Build a handle for a previously stored file.

        Args:
            identifier: Identifier previously returned by ``identifier``

        Returns:
            A file handle; the backend is not queried until it is used
        """
        pass
