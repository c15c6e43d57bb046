"""
GridFS storage backend for uploaded files.

Stores files in MongoDB GridFS. When the application already has a Mongo
connection the process-wide adapter from ``database.grid_fs`` is reused.
Configure a public base path to get URLs for stored files:

    GRID_FS_ACCESS_URL=/system/uploads

Documents are then served from::

    http://your-app.com/system/uploads/<document-identifier>
"""

import logging
from typing import Optional

import inflection

from database.grid_fs import GridFSAdapter, GridFile, get_grid
from upload_storage.settings import get_settings
from upload_storage.storage.abstract import AbstractStorage, Uploader

logger = logging.getLogger(__name__)


def join_url(base: str, path: str) -> str:
    """Join a URL base and a path with exactly one slash between them."""
    return base.rstrip("/") + "/" + path.lstrip("/")


class GridFSFile:
    """
    A file stored in GridFS under the uploader's namespace.

    The GridFS reference is looked up on first use and reused until the
    next write. Instances are not safe to share between threads.
    """

    # Large-object store shared by every file; None means the process-wide adapter
    grid: Optional[GridFSAdapter] = None

    def __init__(self, uploader: Uploader, path: str):
        self.path = path
        self.uploader = uploader
        self._grid_file: Optional[GridFile] = None

    def __repr__(self):
        return f"<GridFSFile path={self.path!r} namespace={self.database_for_mounted_file!r}>"

    @property
    def database_for_mounted_file(self) -> str:
        """
        Namespace the file is stored under.

        Inferred from the model class name and the name the uploader is
        mounted as, e.g. ``User`` mounted as ``avatar`` gives
        ``user_avatars``. Subclasses use their own class name; to group
        them together, define ``database_for_mounted_file`` on the uploader.
        """
        override = getattr(self.uploader, "database_for_mounted_file", None)
        if override is not None:
            return override() if callable(override) else override

        # classes defined inside a function are named from below the last <locals>
        model_name = "".join(
            type(self.uploader.model).__qualname__.rpartition("<locals>.")[2].split(".")
        )
        return inflection.underscore(model_name) + "_" + inflection.tableize(str(self.uploader.mounted_as))

    def url(self) -> Optional[str]:
        access_url = getattr(self.uploader, "grid_fs_access_url", None) or get_settings().grid_fs_access_url
        if not access_url:
            return None
        return join_url(access_url, self.path)

    @property
    def grid_file(self) -> Optional[GridFile]:
        if self._grid_file is None:
            self._grid_file = self._grid().find(self.path, self.database_for_mounted_file)
        return self._grid_file

    def write(self, file) -> "GridFSFile":
        try:
            self._grid().put(self.path, file, self.database_for_mounted_file)
        finally:
            self._grid_file = None
        return self

    def read(self) -> Optional[bytes]:
        grid_file = self.grid_file
        return grid_file.data if grid_file else None

    def delete(self) -> None:
        if self.grid_file:
            self._grid().delete(self.path, self.database_for_mounted_file)
            self._grid_file = None

    @property
    def content_type(self) -> Optional[str]:
        grid_file = self.grid_file
        return grid_file.content_type if grid_file else None

    @property
    def length(self) -> Optional[int]:
        grid_file = self.grid_file
        return grid_file.length if grid_file else None

    content_length = length
    file_length = length
    size = length

    def _grid(self) -> GridFSAdapter:
        grid = type(self).grid
        return grid if grid is not None else get_grid()


class GridFSStorage(AbstractStorage):
    """Store uploaded files in MongoDB GridFS."""

    def store(self, file) -> GridFSFile:
        """
        Store the file in GridFS.

        Args:
            file: Raw bytes or a file-like object

        Returns:
            GridFSFile for the stored file
        """
        stored = GridFSFile(self.uploader, self.uploader.store_path())
        logger.info(f"Storing upload at {stored.path} in namespace {stored.database_for_mounted_file}")
        return stored.write(file)

    def retrieve(self, identifier: str) -> GridFSFile:
        """
        Retrieve the file from GridFS.

        Args:
            identifier: The filename of the file

        Returns:
            GridFSFile for the stored file
        """
        return GridFSFile(self.uploader, self.uploader.store_path(identifier))
