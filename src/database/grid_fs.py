"""
MongoDB GridFS adapter for large-object storage.
Files are addressed by (namespace, path): the namespace selects the MongoDB
database and the path is stored as the GridFS filename.
"""

import logging
import mimetypes
from datetime import datetime
from typing import Any, Dict, Optional, Union, BinaryIO

from gridfs import GridFS
from gridfs.errors import NoFile
from pymongo import MongoClient
from pymongo.errors import ConnectionFailure

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class GridFile:
    """A single stored GridFS file"""

    def __init__(self, grid_out):
        self._grid_out = grid_out

    @property
    def id(self):
        return self._grid_out._id

    @property
    def filename(self) -> str:
        return self._grid_out.filename

    @property
    def upload_date(self) -> Optional[datetime]:
        return self._grid_out.upload_date

    @property
    def data(self) -> bytes:
        # GridOut is a stream; rewind so repeated reads return the whole file
        self._grid_out.seek(0)
        return self._grid_out.read()

    @property
    def content_type(self) -> Optional[str]:
        metadata = self._grid_out.metadata or {}
        return metadata.get("contentType")

    @property
    def length(self) -> int:
        return self._grid_out.length


class GridFSAdapter:
    """MongoDB GridFS adapter for file-based storage operations"""

    def __init__(self, connection_string: Optional[str] = None, bucket_name: Optional[str] = None):
        if connection_string is None or bucket_name is None:
            from upload_storage.settings import get_settings
            settings = get_settings()
            connection_string = connection_string or settings.mongodb_uri
            bucket_name = bucket_name or settings.grid_fs_bucket

        if not connection_string:
            raise ValueError("MongoDB connection string required. Set MONGODB_URI environment variable or pass connection_string")

        self.connection_string = connection_string
        self.bucket_name = bucket_name
        self.client = None
        self._buckets: Dict[str, GridFS] = {}
        self._connect()

    def _connect(self) -> None:
        """Establish MongoDB connection"""
        try:
            self.client = MongoClient(self.connection_string)
            self.client.admin.command('ping')
            logger.info(f"Connected to MongoDB for GridFS bucket: {self.bucket_name}")

        except ConnectionFailure as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    def _fs(self, namespace: str) -> GridFS:
        """Get the GridFS bucket for a namespace, creating it on first use"""
        if namespace not in self._buckets:
            self._buckets[namespace] = GridFS(self.client[namespace], collection=self.bucket_name)
        return self._buckets[namespace]

    @staticmethod
    def _resolve_content_type(path: str, file: Any, content_type: Optional[str]) -> str:
        if content_type:
            return content_type
        file_content_type = getattr(file, "content_type", None)
        if file_content_type:
            return file_content_type
        guessed, _ = mimetypes.guess_type(path)
        return guessed or DEFAULT_CONTENT_TYPE

    def find(self, path: str, namespace: str) -> Optional[GridFile]:
        """Get the latest version of a file, or None if it does not exist"""
        fs = self._fs(namespace)
        try:
            grid_out = fs.get_last_version(filename=path)
        except NoFile:
            return None
        except Exception as e:
            logger.error(f"Error reading {path} from GridFS namespace {namespace}: {e}")
            raise
        return GridFile(grid_out)

    def put(self, path: str, file: Union[bytes, bytearray, BinaryIO], namespace: str,
            content_type: Optional[str] = None) -> GridFile:
        """Store a file, replacing any previous versions at the same path"""
        fs = self._fs(namespace)
        # GridIn writes bytes or file-like objects; file-like uploads are streamed
        data = bytes(file) if isinstance(file, bytearray) else file
        resolved_type = self._resolve_content_type(path, file, content_type)

        try:
            file_id = fs.put(data, filename=path, metadata={"contentType": resolved_type})

            # previous versions go only once the new one is stored
            for previous in fs.find({"filename": path}):
                if previous._id != file_id:
                    fs.delete(previous._id)

            grid_file = GridFile(fs.get(file_id))
            logger.info(f"Stored {path} in GridFS namespace {namespace} ({grid_file.length} bytes, {resolved_type})")
            return grid_file

        except Exception as e:
            logger.error(f"Error storing {path} in GridFS namespace {namespace}: {e}")
            raise

    def delete(self, path: str, namespace: str) -> bool:
        """Delete every version of a file"""
        fs = self._fs(namespace)
        try:
            deleted = 0
            for grid_out in fs.find({"filename": path}):
                fs.delete(grid_out._id)
                deleted += 1

            if deleted:
                logger.info(f"Deleted {path} from GridFS namespace {namespace}")
            else:
                logger.warning(f"No file found to delete in GridFS namespace {namespace} at {path}")

            return deleted > 0

        except Exception as e:
            logger.error(f"Error deleting {path} from GridFS namespace {namespace}: {e}")
            raise

    def exists(self, path: str, namespace: str) -> bool:
        """Check if a file exists"""
        return self._fs(namespace).exists(filename=path)

    def close(self) -> None:
        """Close MongoDB connection"""
        if self.client:
            self.client.close()
            self._buckets.clear()
            logger.info("MongoDB connection closed")


# Global GridFS adapter instance
_grid = None

def get_grid() -> GridFSAdapter:
    """Get the process-wide GridFS adapter, connecting on first use"""
    global _grid
    if _grid is None:
        _grid = GridFSAdapter()
    return _grid

def reset_grid() -> None:
    """Close and forget the process-wide GridFS adapter"""
    global _grid
    if _grid is not None:
        _grid.close()
    _grid = None
