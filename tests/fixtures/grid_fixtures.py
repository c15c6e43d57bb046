"""
GridFS Test Fixtures.
Provides an in-memory grid and sample uploaders for storage tests.
"""

from typing import Dict, Optional, Tuple

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MemoryGridFile:
    """Stored file held by MemoryGrid"""

    def __init__(self, grid: "MemoryGrid", namespace: str, path: str, data: bytes, content_type: str):
        self._grid = grid
        self.namespace = namespace
        self.filename = path
        self.data = data
        self.content_type = content_type
        self.upload_date = None

    @property
    def length(self) -> int:
        return len(self.data)


class MemoryGrid:
    """In-memory stand-in for database.grid_fs.GridFSAdapter"""

    def __init__(self):
        self.files: Dict[Tuple[str, str], MemoryGridFile] = {}
        self.lookups = 0
        self.error: Optional[Exception] = None

    def find(self, path: str, namespace: str) -> Optional[MemoryGridFile]:
        self.lookups += 1
        return self.files.get((namespace, path))

    def put(self, path: str, file, namespace: str, content_type: Optional[str] = None) -> MemoryGridFile:
        if self.error is not None:
            raise self.error
        data = file if isinstance(file, (bytes, bytearray)) else file.read()
        content_type = content_type or getattr(file, "content_type", None) or DEFAULT_CONTENT_TYPE
        stored = MemoryGridFile(self, namespace, path, bytes(data), content_type)
        self.files[(namespace, path)] = stored
        return stored

    def delete(self, path: str, namespace: str) -> bool:
        return self.files.pop((namespace, path), None) is not None

    def exists(self, path: str, namespace: str) -> bool:
        return (namespace, path) in self.files


# ==========================================
# Models
# ==========================================

class User:
    pass


class AdminAccount(User):
    pass


class Admin:
    class User:
        pass


# ==========================================
# Uploaders
# ==========================================

class SampleUploader:
    """Minimal uploader exposing what the GridFS storage reads"""

    def __init__(self, model=None, mounted_as: str = "avatar", filename: str = "photo.png",
                 grid_fs_access_url: Optional[str] = None):
        self.model = model if model is not None else User()
        self.mounted_as = mounted_as
        self.filename = filename
        self.grid_fs_access_url = grid_fs_access_url

    def store_path(self, identifier: Optional[str] = None) -> str:
        return f"uploads/{self.mounted_as}/{identifier or self.filename}"


class SharedUploader(SampleUploader):
    """Uploader that keeps every model's files in one namespace"""

    def database_for_mounted_file(self) -> str:
        return "shared_uploads"


class NamedFile:
    """File-like upload carrying its own content type"""

    def __init__(self, data: bytes, content_type: str):
        self._data = data
        self.content_type = content_type

    def read(self) -> bytes:
        return self._data
