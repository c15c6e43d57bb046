"""
Storage backends for uploaded files.

Provides the abstract storage interface and the MongoDB GridFS backend.
"""

from upload_storage.storage.abstract import AbstractStorage, Uploader
from upload_storage.storage.grid_fs import GridFSFile, GridFSStorage

__all__ = [
    "AbstractStorage",
    "GridFSFile",
    "GridFSStorage",
    "Uploader",
]
