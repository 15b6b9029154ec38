"""
In-Memory Image Store
=====================

Keeps uploaded images in a dict. Used by the test settings.
"""

import logging
import threading
from typing import BinaryIO, Dict

from .interface import ImageStore, ImageStoreException, StoredImage

logger = logging.getLogger(__name__)


class InMemoryImageStore(ImageStore):
    def __init__(self, base_url: str = "memory://images/"):
        self.base_url = base_url
        self._files: Dict[str, bytes] = {}
        self._lock = threading.Lock()

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StoredImage:
        content = file.read()
        if not isinstance(content, bytes):
            raise ImageStoreException("Image content must be bytes")
        with self._lock:
            key = path
            suffix = 1
            while key in self._files:
                stem, dot, ext = path.rpartition(".")
                key = f"{stem}_{suffix}{dot}{ext}" if dot else f"{path}_{suffix}"
                suffix += 1
            self._files[key] = content
        logger.debug(f"Stored in-memory image {key} ({len(content)} bytes)")
        return StoredImage(key=key, url=self.base_url + key, size=len(content), content_type=content_type)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._files.pop(key, None) is not None

    def read(self, key: str) -> bytes:
        return self._files[key]
