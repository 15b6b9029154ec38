"""
Django Storage Adapter
======================

ImageStore backed by a Django storage backend. Uses the project's default
storage (local filesystem under MEDIA_ROOT unless STORAGES says otherwise).
"""

import logging
from typing import BinaryIO

from django.core.files import File
from django.core.files.storage import Storage, default_storage

from .interface import ImageStore, ImageStoreException, StoredImage

logger = logging.getLogger(__name__)


class DjangoStorageImageStore(ImageStore):
    def __init__(self, storage: Storage = None):
        self.storage = storage or default_storage

    def upload(self, file: BinaryIO, path: str, content_type: str) -> StoredImage:
        try:
            saved_path = self.storage.save(path, file if isinstance(file, File) else File(file, name=path))
            size = self.storage.size(saved_path)
            url = self.storage.url(saved_path)

            logger.info(f"Successfully stored image: {saved_path}")
            return StoredImage(key=saved_path, url=url, size=size, content_type=content_type)

        except (OSError, ValueError) as e:
            logger.error(f"Failed to store image: {path}. Error: {str(e)}")
            raise ImageStoreException(f"Image upload failed: {str(e)}") from e

    def delete(self, key: str) -> bool:
        try:
            if not self.storage.exists(key):
                logger.warning(f"Image not found, cannot delete: {key}")
                return False
            self.storage.delete(key)
            logger.info(f"Successfully deleted image: {key}")
            return True

        except OSError as e:
            logger.error(f"Failed to delete image: {key}. Error: {str(e)}")
            raise ImageStoreException(f"Image deletion failed: {str(e)}") from e
