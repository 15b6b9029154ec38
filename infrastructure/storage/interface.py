"""
Image Store Interface
=====================

Abstract base class defining the contract for gig image hosting.
Only the operations the marketplace needs are part of the contract.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import BinaryIO


@dataclass
class StoredImage:
    """
    Represents a stored image with its metadata.

    Attributes:
        key: Unique identifier/path for the image
        url: Public URL to access the image
        size: File size in bytes
        content_type: MIME type of the image
    """

    key: str
    url: str
    size: int
    content_type: str


class ImageStore(ABC):
    """
    Abstract interface for image storage.

    Concrete implementations:
        - DjangoStorageImageStore: any Django storage backend (filesystem by default)
        - InMemoryImageStore: in-memory storage for testing
    """

    @abstractmethod
    def upload(self, file: BinaryIO, path: str, content_type: str) -> StoredImage:
        """
        Upload an image.

        Args:
            file: Binary file object to upload
            path: Destination path/key in storage
            content_type: MIME type of the file

        Returns:
            StoredImage object with metadata

        Raises:
            ImageStoreException: If upload fails
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """
        Delete an image.

        Returns:
            True if deletion was successful, False if the key did not exist
        """
        pass


class ImageStoreException(Exception):
    """Base exception for image store operations."""

    pass
