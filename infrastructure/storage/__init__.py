"""
Image Storage Abstraction Layer
===============================

Provides a unified interface for hosting gig images.
"""

from .django_adapter import DjangoStorageImageStore
from .factory import ImageStoreFactory
from .interface import ImageStore, ImageStoreException, StoredImage
from .memory_adapter import InMemoryImageStore

__all__ = [
    "ImageStore",
    "StoredImage",
    "ImageStoreException",
    "DjangoStorageImageStore",
    "InMemoryImageStore",
    "ImageStoreFactory",
]
