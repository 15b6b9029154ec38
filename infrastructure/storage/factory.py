"""
Image Store Factory
===================

Factory pattern for creating ImageStore instances from settings.
"""

import logging
from typing import Optional

from django.conf import settings

from .django_adapter import DjangoStorageImageStore
from .interface import ImageStore
from .memory_adapter import InMemoryImageStore

logger = logging.getLogger(__name__)


class ImageStoreFactory:
    """
    Factory for creating the configured image store.

    Usage:
        store = ImageStoreFactory.create()          # from settings
        store = ImageStoreFactory.create("memory")  # explicit backend
    """

    BACKENDS = {
        "local": DjangoStorageImageStore,
        "memory": InMemoryImageStore,
    }

    @classmethod
    def create(cls, backend: Optional[str] = None) -> ImageStore:
        backend = backend or getattr(settings, "INFRASTRUCTURE", {}).get("IMAGE_STORE_BACKEND", "local")
        try:
            store_class = cls.BACKENDS[backend]
        except KeyError:
            raise ValueError(
                f"Unknown image store backend '{backend}'. Expected one of {sorted(cls.BACKENDS)}"
            ) from None
        logger.info(f"Creating {backend} image store backend")
        return store_class()
