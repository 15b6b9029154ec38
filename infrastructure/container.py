"""
Dependency Injection Container
================================

Simple service locator pattern for the domain services and the image store.
Services are stateless, so one cached instance per process is shared by all
requests; the database stays the only source of truth.

Usage:
    from infrastructure.container import container

    search = container.search_service()
    store = container.image_store()
"""

import logging
from typing import Optional

from .storage import ImageStore, ImageStoreFactory

logger = logging.getLogger(__name__)


class ServiceContainer:
    """
    Service container for infrastructure and domain service instances.

    Implements lazy initialization and caching of service instances.
    Singleton: every ``ServiceContainer()`` call returns the same object.
    """

    _instance: Optional["ServiceContainer"] = None
    _initialized: bool = False

    def __new__(cls):
        """Ensure only one instance exists (singleton pattern)."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize container (only once)."""
        if not self._initialized:
            self._image_store: Optional[ImageStore] = None
            self._services = {}
            self._initialized = True
            logger.info("Service container initialized")

    def image_store(self, backend: Optional[str] = None) -> ImageStore:
        """
        Get the image store.

        Args:
            backend: 'local' or 'memory'. If None, uses INFRASTRUCTURE["IMAGE_STORE_BACKEND"].
        """
        if self._image_store is None or backend is not None:
            self._image_store = ImageStoreFactory.create(backend)
            logger.debug(f"Created image store: {type(self._image_store).__name__}")
        return self._image_store

    def _service(self, name, build):
        if name not in self._services:
            self._services[name] = build()
            logger.debug(f"Created {name}")
        return self._services[name]

    def credential_service(self):
        """Get CredentialService instance."""
        from authentication.domain.services import CredentialService

        return self._service("credential_service", CredentialService)

    def session_service(self):
        """Get SessionService instance."""
        from authentication.domain.services import SessionService

        return self._service("session_service", SessionService)

    def seller_service(self):
        """Get SellerService instance."""
        from authentication.domain.services import SellerService

        return self._service("seller_service", SellerService)

    def account_service(self):
        """Get AccountService instance."""
        from authentication.domain.services import AccountService

        return self._service("account_service", AccountService)

    def search_service(self):
        """Get SearchService instance."""
        from marketplace.services import SearchService

        return self._service("search_service", SearchService)

    def reputation_service(self):
        """Get ReputationService instance."""
        from marketplace.services import ReputationService

        return self._service("reputation_service", ReputationService)

    def catalog_service(self):
        """Get CatalogService instance (depends on the image store)."""
        from marketplace.services import CatalogService

        return self._service("catalog_service", lambda: CatalogService(image_store=self.image_store()))

    def reset(self):
        """
        Reset all cached service instances.

        Useful for testing or when switching between environments.
        """
        self._image_store = None
        self._services = {}
        logger.info("Service container reset")

    def configure_for_testing(self):
        """Configure container with the in-memory image store."""
        self.reset()
        self._image_store = ImageStoreFactory.create("memory")
        logger.info("Service container configured for testing")


# Global singleton instance
container = ServiceContainer()
