"""
Service Container Tests
========================

Unit tests for dependency injection container.
"""

from django.test import TestCase, override_settings

from authentication.domain.services import AccountService, CredentialService, SellerService, SessionService
from infrastructure.container import ServiceContainer, container
from infrastructure.storage import DjangoStorageImageStore, ImageStore, InMemoryImageStore
from marketplace.services import CatalogService, ReputationService, SearchService


class ServiceContainerTest(TestCase):
    """Test ServiceContainer implementation."""

    def setUp(self):
        container.reset()

    def tearDown(self):
        container.reset()

    def test_container_is_singleton(self):
        container1 = ServiceContainer()
        container2 = ServiceContainer()

        self.assertIs(container1, container2)
        self.assertIs(container1, container)

    @override_settings(INFRASTRUCTURE={"IMAGE_STORE_BACKEND": "local"})
    def test_image_store_from_settings(self):
        store = container.image_store()

        self.assertIsInstance(store, ImageStore)
        self.assertIsInstance(store, DjangoStorageImageStore)
        # Second call should return cached instance
        self.assertIs(store, container.image_store())

    def test_explicit_backend_replaces_cached_store(self):
        local = container.image_store("local")
        memory = container.image_store("memory")

        self.assertIsInstance(local, DjangoStorageImageStore)
        self.assertIsInstance(memory, InMemoryImageStore)
        self.assertIs(container.image_store(), memory)

    def test_domain_services_are_cached(self):
        factories = {
            container.credential_service: CredentialService,
            container.session_service: SessionService,
            container.seller_service: SellerService,
            container.account_service: AccountService,
            container.search_service: SearchService,
            container.reputation_service: ReputationService,
            container.catalog_service: CatalogService,
        }
        for factory, service_class in factories.items():
            with self.subTest(service=service_class.__name__):
                service = factory()
                self.assertIsInstance(service, service_class)
                self.assertIs(service, factory())

    def test_catalog_service_uses_container_store(self):
        container.configure_for_testing()

        self.assertIs(container.catalog_service().image_store, container.image_store())

    def test_reset_drops_instances(self):
        service = container.search_service()
        container.reset()

        self.assertIsNot(service, container.search_service())

    def test_configure_for_testing(self):
        container.configure_for_testing()

        self.assertIsInstance(container.image_store(), InMemoryImageStore)
