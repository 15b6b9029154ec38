"""
Marketplace Service Layer

Business logic for gigs and reviews, organized into domain services that
return ServiceResult instead of raising for expected failures.

Services:
- CatalogService: Gig CRUD, status toggling and image upload
- SearchService: Gig search, filtering and pagination
- ReputationService: Reviews and rating aggregates

Usage:
    from marketplace.services import SearchService

    result = SearchService().search({"category": "Design"})

    if result.ok:
        gigs = result.value.items
    else:
        error = result.error
"""

from marketplace.catalog.domain.services import CatalogService, ReputationService, SearchService
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok

__all__ = [
    # Base classes
    "BaseService",
    "ServiceResult",
    # Helper functions
    "service_ok",
    "service_err",
    # Error codes
    "ErrorCodes",
    # Services
    "CatalogService",
    "ReputationService",
    "SearchService",
]
