from .catalog_service import CatalogService
from .reputation_service import ReputationService
from .search_service import GigQuery, SearchPage, SearchService, compose_query


__all__ = [
    "CatalogService",
    "ReputationService",
    "SearchService",
    "GigQuery",
    "SearchPage",
    "compose_query",
]
