# Marketplace API Serializers

# Import response serializers for API documentation
from .response_serializers import (
    DeletedResponseSerializer,
    GigCreateRequestSerializer,
    GigImageRequestSerializer,
    GigListResponseSerializer,
    GigResponseSerializer,
    GigUpdateRequestSerializer,
    PaginationSerializer,
    ReviewCreateRequestSerializer,
    ReviewListResponseSerializer,
    ReviewResponseSerializer,
    SellerGigsResponseSerializer,
)


__all__ = [
    "PaginationSerializer",
    "DeletedResponseSerializer",
    "GigCreateRequestSerializer",
    "GigUpdateRequestSerializer",
    "GigImageRequestSerializer",
    "GigResponseSerializer",
    "GigListResponseSerializer",
    "SellerGigsResponseSerializer",
    "ReviewCreateRequestSerializer",
    "ReviewResponseSerializer",
    "ReviewListResponseSerializer",
]
