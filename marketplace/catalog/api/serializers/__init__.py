from .gig_serializers import GigSellerSerializer, GigSerializer
from .review_serializers import ReviewSerializer


__all__ = ["GigSellerSerializer", "GigSerializer", "ReviewSerializer"]
