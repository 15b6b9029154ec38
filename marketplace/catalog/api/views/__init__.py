from .gig_views import (
    GigDetailView,
    GigImageUploadView,
    GigListCreateView,
    GigToggleStatusView,
    SellerGigsView,
)
from .review_views import GigReviewsView, ReviewCreateView


__all__ = [
    "GigListCreateView",
    "GigDetailView",
    "GigToggleStatusView",
    "GigImageUploadView",
    "SellerGigsView",
    "ReviewCreateView",
    "GigReviewsView",
]
