from django.urls import path

from marketplace.catalog.api.views import (
    GigDetailView,
    GigImageUploadView,
    GigListCreateView,
    GigReviewsView,
    GigToggleStatusView,
    ReviewCreateView,
    SellerGigsView,
)

app_name = "marketplace"

urlpatterns = [
    # Gigs
    path("gigs", GigListCreateView.as_view(), name="gig-list"),
    # Before the detail routes so "seller" is never read as a gig id
    path("gigs/seller/<str:user_id>", SellerGigsView.as_view(), name="seller-gigs"),
    path("gigs/<str:gig_id>", GigDetailView.as_view(), name="gig-detail"),
    path("gigs/<str:gig_id>/toggle-status", GigToggleStatusView.as_view(), name="gig-toggle-status"),
    path("gigs/<str:gig_id>/image", GigImageUploadView.as_view(), name="gig-image"),
    # Reviews
    path("reviews", ReviewCreateView.as_view(), name="review-create"),
    path("reviews/<str:gig_id>", GigReviewsView.as_view(), name="gig-reviews"),
]
