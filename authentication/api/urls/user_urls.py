from django.urls import path

from authentication.api.views import BecomeSellerView, CurrentUserView, MySellerProfileView, SellerProfileDetailView


app_name = "users"

urlpatterns = [
    path("me", CurrentUserView.as_view(), name="me"),
    path("become-seller", BecomeSellerView.as_view(), name="become-seller"),
    path("sellers/me", MySellerProfileView.as_view(), name="seller-profile-me"),
    path("sellers/<str:user_id>", SellerProfileDetailView.as_view(), name="seller-profile-detail"),
]
