from .auth_views import LoginAPIView, LogoutAPIView, RegisterAPIView
from .user_views import BecomeSellerView, CurrentUserView, MySellerProfileView, SellerProfileDetailView


__all__ = [
    "LoginAPIView",
    "LogoutAPIView",
    "RegisterAPIView",
    "CurrentUserView",
    "BecomeSellerView",
    "SellerProfileDetailView",
    "MySellerProfileView",
]
