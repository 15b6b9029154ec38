from .auth_serializers import SellerProfileSerializer, SellerUserSummarySerializer, UserSerializer


__all__ = [
    "UserSerializer",
    "SellerProfileSerializer",
    "SellerUserSummarySerializer",
]
