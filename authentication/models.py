from authentication.domain.models.seller_profile import SellerProfile
from authentication.domain.models.user import CustomUser


__all__ = [
    "CustomUser",
    "SellerProfile",
]
