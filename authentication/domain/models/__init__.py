from .seller_profile import SellerProfile
from .user import CustomUser

__all__ = [
    "CustomUser",
    "SellerProfile",
]
