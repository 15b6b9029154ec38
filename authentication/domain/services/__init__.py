"""
Business logic services for authentication.

Services encapsulate business rules and return ServiceResult values; they
never depend on the HTTP layer.
"""

from .account_service import AccountService
from .credential_service import CredentialService
from .seller_service import SellerService
from .session_service import SessionService


__all__ = [
    "AccountService",
    "CredentialService",
    "SellerService",
    "SessionService",
]
