"""
SessionService - stateless session tokens.

Sessions are signed simplejwt access tokens carrying the user id and an
expiry. There is no server-side session table and no revocation list: a token
stays valid until it expires, logout only clears the client cookie.
"""

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from authentication.infra.observability import metrics
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok


UNAUTHENTICATED_MESSAGE = "Authentication required"


class SessionService(BaseService):
    def issue(self, user) -> str:
        """Sign a session token for ``user``."""
        token = AccessToken.for_user(user)
        self.logger.debug(f"Issued session token for user {user.id}")
        return str(token)

    def resolve(self, token) -> ServiceResult:
        """
        Return the user id carried by ``token``.

        Missing, malformed, badly signed and expired tokens all produce the
        same ``unauthenticated`` error.
        """
        if not token or not isinstance(token, str):
            return service_err(ErrorCodes.UNAUTHENTICATED, UNAUTHENTICATED_MESSAGE)

        try:
            access = AccessToken(token)
            user_id = access[api_settings.USER_ID_CLAIM]
        except (TokenError, KeyError):
            metrics.jwt_validation_total.labels(status="invalid").inc()
            return service_err(ErrorCodes.UNAUTHENTICATED, UNAUTHENTICATED_MESSAGE)

        metrics.jwt_validation_total.labels(status="valid").inc()
        return service_ok(user_id)
