"""
DRF authentication backed by SessionService.

The session token is read from ``Authorization: Bearer <token>`` first and
then from the HTTP-only session cookie; both sources are validated the same
way.
"""

import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication
from rest_framework_simplejwt.settings import api_settings

from authentication.domain.services.session_service import UNAUTHENTICATED_MESSAGE, SessionService


logger = logging.getLogger(__name__)
User = get_user_model()


def session_cookie_name():
    return getattr(settings, "JWT_COOKIE_NAME", "jwt")


def _cookie_options():
    return {
        "httponly": True,
        "secure": getattr(settings, "JWT_COOKIE_SECURE", True),
        "samesite": getattr(settings, "JWT_COOKIE_SAMESITE", "Strict"),
    }


def set_session_cookie(response, token):
    """Attach the session cookie; it lives exactly as long as the token."""
    max_age = int(api_settings.ACCESS_TOKEN_LIFETIME.total_seconds())
    response.set_cookie(session_cookie_name(), token, max_age=max_age, **_cookie_options())
    return response


def clear_session_cookie(response):
    """Overwrite the session cookie with an empty, already expired value."""
    response.set_cookie(
        session_cookie_name(),
        "",
        max_age=0,
        expires="Thu, 01 Jan 1970 00:00:00 GMT",
        **_cookie_options(),
    )
    return response


class CookieOrBearerJWTAuthentication(BaseAuthentication):
    keyword = "Bearer"

    def __init__(self, session_service=None):
        self.session_service = session_service or SessionService()

    def get_raw_token(self, request):
        header = request.META.get("HTTP_AUTHORIZATION", "")
        if header:
            parts = header.split()
            if len(parts) == 2 and parts[0] == self.keyword:
                return parts[1]
            if parts and parts[0] == self.keyword:
                raise exceptions.AuthenticationFailed(UNAUTHENTICATED_MESSAGE)
        return request.COOKIES.get(session_cookie_name()) or None

    def authenticate(self, request):
        raw_token = self.get_raw_token(request)
        if raw_token is None:
            return None

        result = self.session_service.resolve(raw_token)
        if not result.ok:
            raise exceptions.AuthenticationFailed(UNAUTHENTICATED_MESSAGE)

        try:
            user = User.objects.filter(pk=result.value).first()
        except (DjangoValidationError, ValueError):
            user = None
        if user is None or not user.is_active:
            logger.info("Session token references an unknown or inactive user")
            raise exceptions.AuthenticationFailed(UNAUTHENTICATED_MESSAGE)

        return user, raw_token

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'
