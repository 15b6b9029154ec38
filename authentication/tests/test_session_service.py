from datetime import timedelta

import pytest
from rest_framework_simplejwt.tokens import AccessToken

from authentication.domain.services import SessionService
from marketplace.tests.factories import UserFactory
from utils.service_base import ErrorCodes


@pytest.mark.django_db
@pytest.mark.unit
class TestSessionService:
    def test_issue_then_resolve(self):
        user = UserFactory()
        service = SessionService()

        result = service.resolve(service.issue(user))

        assert result.ok
        assert str(result.value) == str(user.pk)

    @pytest.mark.parametrize("token", [None, "", "not-a-token", "a.b.c", 42])
    def test_garbage_is_unauthenticated(self, token):
        result = SessionService().resolve(token)
        assert result.error == ErrorCodes.UNAUTHENTICATED

    def test_expired_token(self):
        token = AccessToken.for_user(UserFactory())
        token.set_exp(lifetime=-timedelta(seconds=1))

        assert SessionService().resolve(str(token)).error == ErrorCodes.UNAUTHENTICATED

    def test_tampered_token(self):
        token = SessionService().issue(UserFactory())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert SessionService().resolve(tampered).error == ErrorCodes.UNAUTHENTICATED
