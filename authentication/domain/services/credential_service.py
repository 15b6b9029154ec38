"""
CredentialService - registration and password verification.

Passwords are hashed with Django's configured password hashers and are never
stored or logged in clear text. Login failures are indistinguishable: an
unknown email and a wrong password produce the same error after the same
amount of hashing work.
"""

from django.contrib.auth import get_user_model
from django.contrib.auth.hashers import make_password
from django.db import DatabaseError, IntegrityError, transaction
from django.utils import timezone

from authentication.domain.validators import validate_registration
from authentication.infra.observability import metrics
from utils.logging_utils import mask_value
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.validators import InvalidField, invalid_field_result


User = get_user_model()

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


class CredentialService(BaseService):
    """
    Service owning user credentials.

    Responsibilities:
    - Validate and register new accounts (email stored lower-cased)
    - Map duplicate email/username to ``duplicate_identity`` (pre-check and unique constraint)
    - Verify email/password pairs in constant work
    """

    @BaseService.log_performance
    def register(self, full_name, username, email, raw_password) -> ServiceResult:
        """
        Create a buyer account.

        Returns:
            ServiceResult with the new user, or one of
            ``validation_failed`` / ``duplicate_identity`` / ``store_unavailable``
        """
        try:
            cleaned = validate_registration(full_name, username, email, raw_password)
        except InvalidField as exc:
            metrics.registration_total.labels(status="failed").inc()
            metrics.registration_failed.labels(reason=ErrorCodes.VALIDATION_FAILED).inc()
            return invalid_field_result(exc)

        try:
            if User.objects.filter(email=cleaned["email"]).exists() or User.objects.filter(
                username=cleaned["username"]
            ).exists():
                return self._duplicate(cleaned["email"])

            with transaction.atomic():
                user = User.objects.create_user(
                    username=cleaned["username"],
                    email=cleaned["email"],
                    password=cleaned["password"],
                    full_name=cleaned["full_name"],
                )
        except IntegrityError:
            # Lost a race against a concurrent registration with the same identity
            return self._duplicate(cleaned["email"])
        except DatabaseError as exc:
            metrics.registration_total.labels(status="failed").inc()
            metrics.registration_failed.labels(reason=ErrorCodes.STORE_UNAVAILABLE).inc()
            return self.store_unavailable("register", exc)

        metrics.registration_total.labels(status="success").inc()
        self.logger.info(f"Registered user {user.id} ({mask_value(user.email)})")
        return service_ok(user)

    def _duplicate(self, email) -> ServiceResult:
        metrics.registration_total.labels(status="failed").inc()
        metrics.registration_failed.labels(reason=ErrorCodes.DUPLICATE_IDENTITY).inc()
        self.logger.info(f"Registration rejected for {mask_value(email)}: identity already taken")
        return service_err(ErrorCodes.DUPLICATE_IDENTITY, "Email or username already exists")

    @BaseService.log_performance
    def verify(self, email, raw_password) -> ServiceResult:
        """
        Check an email/password pair and record the login time on success.

        Unknown email and wrong password return the same ``invalid_credentials``
        error; both paths run exactly one password hash.
        """
        with metrics.login_duration.time():
            normalized = (email or "").strip().lower() if isinstance(email, str) else ""
            raw_password = raw_password if isinstance(raw_password, str) else ""

            try:
                user = User.objects.filter(email=normalized).first() if normalized else None
            except DatabaseError as exc:
                return self.store_unavailable("verify", exc)

            if user is None:
                # Same hashing cost as a real check
                make_password(raw_password)
                return self._invalid(normalized)

            if not user.check_password(raw_password) or not user.is_active:
                return self._invalid(normalized)

            try:
                user.last_login = timezone.now()
                user.save(update_fields=["last_login"])
            except DatabaseError as exc:
                return self.store_unavailable("verify", exc)

        metrics.login_total.labels(status="success").inc()
        self.logger.info(f"User {user.id} authenticated")
        return service_ok(user)

    def _invalid(self, email) -> ServiceResult:
        metrics.login_total.labels(status="failed").inc()
        self.logger.info(f"Failed login for {mask_value(email) if email else '<empty>'}")
        return service_err(ErrorCodes.INVALID_CREDENTIALS, INVALID_CREDENTIALS_MESSAGE)
