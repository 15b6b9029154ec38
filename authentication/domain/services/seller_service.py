"""
SellerService - buyer to seller transition and seller profile upkeep.

Becoming a seller is one-way and happens at most once per user: the role flip
and the profile creation commit together under a row lock on the user, and the
one-profile-per-user constraint settles concurrent attempts.
"""

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

from authentication.domain.validators import validate_seller_changes, validate_seller_draft
from authentication.infra.observability import metrics
from authentication.models import SellerProfile
from utils.rbac import ROLE_SELLER, Action, PolicyViolation, authorize
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.transaction_utils import retry_on_deadlock
from utils.validators import InvalidField, invalid_field_result


User = get_user_model()

ALREADY_SELLER_MESSAGE = "User is already a seller"


class SellerService(BaseService):
    """
    Seller onboarding service.

    Handles the become-seller transition, profile updates and public lookups.
    Rating and earnings fields are never written here.
    """

    @BaseService.log_performance
    def become_seller(self, user_id, draft) -> ServiceResult:
        """
        Promote a buyer to seller and create their seller profile.

        Business Logic:
        1. Load the user and check the policy (buyers only)
        2. Validate the draft (first failing field is reported)
        3. In one transaction: lock the user row, re-check the policy,
           flip the role and create the profile

        Returns:
            ServiceResult with the SellerProfile, or ``not_found`` /
            ``already_seller`` / ``forbidden`` / ``validation_failed`` /
            ``store_unavailable``
        """
        try:
            user = self._get_user(user_id)
            if user is None:
                return service_err(ErrorCodes.NOT_FOUND, "User not found")
            authorize(user, Action.BECOME_SELLER)

            cleaned = validate_seller_draft(draft)
            profile = self._promote(user.pk, cleaned)
        except PolicyViolation as exc:
            metrics.seller_upgrades_total.labels(status=exc.code).inc()
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            metrics.seller_upgrades_total.labels(status=ErrorCodes.VALIDATION_FAILED).inc()
            return invalid_field_result(exc)
        except IntegrityError:
            # A concurrent request created the profile first; our transaction was rolled back
            metrics.seller_upgrades_total.labels(status=ErrorCodes.ALREADY_SELLER).inc()
            return service_err(ErrorCodes.ALREADY_SELLER, ALREADY_SELLER_MESSAGE)
        except DatabaseError as exc:
            return self.store_unavailable("become_seller", exc)

        metrics.seller_upgrades_total.labels(status="success").inc()
        self.logger.info(f"User {user.pk} became a seller (profile {profile.pk})")
        return service_ok(profile)

    @retry_on_deadlock()
    def _promote(self, user_pk, cleaned) -> SellerProfile:
        with transaction.atomic():
            user = User.objects.select_for_update().get(pk=user_pk)
            # The row may have changed since the first check
            authorize(user, Action.BECOME_SELLER)

            user.role = ROLE_SELLER
            user.save(update_fields=["role", "updated_at"])
            return SellerProfile.objects.create(user=user, **cleaned)

    @BaseService.log_performance
    def update_profile(self, actor, user_id, changes) -> ServiceResult:
        """Owner (or admin) update of the editable seller profile fields."""
        try:
            profile = self._get_profile(user_id)
            if profile is None:
                return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")
            authorize(actor, Action.UPDATE_SELLER_PROFILE, profile)

            cleaned = validate_seller_changes(changes)
            if not cleaned:
                return service_ok(profile)

            for field_name, value in cleaned.items():
                setattr(profile, field_name, value)
            profile.save(update_fields=[*cleaned.keys(), "updated_at"])
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            return invalid_field_result(exc)
        except DatabaseError as exc:
            return self.store_unavailable("update_profile", exc)

        self.logger.info(f"Seller profile {profile.pk} updated fields {sorted(cleaned.keys())}")
        return service_ok(profile)

    def get_profile(self, user_id) -> ServiceResult:
        try:
            profile = self._get_profile(user_id)
        except DatabaseError as exc:
            return self.store_unavailable("get_profile", exc)
        if profile is None:
            return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")
        return service_ok(profile)

    def _get_user(self, user_id):
        try:
            return User.objects.filter(pk=user_id).first()
        except (DjangoValidationError, ValueError):
            return None

    def _get_profile(self, user_id):
        try:
            return SellerProfile.objects.select_related("user").filter(user_id=user_id).first()
        except (DjangoValidationError, ValueError):
            return None
