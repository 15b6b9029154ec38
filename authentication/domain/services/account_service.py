"""
AccountService - profile reads, account edits and account deletion.
"""

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction

from authentication.domain.validators import (
    validate_email_address,
    validate_full_name,
    validate_password_strength,
    validate_username,
)
from authentication.infra.observability import metrics
from infrastructure.storage.interface import ImageStoreException
from utils.rbac import Action, PolicyViolation, authorize
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.validators import InvalidField, invalid_field_result


User = get_user_model()


class AccountService(BaseService):
    def get_account(self, user_id) -> ServiceResult:
        try:
            user = self._get_user(user_id)
        except DatabaseError as exc:
            return self.store_unavailable("get_account", exc)
        if user is None:
            return service_err(ErrorCodes.NOT_FOUND, "User not found")
        return service_ok(user)

    @BaseService.log_performance
    def update_account(self, actor, user_id, changes) -> ServiceResult:
        """
        Update full name, username, email or password of an account.

        A password change needs ``current_password``; a wrong current password
        is reported as ``invalid_credentials``. Taken usernames and emails are
        reported as ``duplicate_identity``.
        """
        changes = changes or {}
        try:
            user = self._get_user(user_id)
            if user is None:
                return service_err(ErrorCodes.NOT_FOUND, "User not found")
            authorize(actor, Action.UPDATE_ACCOUNT, user)

            update_fields = []
            if "full_name" in changes:
                user.full_name = validate_full_name(changes["full_name"])
                update_fields.append("full_name")

            if "username" in changes:
                username = validate_username(changes["username"])
                if User.objects.filter(username=username).exclude(pk=user.pk).exists():
                    return service_err(ErrorCodes.DUPLICATE_IDENTITY, "Username is already taken", field="username")
                user.username = username
                update_fields.append("username")

            if "email" in changes:
                email = validate_email_address(changes["email"])
                if User.objects.filter(email=email).exclude(pk=user.pk).exists():
                    return service_err(ErrorCodes.DUPLICATE_IDENTITY, "Email is already in use", field="email")
                user.email = email
                update_fields.append("email")

            if changes.get("password"):
                current = changes.get("current_password")
                if not current:
                    raise InvalidField("current_password", "Current password is required when updating password")
                if not user.check_password(current):
                    return service_err(
                        ErrorCodes.INVALID_CREDENTIALS, "Current password is incorrect", field="current_password"
                    )
                user.set_password(validate_password_strength(changes["password"]))
                update_fields.append("password")

            if update_fields:
                with transaction.atomic():
                    user.save(update_fields=[*update_fields, "updated_at"])
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            return invalid_field_result(exc)
        except IntegrityError:
            return service_err(ErrorCodes.DUPLICATE_IDENTITY, "Email or username already exists")
        except DatabaseError as exc:
            return self.store_unavailable("update_account", exc)

        self.logger.info(f"Account {user.pk} updated fields {update_fields}")
        return service_ok(user)

    @BaseService.log_performance
    def delete_account(self, actor, password) -> ServiceResult:
        """
        Delete the actor's own account after re-checking the password.

        The seller profile and gigs go with the account, and the gigs' stored
        images are removed afterwards; reviews written by the account stay,
        keeping the reviewer name.
        """
        try:
            user = self._get_user(getattr(actor, "pk", None))
            if user is None:
                return service_err(ErrorCodes.NOT_FOUND, "User not found")
            authorize(actor, Action.DELETE_ACCOUNT, user)

            if not isinstance(password, str) or not user.check_password(password):
                return service_err(ErrorCodes.INVALID_CREDENTIALS, "Invalid password", field="password")

            user_pk = user.pk
            image_keys = list(user.gigs.exclude(image_key="").values_list("image_key", flat=True))
            with transaction.atomic():
                user.delete()
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except DatabaseError as exc:
            return self.store_unavailable("delete_account", exc)

        self._discard_images(image_keys)
        metrics.account_deletions_total.inc()
        self.logger.info(f"Account {user_pk} deleted")
        return service_ok({"id": str(user_pk)})

    def _discard_images(self, keys):
        if not keys:
            return
        from infrastructure.container import container

        image_store = container.image_store()
        for key in keys:
            try:
                image_store.delete(key)
            except ImageStoreException:
                self.logger.warning(f"Could not delete stored image {key}", exc_info=True)

    def _get_user(self, user_id):
        if user_id is None:
            return None
        try:
            return User.objects.select_related("seller_profile").filter(pk=user_id).first()
        except (DjangoValidationError, ValueError):
            return None
