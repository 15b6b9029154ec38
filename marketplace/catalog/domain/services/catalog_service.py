"""
CatalogService - Gig lifecycle

Create, update, delete and activate/deactivate gigs, and attach a display
image through the image store. Rating fields are never written here; updates
go through ``save(update_fields=...)`` limited to the editable fields.

A stored image is removed from the image store once the gig stops pointing at
it: replaced by a new upload, overwritten by an external URL, or deleted with
the gig.
"""

import os
import uuid
from typing import Any, Dict, Optional

from django.conf import settings
from django.db import DatabaseError, transaction

from infrastructure.storage.interface import ImageStore, ImageStoreException
from marketplace.catalog.domain.models import Gig
from marketplace.catalog.domain.services.reputation_service import remove_gig_from_seller_rating
from marketplace.catalog.domain.services.search_service import GIG_NOT_FOUND_MESSAGE, find_gig
from marketplace.catalog.domain.validators import validate_gig_changes, validate_gig_draft
from marketplace.infra.observability import metrics
from utils.rbac import Action, PolicyViolation, authorize
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.transaction_utils import retry_on_deadlock
from utils.validators import InvalidField, invalid_field_result


class CatalogService(BaseService):
    """
    Service for managing gigs.

    Responsibilities:
    - Create gigs (sellers only)
    - Update, delete and toggle gigs (owner or admin)
    - Upload gig images via the image store abstraction

    All operations check the policy and return ServiceResult.
    """

    def __init__(self, image_store: ImageStore = None):
        """
        Initialize CatalogService.

        Args:
            image_store: Image store (injected via DI container)
        """
        super().__init__()
        if image_store is None:
            from infrastructure.container import container

            image_store = container.image_store()
        self.image_store = image_store

    @BaseService.log_performance
    def create_gig(self, actor, data: Dict[str, Any]) -> ServiceResult[Gig]:
        """
        Publish a new gig owned by ``actor``.

        Example:
            >>> result = catalog_service.create_gig(
            ...     seller,
            ...     {"title": "Logo design for startups", "description": "...", "category": "Design",
            ...      "price": "50", "delivery_time": 3},
            ... )
        """
        try:
            authorize(actor, Action.CREATE_GIG)
            cleaned = validate_gig_draft(data)
            gig = Gig.objects.create(seller=actor, **cleaned)
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            return invalid_field_result(exc)
        except DatabaseError as exc:
            return self.store_unavailable("create_gig", exc)

        metrics.gigs_created_total.inc()
        self.logger.info(f"Gig {gig.pk} created by seller {actor.pk}")
        return service_ok(gig)

    @BaseService.log_performance
    def update_gig(self, actor, gig_id, changes: Dict[str, Any]) -> ServiceResult[Gig]:
        try:
            gig = find_gig(gig_id)
            if gig is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(actor, Action.UPDATE_GIG, gig)

            cleaned = validate_gig_changes(changes)
            old_key = ""
            if cleaned:
                update_fields = [*cleaned.keys(), "updated_at"]
                if "image_url" in cleaned and gig.image_key:
                    old_key, gig.image_key = gig.image_key, ""
                    update_fields.append("image_key")
                for field_name, value in cleaned.items():
                    setattr(gig, field_name, value)
                gig.save(update_fields=update_fields)
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            return invalid_field_result(exc)
        except DatabaseError as exc:
            return self.store_unavailable("update_gig", exc)

        self._discard_image(old_key)
        self.logger.info(f"Gig {gig.pk} updated fields {sorted(cleaned.keys())}")
        return service_ok(gig)

    @BaseService.log_performance
    def delete_gig(self, actor, gig_id) -> ServiceResult[dict]:
        """Delete a gig with its reviews and take them out of the seller's rating."""
        try:
            gig = find_gig(gig_id)
            if gig is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(actor, Action.DELETE_GIG, gig)

            gig_pk = gig.pk
            deleted = self._delete_with_rating(gig_pk)
            if deleted is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except DatabaseError as exc:
            return self.store_unavailable("delete_gig", exc)

        self._discard_image(deleted.image_key)
        self.logger.info(f"Gig {gig_pk} deleted by user {actor.pk}")
        return service_ok({"id": str(gig_pk)})

    @retry_on_deadlock()
    def _delete_with_rating(self, gig_pk) -> Optional[Gig]:
        with transaction.atomic():
            # Concurrent reviews of this gig block on the lock, then find it gone
            gig = Gig.objects.select_for_update().filter(pk=gig_pk).first()
            if gig is None:
                return None
            gig.delete()
            remove_gig_from_seller_rating(gig.seller_id, gig.reviews_count, gig.total_stars)
        return gig

    @BaseService.log_performance
    def toggle_status(self, actor, gig_id) -> ServiceResult[Gig]:
        """Flip a gig between active and inactive."""
        try:
            gig = find_gig(gig_id)
            if gig is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(actor, Action.TOGGLE_GIG_STATUS, gig)

            gig = self._flip_status(gig.pk)
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except Gig.DoesNotExist:
            return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        except DatabaseError as exc:
            return self.store_unavailable("toggle_status", exc)

        metrics.gig_status_toggles_total.labels(status=gig.status).inc()
        self.logger.info(f"Gig {gig.pk} is now {gig.status}")
        return service_ok(gig)

    @retry_on_deadlock()
    def _flip_status(self, gig_pk) -> Gig:
        with transaction.atomic():
            gig = Gig.objects.select_for_update().get(pk=gig_pk)
            gig.status = Gig.STATUS_INACTIVE if gig.is_active else Gig.STATUS_ACTIVE
            gig.save(update_fields=["status", "updated_at"])
        return gig

    @BaseService.log_performance
    def attach_image(self, actor, gig_id, image_file) -> ServiceResult[Gig]:
        """
        Upload a display image for a gig and store its URL.

        Args:
            actor: User attaching the image (owner or admin)
            gig_id: Gig UUID
            image_file: Uploaded file object with ``size`` and ``content_type``

        Returns:
            ServiceResult with the updated Gig
        """
        try:
            gig = find_gig(gig_id)
            if gig is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(actor, Action.UPDATE_GIG, gig)

            content_type = self._check_image(image_file)
            extension = os.path.splitext(getattr(image_file, "name", "") or "")[1].lower()
            stored = self.image_store.upload(
                file=image_file,
                path=f"gigs/{gig.pk}/{uuid.uuid4().hex}{extension}",
                content_type=content_type,
            )

            old_key = gig.image_key
            gig.image_url, gig.image_key = stored.url, stored.key
            gig.save(update_fields=["image_url", "image_key", "updated_at"])
        except PolicyViolation as exc:
            return service_err(exc.code, exc.message)
        except InvalidField as exc:
            metrics.gig_images_uploaded_total.labels(status="rejected").inc()
            return invalid_field_result(exc)
        except ImageStoreException:
            metrics.gig_images_uploaded_total.labels(status="failed").inc()
            self.logger.error(f"Image upload failed for gig {gig_id}", exc_info=True)
            return service_err(ErrorCodes.STORE_UNAVAILABLE, "Image upload failed, please retry")
        except DatabaseError as exc:
            return self.store_unavailable("attach_image", exc)

        self._discard_image(old_key)
        metrics.gig_images_uploaded_total.labels(status="success").inc()
        self.logger.info(f"Image {stored.key} attached to gig {gig.pk} ({stored.size} bytes)")
        return service_ok(gig)

    def _discard_image(self, key):
        if not key:
            return
        try:
            self.image_store.delete(key)
        except ImageStoreException:
            metrics.gig_images_orphaned_total.inc()
            self.logger.warning(f"Could not delete stored image {key}", exc_info=True)

    def _check_image(self, image_file) -> str:
        if image_file is None:
            raise InvalidField("image", "Image file is required")

        config = settings.INFRASTRUCTURE
        content_type = getattr(image_file, "content_type", None) or ""
        if content_type not in config["IMAGE_ALLOWED_CONTENT_TYPES"]:
            allowed = ", ".join(config["IMAGE_ALLOWED_CONTENT_TYPES"])
            raise InvalidField("image", f"Unsupported image type. Allowed: {allowed}")
        size = getattr(image_file, "size", None)
        if not size:
            raise InvalidField("image", "Image file is empty")
        if size > config["IMAGE_MAX_BYTES"]:
            raise InvalidField("image", f"Image must be at most {config['IMAGE_MAX_BYTES'] // (1024 * 1024)}MB")
        return content_type
