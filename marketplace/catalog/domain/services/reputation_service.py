"""
ReputationService - reviews and running rating aggregates.

A review and the aggregate bump it causes commit together or not at all:
the Review row is inserted inside a savepoint (the partial unique constraint
on (gig, reviewer) rejects the second of two racing inserts), then the gig's
``reviews_count``/``total_stars``/``rating`` and the seller profile's
``rating_count``/``rating_average`` are advanced by single UPDATE statements
whose right-hand sides only read the pre-update row.

Deleting a gig takes its stored totals back out of the seller profile with
``remove_gig_from_seller_rating``, again as one UPDATE.

Drift caused outside this service (imports, manual edits, deleted reviews)
is found by ``find_inconsistent_gigs`` and ``find_inconsistent_sellers`` and
repaired by ``reconcile_gig`` and ``reconcile_seller``, which recompute the
aggregates from the reviews themselves.
"""

from typing import List

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Case, Count, ExpressionWrapper, F, FloatField, IntegerField, Q, Sum, Value, When
from django.db.models.functions import Coalesce

from authentication.models import SellerProfile
from marketplace.catalog.domain.models import Gig, Review
from marketplace.catalog.domain.services.search_service import (
    GIG_NOT_FOUND_MESSAGE,
    SearchPage,
    find_gig,
    parse_limit,
    parse_page,
)
from marketplace.catalog.domain.validators import validate_review
from marketplace.infra.observability import metrics
from utils.rbac import Action, PolicyViolation, authorize
from utils.service_base import BaseService, ErrorCodes, ServiceResult, service_err, service_ok
from utils.transaction_utils import retry_on_deadlock
from utils.validators import InvalidField, invalid_field_result


DUPLICATE_REVIEW_MESSAGE = "You have already reviewed this gig"
REVIEWS_DEFAULT_LIMIT = 20
# Running means are floats; anything closer than this counts as equal
RATING_TOLERANCE = 1e-6


class _DuplicateReview(Exception):
    pass


class _GigUnavailable(Exception):
    pass


def incremental_mean(average_field, count_field, star):
    """new = (old_average * old_count + star) / (old_count + 1), evaluated by the database."""
    return ExpressionWrapper(
        (F(average_field) * F(count_field) + star) / (F(count_field) + 1),
        output_field=FloatField(),
    )


def mean_rating(stars, count) -> float:
    return stars / count if count else 0.0


def rating_drifted(stored, stars, count) -> bool:
    return abs(stored - mean_rating(stars, count)) > RATING_TOLERANCE


def remove_gig_from_seller_rating(seller_id, reviews_count, total_stars):
    """
    Subtract a deleted gig's totals from its seller's rating.

    Must run in the transaction that deletes the gig. When the profile holds
    no more reviews than the gig did, it drops to zero instead of going
    negative; the nightly sweep recomputes it from the reviews.
    """
    if not reviews_count:
        return
    still_rated = Q(rating_count__gt=reviews_count)
    SellerProfile.objects.filter(user_id=seller_id).update(
        rating_average=Case(
            When(
                still_rated,
                then=ExpressionWrapper(
                    (F("rating_average") * F("rating_count") - total_stars) / (F("rating_count") - reviews_count),
                    output_field=FloatField(),
                ),
            ),
            default=Value(0.0),
            output_field=FloatField(),
        ),
        rating_count=Case(
            When(still_rated, then=F("rating_count") - reviews_count),
            default=Value(0),
            output_field=IntegerField(),
        ),
    )


def refresh_seller_rating(seller_id):
    """Recompute a seller profile's rating from the reviews of all the seller's gigs."""
    stats = Review.objects.filter(gig__seller_id=seller_id).aggregate(count=Count("id"), stars=Sum("star"))
    count, average = stats["count"], mean_rating(stats["stars"] or 0, stats["count"])
    SellerProfile.objects.filter(user_id=seller_id).update(rating_count=count, rating_average=average)
    return count, average


class ReputationService(BaseService):
    """
    Service for reviews and reputation numbers.

    Responsibilities:
    - Record a review together with its aggregate update
    - List a gig's reviews
    - Detect and repair aggregate drift
    """

    @BaseService.log_performance
    def record_review(self, gig_id, actor, star, comment) -> ServiceResult[Review]:
        """
        Record one review of a gig by ``actor``.

        Returns:
            ServiceResult with the Review, or ``validation_failed`` /
            ``not_found`` / ``forbidden`` / ``duplicate_review`` /
            ``store_unavailable``
        """
        try:
            star, comment = validate_review(star, comment)
            gig = find_gig(gig_id)
            if gig is None or not gig.is_active:
                metrics.reviews_rejected_total.labels(reason=ErrorCodes.NOT_FOUND).inc()
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(actor, Action.CREATE_REVIEW, gig)

            review = self._store_review(gig.pk, gig.seller_id, actor, star, comment)
        except InvalidField as exc:
            metrics.reviews_rejected_total.labels(reason=ErrorCodes.VALIDATION_FAILED).inc()
            return invalid_field_result(exc)
        except PolicyViolation as exc:
            metrics.reviews_rejected_total.labels(reason=exc.code).inc()
            return service_err(exc.code, exc.message)
        except _DuplicateReview:
            metrics.reviews_rejected_total.labels(reason=ErrorCodes.DUPLICATE_REVIEW).inc()
            return service_err(ErrorCodes.DUPLICATE_REVIEW, DUPLICATE_REVIEW_MESSAGE)
        except _GigUnavailable:
            # Deleted or deactivated between the lookup and the update
            metrics.reviews_rejected_total.labels(reason=ErrorCodes.NOT_FOUND).inc()
            return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        except DatabaseError as exc:
            return self.store_unavailable("record_review", exc)

        metrics.reviews_recorded_total.inc()
        self.logger.info(f"Review {review.pk} recorded for gig {gig_id} by user {actor.pk}")
        return service_ok(review)

    @retry_on_deadlock()
    def _store_review(self, gig_pk, seller_id, actor, star, comment) -> Review:
        with transaction.atomic():
            try:
                with transaction.atomic():
                    review = Review.objects.create(
                        gig_id=gig_pk,
                        reviewer=actor,
                        reviewer_name=actor.username,
                        star=star,
                        comment=comment,
                    )
            except IntegrityError:
                raise _DuplicateReview() from None

            updated = Gig.objects.filter(pk=gig_pk, status=Gig.STATUS_ACTIVE).update(
                rating=incremental_mean("rating", "reviews_count", star),
                total_stars=F("total_stars") + star,
                reviews_count=F("reviews_count") + 1,
            )
            if updated != 1:
                # Leaving the atomic block with an exception discards the review too
                raise _GigUnavailable()

            SellerProfile.objects.filter(user_id=seller_id).update(
                rating_average=incremental_mean("rating_average", "rating_count", star),
                rating_count=F("rating_count") + 1,
            )
        return review

    def list_reviews(self, gig_id, page=1, limit=REVIEWS_DEFAULT_LIMIT, viewer=None) -> ServiceResult[SearchPage]:
        """Reviews of a visible gig, newest first. Pages past the end are empty."""
        page = parse_page(page)
        limit = parse_limit(limit, default=REVIEWS_DEFAULT_LIMIT)
        try:
            gig = find_gig(gig_id)
            if gig is None:
                return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
            authorize(viewer, Action.VIEW_GIG, gig)

            queryset = Review.objects.filter(gig=gig).select_related("reviewer").order_by("-created_at", "-id")
            offset = (page - 1) * limit
            with transaction.atomic():
                total = queryset.count()
                items = list(queryset[offset : offset + limit]) if offset < total else []
        except PolicyViolation:
            return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)
        except DatabaseError as exc:
            return self.store_unavailable("list_reviews", exc)
        return service_ok(SearchPage.build(items, total, page, limit))

    @BaseService.log_performance
    def reconcile_gig(self, gig_id) -> ServiceResult[dict]:
        """
        Recompute a gig's aggregates (and its seller's) from the stored reviews.

        Returns:
            ServiceResult with ``{"gig_id", "reviews_count", "total_stars",
            "rating", "repaired"}``
        """
        try:
            with transaction.atomic():
                gig = find_gig(gig_id, for_update=True)
                if gig is None:
                    return service_err(ErrorCodes.NOT_FOUND, GIG_NOT_FOUND_MESSAGE)

                stats = Review.objects.filter(gig_id=gig.pk).aggregate(count=Count("id"), stars=Sum("star"))
                count, stars = stats["count"], stats["stars"] or 0
                rating = mean_rating(stars, count)

                repaired = (gig.reviews_count, gig.total_stars) != (count, stars) or rating_drifted(
                    gig.rating, stars, count
                )
                if repaired:
                    gig.reviews_count, gig.total_stars, gig.rating = count, stars, rating
                    gig.save(update_fields=["reviews_count", "total_stars", "rating"])
                    metrics.rating_repairs_total.inc()

                refresh_seller_rating(gig.seller_id)
        except DatabaseError as exc:
            return self.store_unavailable("reconcile_gig", exc)

        if repaired:
            self.logger.warning(f"Repaired rating aggregates of gig {gig.pk}: count={count} stars={stars}")
        return service_ok(
            {
                "gig_id": str(gig.pk),
                "reviews_count": count,
                "total_stars": stars,
                "rating": rating,
                "repaired": repaired,
            }
        )

    @BaseService.log_performance
    def reconcile_seller(self, seller_id) -> ServiceResult[dict]:
        """
        Recompute a seller profile's rating from the reviews of the seller's gigs.

        Returns:
            ServiceResult with ``{"seller_id", "rating_count", "rating_average",
            "repaired"}``
        """
        try:
            with transaction.atomic():
                profile = SellerProfile.objects.select_for_update().filter(user_id=seller_id).first()
                if profile is None:
                    return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")

                count, average = refresh_seller_rating(profile.user_id)
                repaired = profile.rating_count != count or abs(profile.rating_average - average) > RATING_TOLERANCE
        except (DjangoValidationError, ValueError):
            return service_err(ErrorCodes.NOT_FOUND, "Seller profile not found")
        except DatabaseError as exc:
            return self.store_unavailable("reconcile_seller", exc)

        if repaired:
            metrics.rating_repairs_total.inc()
            self.logger.warning(f"Repaired rating of seller {profile.user_id}: count={count} average={average:.2f}")
        return service_ok(
            {
                "seller_id": str(profile.user_id),
                "rating_count": count,
                "rating_average": average,
                "repaired": repaired,
            }
        )

    def find_inconsistent_gigs(self) -> ServiceResult[List[str]]:
        """Ids of gigs whose stored count, star total or rating differ from their reviews."""
        try:
            rows = list(
                Gig.objects.annotate(
                    actual_count=Count("reviews"),
                    actual_stars=Coalesce(Sum("reviews__star"), 0, output_field=IntegerField()),
                )
                .order_by("created_at")
                .values_list("id", "reviews_count", "total_stars", "rating", "actual_count", "actual_stars")
            )
        except DatabaseError as exc:
            return self.store_unavailable("find_inconsistent_gigs", exc)

        gig_ids = [
            str(gig_id)
            for gig_id, count, stars, rating, actual_count, actual_stars in rows
            if (count, stars) != (actual_count, actual_stars) or rating_drifted(rating, actual_stars, actual_count)
        ]
        metrics.inconsistent_gigs.set(len(gig_ids))
        return service_ok(gig_ids)

    def find_inconsistent_sellers(self) -> ServiceResult[List[str]]:
        """User ids of seller profiles whose rating differs from the reviews of their gigs."""
        try:
            rows = list(
                SellerProfile.objects.annotate(
                    actual_count=Count("user__gigs__reviews"),
                    actual_stars=Coalesce(Sum("user__gigs__reviews__star"), 0, output_field=IntegerField()),
                )
                .order_by("created_at")
                .values_list("user_id", "rating_count", "rating_average", "actual_count", "actual_stars")
            )
        except DatabaseError as exc:
            return self.store_unavailable("find_inconsistent_sellers", exc)

        seller_ids = [
            str(user_id)
            for user_id, count, average, actual_count, actual_stars in rows
            if count != actual_count or rating_drifted(average, actual_stars, actual_count)
        ]
        metrics.inconsistent_sellers.set(len(seller_ids))
        return service_ok(seller_ids)
