"""
Celery tasks for rating aggregate repair.

``reconcile_inconsistent_ratings`` runs daily from the beat schedule; the
per-gig and per-seller tasks can also be queued by hand.
"""

import logging

from celery import shared_task

from utils.service_base import ErrorCodes


logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    name="marketplace.tasks.reconcile_gig_rating",
    max_retries=3,
    default_retry_delay=30,
    time_limit=120,
    soft_time_limit=100,
)
def reconcile_gig_rating(self, gig_id: str):
    """
    Recompute one gig's rating aggregates from its reviews.

    Retried while the database is unavailable; a missing gig is not retried.
    """
    from infrastructure.container import container

    result = container.reputation_service().reconcile_gig(gig_id)
    if result.ok:
        return result.value
    if result.error == ErrorCodes.STORE_UNAVAILABLE:
        raise self.retry()
    logger.warning(f"Rating repair skipped for gig {gig_id}: {result.error_detail}")
    return {"gig_id": str(gig_id), "error": result.error}


@shared_task(
    bind=True,
    name="marketplace.tasks.reconcile_seller_rating",
    max_retries=3,
    default_retry_delay=30,
    time_limit=120,
    soft_time_limit=100,
)
def reconcile_seller_rating(self, seller_id: str):
    """Recompute one seller profile's rating from the reviews of the seller's gigs."""
    from infrastructure.container import container

    result = container.reputation_service().reconcile_seller(seller_id)
    if result.ok:
        return result.value
    if result.error == ErrorCodes.STORE_UNAVAILABLE:
        raise self.retry()
    logger.warning(f"Rating repair skipped for seller {seller_id}: {result.error_detail}")
    return {"seller_id": str(seller_id), "error": result.error}


@shared_task(name="marketplace.tasks.reconcile_inconsistent_ratings", time_limit=300, soft_time_limit=240)
def reconcile_inconsistent_ratings():
    """
    Find gigs and seller profiles whose aggregates drifted from their reviews
    and queue a repair for each.
    """
    from infrastructure.container import container

    service = container.reputation_service()
    gigs = service.find_inconsistent_gigs()
    sellers = service.find_inconsistent_sellers()
    failed = gigs if not gigs.ok else sellers
    if not failed.ok:
        logger.error(f"Could not scan for inconsistent ratings: {failed.error_detail}")
        return {"queued": 0, "error": failed.error}

    for gig_id in gigs.value:
        reconcile_gig_rating.delay(gig_id)

    for seller_id in sellers.value:
        reconcile_seller_rating.delay(seller_id)

    queued = len(gigs.value) + len(sellers.value)
    if queued:
        logger.warning(f"Queued rating repair for {len(gigs.value)} gigs and {len(sellers.value)} sellers")
    return {"queued": queued, "gigs": len(gigs.value), "sellers": len(sellers.value)}
