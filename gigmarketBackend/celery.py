"""
Celery Configuration for GigMarket Backend

This module configures Celery for background maintenance jobs.
Currently hosts the rating reconciliation task that repairs gig and seller
aggregates drifting away from the stored reviews.
"""

import os

from celery import Celery


# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "gigmarketBackend.settings")

# Create Celery app
app = Celery("gigmarketBackend")

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object("django.conf:settings", namespace="CELERY")

# Load task modules from all registered Django apps.
app.autodiscover_tasks()

# Celery Beat configuration for periodic tasks
app.conf.beat_schedule = {
    # Nightly sweep for gigs whose aggregates disagree with their reviews
    "reconcile-inconsistent-ratings-nightly": {
        "task": "marketplace.tasks.reconcile_inconsistent_ratings",
        "schedule": 60.0 * 60.0 * 24.0,  # 24 hours
        "options": {"expires": 60.0 * 60.0, "queue": "marketplace_tasks"},
    },
}

app.conf.update(
    task_routes={
        "marketplace.tasks.*": {"queue": "marketplace_tasks"},
    },
    task_serializer="json",
    accept_content=["json"],
    result_serializer="json",
    timezone="UTC",
    enable_utc=True,
    result_expires=60 * 60 * 24,  # Results expire after 24 hours
    worker_max_tasks_per_child=1000,
    task_acks_late=True,
    task_reject_on_worker_lost=True,
)
