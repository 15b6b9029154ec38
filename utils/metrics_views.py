"""
Prometheus Metrics Endpoint

Exposes the counters and histograms registered by the authentication and
marketplace apps for scraping.
"""

from django.http import HttpResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

# Register the metric families before the first scrape
import authentication.infra.observability.metrics  # noqa: F401
import marketplace.infra.observability.metrics  # noqa: F401


def metrics(request):
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus exposition format.

    **Security:** This endpoint has no authentication.
    In production, restrict access via firewall or network policy.
    """
    return HttpResponse(generate_latest(), content_type=CONTENT_TYPE_LATEST)
