"""
URL configuration for gigmarketBackend project.

All API routes are mounted under ``/api/``.
"""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

from utils.metrics_views import metrics


urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path("api/docs/", SpectacularSwaggerView.as_view(url_name="schema"), name="swagger-ui"),
    # Prometheus scraping
    path("api/metrics/", metrics, name="metrics"),
    # API endpoints
    path("api/auth/", include("authentication.api.urls.auth_urls")),
    path("api/users/", include("authentication.api.urls.user_urls")),
    path("api/", include("marketplace.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
