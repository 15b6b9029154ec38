from decimal import Decimal

from django.conf import settings
from django.db import models


class SellerProfile(models.Model):
    """Public seller page; created exactly once when a buyer becomes a seller"""

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="seller_profile")

    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    skills = models.JSONField(default=list, help_text="Deduplicated list of skill names")
    languages = models.JSONField(default=list, blank=True, help_text="Deduplicated list of languages (max 10)")
    hourly_rate = models.DecimalField(max_digits=6, decimal_places=2)
    is_available = models.BooleanField(default=True)

    # Reputation aggregates, written only by the reputation service
    rating_average = models.FloatField(default=0.0)
    rating_count = models.PositiveIntegerField(default=0)

    completed_jobs = models.PositiveIntegerField(default=0)
    earnings = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        app_label = "authentication"
        ordering = ["-created_at"]

    def __str__(self):
        return f"{self.title} ({self.user_id})"
