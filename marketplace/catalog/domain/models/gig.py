import uuid

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Gig(models.Model):
    STATUS_ACTIVE = "active"
    STATUS_INACTIVE = "inactive"
    STATUS_CHOICES = [
        (STATUS_ACTIVE, "Active"),
        (STATUS_INACTIVE, "Inactive"),
    ]

    # Case-sensitive, stored as displayed
    CATEGORY_CHOICES = [
        ("Design", "Design"),
        ("Programming", "Programming"),
        ("Writing", "Writing"),
        ("Marketing", "Marketing"),
        ("Video", "Video"),
        ("Music", "Music"),
    ]
    CATEGORIES = frozenset(value for value, _ in CATEGORY_CHOICES)

    # Basic Information
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    seller = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="gigs")
    title = models.CharField(max_length=100)
    description = models.TextField(max_length=2000)
    category = models.CharField(max_length=20, choices=CATEGORY_CHOICES)

    # Pricing and Delivery
    price = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(5), MaxValueValidator(10000)]
    )
    delivery_time = models.PositiveIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(90)], help_text="Delivery time in days"
    )
    image_url = models.URLField(max_length=500, blank=True, default="")
    # Storage key of an uploaded image; empty when image_url points elsewhere
    image_key = models.CharField(max_length=300, blank=True, default="", editable=False)

    # Reputation, written only by the reputation service
    rating = models.FloatField(default=0.0)
    total_stars = models.PositiveIntegerField(default=0)
    reviews_count = models.PositiveIntegerField(default=0)

    status = models.CharField(max_length=10, choices=STATUS_CHOICES, default=STATUS_ACTIVE)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        app_label = "marketplace"
        indexes = [
            models.Index(fields=["status", "-created_at"], name="gig_status_created_idx"),
            models.Index(fields=["status", "price"], name="gig_status_price_idx"),
            models.Index(fields=["category", "status"], name="gig_category_status_idx"),
            models.Index(fields=["seller", "-created_at"], name="gig_seller_created_idx"),
        ]

    @property
    def is_active(self):
        return self.status == self.STATUS_ACTIVE

    def __str__(self):
        return self.title
