from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .gig import Gig


class Review(models.Model):
    gig = models.ForeignKey(Gig, on_delete=models.CASCADE, related_name="reviews")
    reviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, related_name="reviews", null=True, blank=True
    )
    # Kept for display after the reviewer account is deleted
    reviewer_name = models.CharField(max_length=150, blank=True, default="")
    star = models.PositiveSmallIntegerField(validators=[MinValueValidator(1), MaxValueValidator(5)])
    comment = models.TextField(max_length=500)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["gig", "reviewer"],
                condition=models.Q(reviewer__isnull=False),
                name="unique_gig_reviewer",
            )
        ]
        ordering = ["-created_at"]
        app_label = "marketplace"

    def get_reviewer_display_name(self):
        if self.reviewer_id:
            return self.reviewer.username
        return self.reviewer_name or "Deleted User"

    def __str__(self):
        return f"Review by {self.get_reviewer_display_name()} for {self.gig.title}"
