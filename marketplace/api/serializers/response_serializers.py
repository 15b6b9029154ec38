"""
Response Serializers for Marketplace API Documentation

These serializers define the structure of requests and responses for OpenAPI
schema generation. They are NOT used for data validation, only for
documentation in Swagger.
"""

from rest_framework import serializers

from marketplace.catalog.api.serializers import GigSerializer, ReviewSerializer
from marketplace.catalog.domain.models import Gig


# ===== Common =====


class PaginationSerializer(serializers.Serializer):
    current = serializers.IntegerField(help_text="Current page number")
    total = serializers.IntegerField(help_text="Total number of pages")
    count = serializers.IntegerField(help_text="Items on this page")
    total_results = serializers.IntegerField(help_text="Total number of matching items")
    limit = serializers.IntegerField(help_text="Items per page")


class DeletedResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()


# ===== Gigs =====


class GigCreateRequestSerializer(serializers.Serializer):
    """Request body for publishing a gig"""

    title = serializers.CharField(help_text="10-100 characters")
    description = serializers.CharField(help_text="50-2000 characters")
    category = serializers.ChoiceField(choices=Gig.CATEGORY_CHOICES)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, help_text="5-10000")
    delivery_time = serializers.IntegerField(help_text="Delivery time in days, 1-90")
    image_url = serializers.URLField(required=False, allow_blank=True)


class GigUpdateRequestSerializer(GigCreateRequestSerializer):
    """Partial update; rating fields cannot be changed"""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        for field in self.fields.values():
            field.required = False


class GigImageRequestSerializer(serializers.Serializer):
    image = serializers.ImageField(help_text="JPEG, PNG, WebP or GIF, at most 5MB")


class GigResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = GigSerializer()


class GigListResponseSerializer(serializers.Serializer):
    """Paginated gig search response"""

    success = serializers.BooleanField(default=True)
    data = GigSerializer(many=True)
    pagination = PaginationSerializer()


class SellerGigsResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = GigSerializer(many=True)


# ===== Reviews =====


class ReviewCreateRequestSerializer(serializers.Serializer):
    """Request body for reviewing a gig"""

    gig_id = serializers.UUIDField(help_text="Reviewed gig (gigId is accepted too)")
    star = serializers.IntegerField(min_value=1, max_value=5)
    comment = serializers.CharField(help_text="10-500 characters")


class ReviewResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = ReviewSerializer()


class ReviewListResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = ReviewSerializer(many=True)
    pagination = PaginationSerializer()
