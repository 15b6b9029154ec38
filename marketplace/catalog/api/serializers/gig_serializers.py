from rest_framework import serializers

from authentication.domain.models import CustomUser
from marketplace.catalog.domain.models import Gig


class GigSellerSerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ("id", "username", "full_name")
        read_only_fields = fields


class GigSerializer(serializers.ModelSerializer):
    """Read representation of a gig; writes go through CatalogService."""

    seller = GigSellerSerializer(read_only=True)

    class Meta:
        model = Gig
        fields = (
            "id",
            "seller",
            "title",
            "description",
            "category",
            "price",
            "delivery_time",
            "image_url",
            "rating",
            "total_stars",
            "reviews_count",
            "status",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields
