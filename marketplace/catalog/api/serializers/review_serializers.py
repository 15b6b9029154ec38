from rest_framework import serializers

from marketplace.catalog.domain.models import Review


class ReviewSerializer(serializers.ModelSerializer):
    reviewer_name = serializers.CharField(source="get_reviewer_display_name", read_only=True)

    class Meta:
        model = Review
        fields = ["id", "gig", "reviewer", "reviewer_name", "star", "comment", "created_at"]
        read_only_fields = fields
