from rest_framework import serializers

from authentication.domain.models import CustomUser, SellerProfile


class SellerUserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = CustomUser
        fields = ("id", "username", "full_name")
        read_only_fields = fields


class SellerProfileSerializer(serializers.ModelSerializer):
    user = SellerUserSummarySerializer(read_only=True)

    class Meta:
        model = SellerProfile
        fields = (
            "id",
            "user",
            "title",
            "description",
            "skills",
            "languages",
            "hourly_rate",
            "is_available",
            "rating_average",
            "rating_count",
            "completed_jobs",
            "earnings",
            "created_at",
            "updated_at",
        )
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    seller_profile = serializers.SerializerMethodField()

    class Meta:
        model = CustomUser
        fields = (
            "id",
            "username",
            "email",
            "full_name",
            "role",
            "is_banned",
            "last_login",
            "created_at",
            "updated_at",
            "seller_profile",
        )
        read_only_fields = fields

    def get_seller_profile(self, obj):
        if not self.context.get("include_seller_profile", False):
            return None
        profile = SellerProfile.objects.filter(user_id=obj.pk).first()
        if profile is None:
            return None
        data = SellerProfileSerializer(profile).data
        data.pop("user", None)
        return data
