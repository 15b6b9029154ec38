"""
Request/Response Serializers for API Documentation

These serializers describe request bodies and response envelopes for OpenAPI
schema generation. Input rules are enforced by the domain services, not here.
"""

from rest_framework import serializers

from .auth_serializers import SellerProfileSerializer, UserSerializer


# ===== Authentication =====


class RegisterRequestSerializer(serializers.Serializer):
    full_name = serializers.CharField(help_text="2-50 letters and spaces; also accepted as fullName")
    full_name = serializers.CharField(help_text="2-50 letters and spaces")
    username = serializers.CharField(help_text="3-30 letters, digits or underscores")
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
        help_text="8-100 characters with upper case, lower case, digit and one of @$!%*?&",
    )


class LoginRequestSerializer(serializers.Serializer):
    """Request body for login"""

    email = serializers.EmailField(help_text="User's email address")
    password = serializers.CharField(write_only=True, style={"input_type": "password"}, help_text="User's password")


class SessionDataSerializer(serializers.Serializer):
    user = UserSerializer()
    token = serializers.CharField(help_text="Session token, also set as the HTTP-only cookie")


class SessionResponseSerializer(serializers.Serializer):
    """Response for successful login or registration"""

    success = serializers.BooleanField(default=True)
    data = SessionDataSerializer()


class MessageResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    message = serializers.CharField()


# ===== Account =====


class UserResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = UserSerializer()


class AccountUpdateRequestSerializer(serializers.Serializer):
    full_name = serializers.CharField(required=False)
    username = serializers.CharField(required=False)
    email = serializers.EmailField(required=False)
    password = serializers.CharField(required=False, write_only=True, style={"input_type": "password"})
    current_password = serializers.CharField(
        required=False,
        write_only=True,
        style={"input_type": "password"},
        help_text="Required when changing the password",
    )


class DeleteAccountRequestSerializer(serializers.Serializer):
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


# ===== Seller =====


class BecomeSellerRequestSerializer(serializers.Serializer):
    title = serializers.CharField(help_text="5-100 characters")
    description = serializers.CharField(help_text="50-1000 characters")
    skills = serializers.ListField(child=serializers.CharField(), help_text="1-20 skills, 2-30 characters each")
    hourly_rate = serializers.DecimalField(max_digits=6, decimal_places=2, help_text="1-1000 in steps of 0.5")
    languages = serializers.ListField(child=serializers.CharField(), required=False, help_text="Up to 10 languages")


class SellerProfileUpdateRequestSerializer(serializers.Serializer):
    title = serializers.CharField(required=False)
    description = serializers.CharField(required=False)
    skills = serializers.ListField(child=serializers.CharField(), required=False)
    hourly_rate = serializers.DecimalField(max_digits=6, decimal_places=2, required=False)
    languages = serializers.ListField(child=serializers.CharField(), required=False)
    is_available = serializers.BooleanField(required=False)


class SellerProfileResponseSerializer(serializers.Serializer):
    success = serializers.BooleanField(default=True)
    data = SellerProfileSerializer()
