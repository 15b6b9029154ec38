import uuid

from django.contrib.auth.models import AbstractUser, UserManager
from django.db import models

from utils.rbac import ROLE_ADMIN, ROLE_BUYER, ROLE_CHOICES


class CustomUserManager(UserManager):
    """Stores emails fully lower-cased; usernames keep their case."""

    @classmethod
    def normalize_email(cls, email):
        return (email or "").strip().lower()

    def create_superuser(self, username, email=None, password=None, **extra_fields):
        extra_fields.setdefault("role", ROLE_ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class CustomUser(AbstractUser):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)
    full_name = models.CharField(max_length=50, blank=True)

    # Role system - simple field; seller is reached only through the seller onboarding flow
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_BUYER)
    is_banned = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    class Meta:
        app_label = "authentication"
        indexes = [
            models.Index(fields=["role"], name="auth_user_role_idx"),
        ]

    def __str__(self):
        return self.email
