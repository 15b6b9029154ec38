"""
Input rules for registration, account updates and seller profiles.
"""

import re

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email

from utils.validators import InvalidField, clean_decimal, clean_string_list, clean_text


FULL_NAME_RE = re.compile(r"^[A-Za-z\s]+$")
USERNAME_RE = re.compile(r"^[A-Za-z0-9_]+$")
PASSWORD_RE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$")
BLOCKED_EMAIL_DOMAINS = frozenset({"tempmail.com", "throwaway.com"})

SELLER_TITLE_LENGTH = (5, 100)
SELLER_DESCRIPTION_LENGTH = (50, 1000)
SKILL_LENGTH = (2, 30)
LANGUAGE_LENGTH = (2, 30)
MAX_SKILLS = 20
MAX_LANGUAGES = 10
HOURLY_RATE_RANGE = (1, 1000)
HOURLY_RATE_STEP = "0.5"


def validate_full_name(value):
    full_name = clean_text(value, "full_name", 2, 50, label="Full name")
    if not FULL_NAME_RE.match(full_name):
        raise InvalidField("full_name", "Full name can only contain letters and spaces")
    return full_name


def validate_username(value):
    username = clean_text(value, "username", 3, 30, label="Username")
    if not USERNAME_RE.match(username):
        raise InvalidField("username", "Username can only contain letters, numbers, and underscores")
    if "admin" in username.lower():
        raise InvalidField("username", 'Username cannot contain the word "admin"')
    return username


def validate_email_address(value):
    email = clean_text(value, "email", 3, 254, label="Email")
    try:
        validate_email(email)
    except DjangoValidationError:
        raise InvalidField("email", "Please provide a valid email address") from None
    email = email.lower()
    if email.rsplit("@", 1)[1] in BLOCKED_EMAIL_DOMAINS:
        raise InvalidField("email", "This email domain is not allowed")
    return email


def validate_password_strength(value, field="password"):
    if not isinstance(value, str) or not value:
        raise InvalidField(field, "Password is required")
    if not 8 <= len(value) <= 100:
        raise InvalidField(field, "Password must be between 8 and 100 characters")
    if not PASSWORD_RE.match(value):
        raise InvalidField(field, "Password must include: uppercase, lowercase, number, and special character")
    return value


def validate_registration(full_name, username, email, raw_password):
    """Return the cleaned registration fields or raise InvalidField for the first bad one."""
    return {
        "full_name": validate_full_name(full_name),
        "username": validate_username(username),
        "email": validate_email_address(email),
        "password": validate_password_strength(raw_password),
    }


def _seller_fields(draft, partial):
    cleaned = {}

    if not partial or "skills" in draft:
        cleaned["skills"] = clean_string_list(
            draft.get("skills"), "skills", MAX_SKILLS, *SKILL_LENGTH, label="Skills"
        )
    if not partial or "description" in draft:
        cleaned["description"] = clean_text(draft.get("description"), "description", *SELLER_DESCRIPTION_LENGTH)
    if not partial or "hourly_rate" in draft:
        cleaned["hourly_rate"] = clean_decimal(
            draft.get("hourly_rate"), "hourly_rate", *HOURLY_RATE_RANGE, label="Hourly rate", step=HOURLY_RATE_STEP
        )
    if not partial or "title" in draft:
        cleaned["title"] = clean_text(draft.get("title"), "title", *SELLER_TITLE_LENGTH)
    if "languages" in draft:
        cleaned["languages"] = clean_string_list(
            draft.get("languages"), "languages", MAX_LANGUAGES, *LANGUAGE_LENGTH, label="Languages", required=False
        )
    elif not partial:
        cleaned["languages"] = []
    if partial and "is_available" in draft:
        if not isinstance(draft["is_available"], bool):
            raise InvalidField("is_available", "Availability must be true or false")
        cleaned["is_available"] = draft["is_available"]
    return cleaned


def validate_seller_draft(draft):
    """Full validation for the become-seller form, in field order skills, description, rate, title, languages."""
    return _seller_fields(draft or {}, partial=False)


def validate_seller_changes(changes):
    """Validation for a partial seller profile update; only submitted fields are checked."""
    return _seller_fields(changes or {}, partial=True)
