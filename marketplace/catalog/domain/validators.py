"""
Input rules for gigs and reviews.
"""

from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import URLValidator

from marketplace.catalog.domain.models import Gig
from utils.validators import InvalidField, clean_decimal, clean_int, clean_text


GIG_TITLE_LENGTH = (10, 100)
GIG_DESCRIPTION_LENGTH = (50, 2000)
GIG_PRICE_RANGE = (5, 10000)
DELIVERY_TIME_RANGE = (1, 90)
STAR_RANGE = (1, 5)
REVIEW_COMMENT_LENGTH = (10, 500)

# Fields a gig owner may change; rating fields are never among them
EDITABLE_GIG_FIELDS = ("title", "description", "category", "price", "delivery_time", "image_url")

_url_validator = URLValidator(schemes=["http", "https"])


def validate_category(value):
    if value not in Gig.CATEGORIES:
        raise InvalidField("category", f"Category must be one of: {', '.join(sorted(Gig.CATEGORIES))}")
    return value


def validate_image_url(value):
    if value is None or value == "":
        return ""
    if not isinstance(value, str) or len(value) > 500:
        raise InvalidField("image_url", "Image URL must be a valid URL")
    try:
        _url_validator(value.strip())
    except DjangoValidationError:
        raise InvalidField("image_url", "Image URL must be a valid URL") from None
    return value.strip()


def _gig_fields(data, partial):
    cleaned = {}
    if not partial or "title" in data:
        cleaned["title"] = clean_text(data.get("title"), "title", *GIG_TITLE_LENGTH)
    if not partial or "description" in data:
        cleaned["description"] = clean_text(data.get("description"), "description", *GIG_DESCRIPTION_LENGTH)
    if not partial or "category" in data:
        cleaned["category"] = validate_category(data.get("category"))
    if not partial or "price" in data:
        cleaned["price"] = clean_decimal(data.get("price"), "price", *GIG_PRICE_RANGE)
    if not partial or "delivery_time" in data:
        cleaned["delivery_time"] = clean_int(
            data.get("delivery_time"), "delivery_time", *DELIVERY_TIME_RANGE, label="Delivery time"
        )
    if "image_url" in data:
        cleaned["image_url"] = validate_image_url(data.get("image_url"))
    return cleaned


def validate_gig_draft(data):
    return _gig_fields(data or {}, partial=False)


def validate_gig_changes(changes):
    """Partial gig update. Unknown keys, including the rating fields, are ignored."""
    return _gig_fields(changes or {}, partial=True)


def validate_review(star, comment):
    return (
        clean_int(star, "star", *STAR_RANGE, label="Star"),
        clean_text(comment, "comment", *REVIEW_COMMENT_LENGTH),
    )
