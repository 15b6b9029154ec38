"""
Field validation helpers for service write paths.

Validators raise ``InvalidField`` on the first failing field; services catch it
and return ``invalid_field_result(exc)`` so callers only ever see a
``validation_failed`` ServiceResult.
"""

from decimal import Decimal, InvalidOperation

from utils.service_base import ErrorCodes, ServiceResult, service_err


class InvalidField(Exception):
    def __init__(self, field, message):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


def invalid_field_result(exc: InvalidField) -> ServiceResult:
    return service_err(ErrorCodes.VALIDATION_FAILED, exc.message, field=exc.field)


def clean_text(value, field, min_length, max_length, label=None, required=True):
    """Trim a string and check its length. Returns None for an absent optional value."""
    label = label or field.replace("_", " ").capitalize()
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise InvalidField(field, f"{label} is required")
        return None
    if not isinstance(value, str):
        raise InvalidField(field, f"{label} must be a string")
    value = value.strip()
    if not min_length <= len(value) <= max_length:
        raise InvalidField(field, f"{label} must be between {min_length} and {max_length} characters")
    return value


def clean_string_list(values, field, max_items, item_min, item_max, label=None, required=True):
    """
    Trim every entry and drop duplicates, keeping the first occurrence.

    The item count limit applies to the submitted list.
    """
    label = label or field.capitalize()
    if values is None:
        if required:
            raise InvalidField(field, f"{label} are required")
        return []
    if not isinstance(values, (list, tuple)):
        raise InvalidField(field, f"{label} must be a list")
    if required and not values:
        raise InvalidField(field, f"At least one entry in {label.lower()} is required")
    if len(values) > max_items:
        raise InvalidField(field, f"Maximum {max_items} {label.lower()} allowed")

    cleaned = []
    for value in values:
        if not isinstance(value, str) or not value.strip():
            raise InvalidField(field, f"{label} must be non-empty strings")
        value = value.strip()
        if not item_min <= len(value) <= item_max:
            raise InvalidField(
                field, f"Each entry in {label.lower()} must be between {item_min} and {item_max} characters"
            )
        if value not in cleaned:
            cleaned.append(value)
    return cleaned


def clean_decimal(value, field, minimum, maximum, label=None, step=None):
    label = label or field.replace("_", " ").capitalize()
    if value is None or value == "":
        raise InvalidField(field, f"{label} is required")
    if isinstance(value, bool):
        raise InvalidField(field, f"{label} must be a number")
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise InvalidField(field, f"{label} must be a number") from None
    if not number.is_finite():
        raise InvalidField(field, f"{label} must be a number")
    if not Decimal(str(minimum)) <= number <= Decimal(str(maximum)):
        raise InvalidField(field, f"{label} must be between {minimum} and {maximum}")
    if step is not None and number % Decimal(str(step)) != 0:
        raise InvalidField(field, f"{label} must be in increments of {Decimal(str(step)):.2f}")
    return number


def clean_int(value, field, minimum, maximum, label=None):
    label = label or field.replace("_", " ").capitalize()
    if value is None or value == "" or isinstance(value, bool):
        raise InvalidField(field, f"{label} is required")
    if isinstance(value, float) and not value.is_integer():
        raise InvalidField(field, f"{label} must be a whole number")
    try:
        number = int(str(value).strip()) if not isinstance(value, (int, float)) else int(value)
    except ValueError:
        raise InvalidField(field, f"{label} must be a whole number") from None
    if not minimum <= number <= maximum:
        raise InvalidField(field, f"{label} must be between {minimum} and {maximum}")
    return number
