"""Input validators shared by the identity and feed apps."""
import re
from typing import Optional

from .exceptions import ValidationError

MAX_IMAGE_SIZE_CHARS = 5 * 1024 * 1024
HTTP_IMAGE_URL_PATTERN = re.compile(r'^https?://\S+$', re.IGNORECASE)
DATA_IMAGE_URL_PATTERN = re.compile(r'^data:image/[a-zA-Z0-9.+-]+;base64,')


def is_valid_image_reference(value: Optional[str]) -> bool:
    """
    An image reference is either an http(s) URL or a base64 image data-URI,
    at most 5MB encoded.
    """
    if not value or not isinstance(value, str):
        return False

    value = value.strip()
    if not value or len(value) > MAX_IMAGE_SIZE_CHARS:
        return False

    return bool(HTTP_IMAGE_URL_PATTERN.match(value) or DATA_IMAGE_URL_PATTERN.match(value))


def clean_image_reference(value: Optional[str], field_label: str = "Image") -> str:
    """Trim an optional image reference, raising if it is present but invalid."""
    value = (value or "").strip()
    if value and not is_valid_image_reference(value):
        raise ValidationError(f"{field_label} must be a valid image URL or uploaded image data")
    return value


def clean_text(value: Optional[str], *, max_length: int, required_message: str, too_long_message: str) -> str:
    """Trim text, rejecting empty/whitespace-only input and input over max_length."""
    value = (value or "").strip()
    if not value:
        raise ValidationError(required_message)
    if len(value) > max_length:
        raise ValidationError(too_long_message)
    return value
