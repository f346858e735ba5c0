"""
Input validation utilities for free-text answers.
"""

import re
from typing import Optional

from utils.exceptions import ValidationError

MAX_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 300


def sanitize_text(text: Optional[str], max_length: Optional[int] = None) -> str:
    """
    Sanitize user input text.

    Removes control characters (except newlines and tabs), trims whitespace
    and applies an optional length limit.
    """
    if not text:
        return ""

    sanitized = re.sub(r"[\x00-\x08\x0B-\x0C\x0E-\x1F\x7F]", "", str(text))
    sanitized = sanitized.strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized


def require_text(
    text: Optional[str], field: str, max_length: Optional[int] = None
) -> str:
    """
    Sanitize a required free-text answer.

    Raises:
        ValidationError: If nothing is left after sanitizing, or the answer
            is longer than max_length
    """
    value = sanitize_text(text)
    if not value:
        raise ValidationError(f"{field} must not be empty")
    if max_length and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value
