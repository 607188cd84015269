"""
services/validators.py
----------------------
Business rules for user data. Pure functions: no I/O, no logging.

The `check_*` functions return the first failing ValidationReason (or None);
the `validate_*` functions raise ValidationError instead.
"""

from typing import Any, Optional

from errors import ValidationError, ValidationReason
from models.user import User

MIN_AGE = 1
MAX_AGE = 150


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def check_id(user_id: Any) -> Optional[ValidationReason]:
    if not _is_int(user_id) or user_id <= 0:
        return ValidationReason.INVALID_ID
    return None


def check_user(candidate: User, require_id: bool = False) -> Optional[ValidationReason]:
    """
    Check a candidate user against the rules, first failure wins:
    id (only when `require_id`), name, email presence, email format, age bounds.
    """
    if require_id and check_id(candidate.id):
        return ValidationReason.INVALID_ID
    if _is_blank(candidate.name):
        return ValidationReason.EMPTY_NAME
    if _is_blank(candidate.email):
        return ValidationReason.EMPTY_EMAIL
    if "@" not in candidate.email:
        return ValidationReason.INVALID_EMAIL_FORMAT
    if not _is_int(candidate.age) or candidate.age < MIN_AGE:
        return ValidationReason.AGE_TOO_LOW
    if candidate.age > MAX_AGE:
        return ValidationReason.AGE_TOO_HIGH
    return None


def validate_id(user_id: Any) -> None:
    reason = check_id(user_id)
    if reason:
        raise ValidationError(reason)


def validate_user(candidate: User, require_id: bool = False) -> None:
    """Raise ValidationError if `candidate` breaks any rule."""
    reason = check_user(candidate, require_id=require_id)
    if reason:
        raise ValidationError(reason)
