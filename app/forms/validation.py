"""
app/forms/validation.py

Purpose: Client-side field validation

- Rule order: required, email, pattern, string length, number range, custom
- Empty values skip every rule except required
- Named custom checks (strong_password, url)
"""

import re
from typing import Any, Callable, Dict, Iterable, Optional

from app.forms.types import FieldConfig, ValidationRule
from utils.constants import (
    MSG_REQUIRED,
    MSG_INVALID_EMAIL,
    MSG_INVALID_FORMAT,
    MSG_INVALID_URL,
    MSG_PASSWORD_STRENGTH,
    min_length_message,
    max_length_message,
    min_value_message,
    max_value_message,
)
from utils.validation_utils import is_blank, validate_email, validate_url, validate_password_strength


def _strong_password(value: Any) -> Optional[str]:
    if not value:
        return None
    return None if validate_password_strength(value) else MSG_PASSWORD_STRENGTH


def _url(value: Any) -> Optional[str]:
    if not value:
        return None
    return None if validate_url(value) else MSG_INVALID_URL


CUSTOM_VALIDATORS: Dict[str, Callable[[Any], Optional[str]]] = {
    "strong_password": _strong_password,
    "url": _url,
}


def validate_field(value: Any, rules: Optional[ValidationRule]) -> Optional[str]:
    """
    Validates one value against its rules.

    Returns:
        The first error message, or None if valid
    """
    if rules is None:
        return None

    if rules.required and is_blank(value):
        return MSG_REQUIRED

    # Nothing else applies to empty values
    if not value:
        return None

    if rules.email and isinstance(value, str) and not validate_email(value):
        return MSG_INVALID_EMAIL

    if rules.pattern and isinstance(value, str) and not re.search(rules.pattern, value):
        return MSG_INVALID_FORMAT

    if isinstance(value, str):
        if rules.min_length and len(value) < rules.min_length:
            return min_length_message(rules.min_length)
        if rules.max_length and len(value) > rules.max_length:
            return max_length_message(rules.max_length)

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if rules.min is not None and value < rules.min:
            return min_value_message(_number(rules.min))
        if rules.max is not None and value > rules.max:
            return max_value_message(_number(rules.max))

    if rules.custom:
        check = CUSTOM_VALIDATORS.get(rules.custom)
        if check is None:
            raise ValueError(f"Unknown custom validator: {rules.custom}")
        error = check(value)
        if error:
            return error

    return None


def validate_form(data: Dict[str, Any], fields: Iterable[FieldConfig]) -> Dict[str, str]:
    """
    Validates every field; returns field name -> message for failures.
    """
    errors: Dict[str, str] = {}
    for field in fields:
        error = validate_field(data.get(field.name), field.validation)
        if error:
            errors[field.name] = error
    return errors


def _number(value: float):
    # 18.0 renders as 18
    return int(value) if float(value).is_integer() else value
