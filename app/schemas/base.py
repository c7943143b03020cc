from typing import Any, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from utils.validation_utils import validate_email, validate_url, normalize_email


class CamelModel(BaseModel):
    """
    Base model whose JSON keys are camelCase (postalCode, helperText, ...).
    Accepts either spelling on input.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RequestModel(CamelModel):
    """
    Base for request bodies. Surrounding whitespace is trimmed before any
    length rule runs.
    """
    model_config = ConfigDict(str_strip_whitespace=True)


def check_email(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    if not validate_email(value):
        raise ValueError("Invalid email")
    return normalize_email(value)


def check_url(value: Optional[str]) -> Optional[str]:
    if value and not validate_url(value):
        raise ValueError("Invalid URL")
    return value


def empty_to_none(value: Any) -> Any:
    return None if value == "" else value


def reject_null(value: Any) -> Any:
    # Only reached when the field was sent; absent fields keep their default
    if value is None:
        raise ValueError("Value cannot be null")
    return value
