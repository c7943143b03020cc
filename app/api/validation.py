"""
app/api/validation.py

Purpose: Request body parsing

- Parses JSON bodies into the pydantic request schemas
- Reports pydantic errors as one message per field (ValidationError)
- Translates API paths (user.email, address.city) to the form field
  names the web client renders errors under
"""

from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import flatten_request_errors
from app.core.exceptions import ValidationError
from utils.constants import (
    MSG_VALIDATION_FAILED,
    MSG_USER_NAME,
    MSG_USER_EMAIL,
    MSG_USER_PASSWORD,
    MSG_USER_REQUIRED,
    MSG_COMPANY_REQUIRED,
    MSG_COMPANY_NAME,
    MSG_COMPANY_EMAIL,
    MSG_COMPANY_PHONE,
    MSG_ADDRESS_REQUIRED,
    MSG_ADDRESS_OBJECT,
    MSG_STREET,
    MSG_CITY,
    MSG_STATE,
    MSG_POSTAL_CODE,
    MSG_COUNTRY,
    MSG_WEBSITE,
    MSG_DESCRIPTION,
    MSG_INDUSTRY,
    MSG_PHONE,
    MSG_MEMBER_ROLE,
    MSG_LOGIN_EMAIL,
    MSG_LOGIN_PASSWORD,
)

Model = TypeVar("Model", bound=BaseModel)


def parse_body(
    model: Type[Model],
    payload: Optional[Dict[str, Any]],
    messages: Optional[Dict[str, str]] = None,
    field_names: Optional[Dict[str, str]] = None,
) -> Model:
    """
    Validates a JSON body against `model`.

    Args:
        model: Request schema
        payload: Decoded request body (None for an empty body)
        messages: API path -> message shown to the user
        field_names: API path -> client field name

    Raises:
        ValidationError: with a field -> message map
    """
    try:
        return model.model_validate(payload if payload is not None else {})
    except PydanticValidationError as e:
        errors = flatten_request_errors(e.errors(), field_names=field_names, messages=messages)
        raise ValidationError(MSG_VALIDATION_FAILED, errors)


def _prefixed(prefix: str, table: Dict[str, str]) -> Dict[str, str]:
    return {f"{prefix}.{path}": value for path, value in table.items()}


# ============================================================
# MESSAGES
# ============================================================

USER_MESSAGES = {
    "name": MSG_USER_NAME,
    "email": MSG_USER_EMAIL,
    "password": MSG_USER_PASSWORD,
    "phone": MSG_PHONE,
}

COMPANY_MESSAGES = {
    "name": MSG_COMPANY_NAME,
    "email": MSG_COMPANY_EMAIL,
    "phone": MSG_COMPANY_PHONE,
    "address": MSG_ADDRESS_REQUIRED,
    "address.street": MSG_STREET,
    "address.city": MSG_CITY,
    "address.state": MSG_STATE,
    "address.postalCode": MSG_POSTAL_CODE,
    "address.country": MSG_COUNTRY,
    "website": MSG_WEBSITE,
    "industry": MSG_INDUSTRY,
    "description": MSG_DESCRIPTION,
}

COMPANY_UPDATE_MESSAGES = {**COMPANY_MESSAGES, "address": MSG_ADDRESS_OBJECT}

REGISTER_MESSAGES = {
    "user": MSG_USER_REQUIRED,
    "company": MSG_COMPANY_REQUIRED,
    **_prefixed("user", USER_MESSAGES),
    **_prefixed("company", COMPANY_MESSAGES),
}

LOGIN_MESSAGES = {
    "email": MSG_LOGIN_EMAIL,
    "password": MSG_LOGIN_PASSWORD,
}

MEMBER_MESSAGES = {
    "email": MSG_USER_EMAIL,
    "role": MSG_MEMBER_ROLE,
}


# ============================================================
# FIELD NAMES
# ============================================================

COMPANY_FIELD_NAMES = {
    "name": "companyName",
    "email": "companyEmail",
    "phone": "companyPhone",
    "address.street": "street",
    "address.city": "city",
    "address.state": "state",
    "address.postalCode": "postalCode",
    "address.country": "country",
}

REGISTER_FIELD_NAMES = {
    "user.name": "userName",
    "user.email": "userEmail",
    "user.password": "userPassword",
    "user.phone": "userPhone",
    "company.website": "website",
    "company.industry": "industry",
    "company.description": "description",
    **_prefixed("company", COMPANY_FIELD_NAMES),
}
