"""
app/schemas/company.py

Purpose: Company and membership payloads

- Validated input for create / partial update
- Member invitation input
- Website, description and industry accept "" or null, which clears them
"""

from typing import Annotated, Optional

from pydantic import Field, field_validator

from app.models.roles import Role
from app.schemas.base import RequestModel, check_email, check_url, empty_to_none, reject_null

CompanyName = Annotated[str, Field(min_length=2, max_length=200)]
Phone = Annotated[str, Field(min_length=1, max_length=50)]
Street = Annotated[str, Field(min_length=3, max_length=200)]
City = Annotated[str, Field(min_length=2, max_length=100)]
State = Annotated[str, Field(min_length=2, max_length=100)]
PostalCode = Annotated[str, Field(min_length=3, max_length=20)]
Country = Annotated[str, Field(min_length=1)]
Industry = Annotated[str, Field(max_length=100)]
Description = Annotated[str, Field(max_length=500)]

CLEARABLE_FIELDS = ("website", "description", "industry")


class Address(RequestModel):
    street: Street
    city: City
    state: State
    postal_code: PostalCode
    country: Country


class AddressPatch(RequestModel):
    street: Optional[Street] = None
    city: Optional[City] = None
    state: Optional[State] = None
    postal_code: Optional[PostalCode] = None
    country: Optional[Country] = None

    _not_null = field_validator("*")(reject_null)


class CompanyCreate(RequestModel):
    name: CompanyName
    email: str
    phone: Phone
    address: Address
    website: Optional[str] = None
    description: Optional[Description] = None
    industry: Optional[Industry] = None

    _email = field_validator("email")(check_email)
    _clearable = field_validator(*CLEARABLE_FIELDS)(empty_to_none)
    _website = field_validator("website")(check_url)


class CompanyUpdate(RequestModel):
    """
    Partial update. Only fields present in the request are applied
    (see model_fields_set).
    """
    name: Optional[CompanyName] = None
    email: Optional[str] = None
    phone: Optional[Phone] = None
    address: Optional[AddressPatch] = None
    website: Optional[str] = None
    description: Optional[Description] = None
    industry: Optional[Industry] = None

    _not_null = field_validator("name", "email", "phone", "address")(reject_null)
    _email = field_validator("email")(check_email)
    _clearable = field_validator(*CLEARABLE_FIELDS)(empty_to_none)
    _website = field_validator("website")(check_url)


class MemberInvite(RequestModel):
    email: str
    role: Role

    _email = field_validator("email")(check_email)
