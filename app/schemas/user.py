from typing import Annotated, Optional

from pydantic import Field, field_validator

from app.schemas.base import RequestModel, check_email, empty_to_none, reject_null
from app.schemas.company import CompanyCreate

UserName = Annotated[str, Field(min_length=2, max_length=100)]
UserPhone = Annotated[str, Field(max_length=50)]


class UserRegistration(RequestModel):
    name: UserName
    email: str
    password: str = Field(min_length=8)
    phone: Optional[UserPhone] = None

    _email = field_validator("email")(check_email)
    _phone = field_validator("phone")(empty_to_none)


class RegisterRequest(RequestModel):
    """
    Sign-up body in user_only mode. Any company sent along is ignored.
    """
    user: UserRegistration


class RegisterWithCompanyRequest(RegisterRequest):
    company: CompanyCreate


class LoginRequest(RequestModel):
    email: str
    password: str = Field(min_length=1)

    _email = field_validator("email")(check_email)


class UserUpdate(RequestModel):
    """
    Partial profile update. An empty phone clears it.
    """
    name: Optional[UserName] = None
    email: Optional[str] = None
    phone: Optional[UserPhone] = None

    _not_null = field_validator("name", "email")(reject_null)
    _email = field_validator("email")(check_email)
    _phone = field_validator("phone")(empty_to_none)
