import pytest

from app.api.validation import (
    parse_body,
    COMPANY_FIELD_NAMES,
    COMPANY_UPDATE_MESSAGES,
    REGISTER_FIELD_NAMES,
    REGISTER_MESSAGES,
)
from app.core.exceptions import ValidationError
from app.models.roles import Role
from app.schemas.company import CompanyUpdate, MemberInvite
from app.schemas.user import LoginRequest, RegisterRequest, RegisterWithCompanyRequest, UserUpdate


def errors_of(model, payload, messages=None, names=None):
    with pytest.raises(ValidationError) as exc_info:
        parse_body(model, payload, messages, names)
    return exc_info.value.errors


def test_trims_strings_and_normalizes_emails():
    data = parse_body(
        RegisterRequest,
        {"user": {"name": "  Ana  ", "email": " Ana@Example.COM ", "password": "Secret123", "extra": 1}},
    )
    assert data.user.name == "Ana"
    assert data.user.email == "ana@example.com"


def test_missing_body_reports_top_level_sections():
    errors = errors_of(RegisterWithCompanyRequest, None, REGISTER_MESSAGES, REGISTER_FIELD_NAMES)
    assert errors == {"user": "user is required", "company": "company is required"}


def test_nested_errors_use_form_names_and_messages():
    errors = errors_of(
        RegisterWithCompanyRequest,
        {
            "user": {"name": "A", "email": "nope", "password": "short"},
            "company": {"name": "Acme", "email": "a@acme.com", "phone": "1", "address": {"city": "X"}},
        },
        REGISTER_MESSAGES,
        REGISTER_FIELD_NAMES,
    )
    assert errors["userName"] == "Name must be between 2 and 100 characters"
    assert errors["userEmail"] == "A valid email address is required"
    assert errors["userPassword"] == "Password must be at least 8 characters"
    assert errors["city"] == "City must be between 2 and 100 characters"
    assert errors["street"] == "Street must be between 3 and 200 characters"
    assert "companyName" not in errors


def test_optional_clearable_fields_accept_empty_values():
    data = CompanyUpdate.model_validate({"website": "", "description": None, "industry": "  "})
    assert data.model_dump(exclude_unset=True) == {"website": None, "description": None, "industry": None}


def test_optional_fields_are_still_validated_when_present():
    errors = errors_of(
        CompanyUpdate,
        {"name": "", "address": "Main St", "website": "ftp://files"},
        COMPANY_UPDATE_MESSAGES,
        COMPANY_FIELD_NAMES,
    )
    assert set(errors) == {"companyName", "address", "website"}
    assert errors["address"] == "address must be an object"


def test_null_is_rejected_for_fields_that_cannot_be_cleared():
    errors = errors_of(CompanyUpdate, {"name": None, "address": {"city": None}}, COMPANY_UPDATE_MESSAGES, COMPANY_FIELD_NAMES)
    assert set(errors) == {"companyName", "city"}
    assert set(errors_of(UserUpdate, {"email": None})) == {"email"}


def test_partial_address_is_validated_field_by_field():
    errors = errors_of(CompanyUpdate, {"address": {"city": "X", "postalCode": "12345"}}, COMPANY_UPDATE_MESSAGES, COMPANY_FIELD_NAMES)
    assert errors == {"city": "City must be between 2 and 100 characters"}

    data = CompanyUpdate.model_validate({"address": {"postalCode": "12345"}})
    assert data.model_dump(by_alias=True, exclude_unset=True) == {"address": {"postalCode": "12345"}}


def test_user_update_clears_phone():
    data = UserUpdate.model_validate({"phone": ""})
    assert data.model_dump(exclude_unset=True) == {"phone": None}


def test_non_string_values_are_rejected():
    assert set(errors_of(LoginRequest, {"email": 12345, "password": "x"})) == {"email"}


def test_member_role():
    assert MemberInvite.model_validate({"email": "Bob@Example.com", "role": "admin"}).role == Role.ADMIN
    assert errors_of(MemberInvite, {"email": "bob@example.com", "role": "root"}, {"role": "bad role"}) == {"role": "bad role"}


def test_unmapped_errors_keep_the_field_path():
    errors = errors_of(LoginRequest, {"email": "ana@example.com"})
    assert list(errors) == ["password"]
