"""
app/forms/configs.py

Purpose: Form configurations for the web client

- login, registration, company, personal_info, add_member
- Registration carries company fields only in with_company mode
- Transforms between form data and API payloads
"""

from typing import Any, Dict, List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import NotFoundError
from app.forms.types import FieldConfig, FieldType, FormConfig, SelectOption, ValidationRule
from app.models.roles import Role, get_role_label
from utils.constants import COUNTRIES, INDUSTRIES


def _options(items: List[Dict[str, Any]]) -> List[SelectOption]:
    return [SelectOption(**item) for item in items]


# ============================================================
# SHARED FIELDS
# ============================================================

def user_fields(prefix: str = "", with_password: bool = True) -> List[FieldConfig]:
    """
    Name, email, password and phone. With prefix="user" the names become
    userName, userEmail, ... as used by the registration form.
    """
    def named(name: str) -> str:
        return f"{prefix}{name[0].upper()}{name[1:]}" if prefix else name

    fields = [
        FieldConfig(
            name=named("name"),
            label="Full name",
            type=FieldType.TEXT,
            placeholder="Enter your full name",
            validation=ValidationRule(required=True, min_length=2, max_length=100),
            helper_text="This will be your account name",
        ),
        FieldConfig(
            name=named("email"),
            label="Email",
            type=FieldType.EMAIL,
            placeholder="you@example.com",
            validation=ValidationRule(required=True, email=True),
            helper_text="Used to sign in",
        ),
    ]
    if with_password:
        fields.append(FieldConfig(
            name=named("password"),
            label="Password",
            type=FieldType.PASSWORD,
            placeholder="Create a strong password",
            validation=ValidationRule(required=True, min_length=8, custom="strong_password"),
            helper_text="Minimum 8 characters with upper-case, lower-case letters and numbers",
        ))
    fields.append(FieldConfig(
        name=named("phone"),
        label="Phone number",
        type=FieldType.TEL,
        placeholder="+1 (555) 123-4567",
        validation=ValidationRule(required=False),
        helper_text="Optional, used for account recovery",
    ))
    return fields


def company_fields() -> List[FieldConfig]:
    """
    Company fields shared by the registration and edit forms.
    """
    return [
        FieldConfig(
            name="companyName",
            label="Company name",
            type=FieldType.TEXT,
            placeholder="Enter your company name",
            validation=ValidationRule(required=True, min_length=2, max_length=200),
            helper_text="Official company name",
        ),
        FieldConfig(
            name="companyEmail",
            label="Company email",
            type=FieldType.EMAIL,
            placeholder="contact@company.com",
            validation=ValidationRule(required=True, email=True),
            helper_text="Corporate email address",
        ),
        FieldConfig(
            name="companyPhone",
            label="Company phone",
            type=FieldType.TEL,
            placeholder="+1 (555) 123-4567",
            validation=ValidationRule(required=True),
            helper_text="Main company phone",
        ),
        FieldConfig(
            name="street",
            label="Street address",
            type=FieldType.TEXT,
            placeholder="123 Main Street",
            validation=ValidationRule(required=True, min_length=3, max_length=200),
        ),
        FieldConfig(
            name="city",
            label="City",
            type=FieldType.TEXT,
            validation=ValidationRule(required=True, min_length=2, max_length=100),
        ),
        FieldConfig(
            name="state",
            label="State / Province",
            type=FieldType.TEXT,
            validation=ValidationRule(required=True, min_length=2, max_length=100),
        ),
        FieldConfig(
            name="postalCode",
            label="Postal code",
            type=FieldType.TEXT,
            placeholder="01234",
            validation=ValidationRule(required=True, min_length=3, max_length=20),
        ),
        FieldConfig(
            name="country",
            label="Country",
            type=FieldType.SELECT,
            options=[SelectOption(value="", label="Select a country")] + _options(COUNTRIES),
            validation=ValidationRule(required=True),
        ),
        FieldConfig(
            name="website",
            label="Website",
            type=FieldType.URL,
            placeholder="https://www.company.com",
            validation=ValidationRule(required=False, custom="url"),
            helper_text="Company website (optional)",
        ),
        FieldConfig(
            name="industry",
            label="Industry",
            type=FieldType.SELECT,
            options=_options(INDUSTRIES),
            validation=ValidationRule(required=False),
            helper_text="Optional, helps us tailor your experience",
        ),
        FieldConfig(
            name="description",
            label="Company description",
            type=FieldType.TEXTAREA,
            rows=4,
            placeholder="Short description of your company...",
            validation=ValidationRule(required=False, max_length=500),
            helper_text="Optional short description (500 characters max)",
        ),
    ]


# ============================================================
# FORMS
# ============================================================

LOGIN_FORM = FormConfig(
    name="login",
    fields=[
        FieldConfig(
            name="email",
            label="Email",
            type=FieldType.EMAIL,
            placeholder="you@example.com",
            validation=ValidationRule(required=True, email=True),
            helper_text="Enter your email",
        ),
        FieldConfig(
            name="password",
            label="Password",
            type=FieldType.PASSWORD,
            placeholder="Enter your password",
            validation=ValidationRule(required=True),
            helper_text="Enter your password",
        ),
    ],
    submit_label="Sign in",
)

COMPANY_FORM = FormConfig(
    name="company",
    fields=company_fields(),
    submit_label="Save changes",
)

PERSONAL_INFO_FORM = FormConfig(
    name="personal_info",
    fields=user_fields(with_password=False),
    submit_label="Save changes",
)

ADD_MEMBER_FORM = FormConfig(
    name="add_member",
    fields=[
        FieldConfig(
            name="email",
            label="Email",
            type=FieldType.EMAIL,
            placeholder="colleague@company.com",
            validation=ValidationRule(required=True, email=True),
            helper_text="The person must already have an account",
        ),
        FieldConfig(
            name="role",
            label="Role",
            type=FieldType.SELECT,
            options=[SelectOption(value=role.value, label=get_role_label(role)) for role in Role],
            default_value="member",
            validation=ValidationRule(required=True),
        ),
    ],
    submit_label="Send invitation",
    reset_on_submit=True,
)


def registration_form(with_company: bool) -> FormConfig:
    fields = user_fields(prefix="user")
    if with_company:
        fields += company_fields()
    return FormConfig(name="registration", fields=fields, submit_label="Create account")


FORM_NAMES = ("login", "registration", "company", "personal_info", "add_member")


def get_form_config(name: str, config: Optional[Settings] = None) -> FormConfig:
    """
    Returns a form configuration by name.

    Raises:
        NotFoundError: unknown form
    """
    config = config or default_settings
    forms = {
        "login": LOGIN_FORM,
        "registration": registration_form(config.registration_creates_company),
        "company": COMPANY_FORM,
        "personal_info": PERSONAL_INFO_FORM,
        "add_member": ADD_MEMBER_FORM,
    }
    if name not in forms:
        raise NotFoundError("Form")
    return forms[name]


# ============================================================
# TRANSFORMS
# ============================================================

def _or_none(value: Any) -> Any:
    return value or None


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def transform_form_data_to_company(form_data: Dict[str, Any]) -> Dict[str, Any]:
    return _drop_none({
        "name": form_data.get("companyName"),
        "email": form_data.get("companyEmail"),
        "phone": form_data.get("companyPhone"),
        "address": {
            "street": form_data.get("street"),
            "city": form_data.get("city"),
            "state": form_data.get("state"),
            "postalCode": form_data.get("postalCode"),
            "country": form_data.get("country"),
        },
        "website": _or_none(form_data.get("website")),
        "industry": _or_none(form_data.get("industry")),
        "description": _or_none(form_data.get("description")),
    })


def transform_registration_data(form_data: Dict[str, Any], with_company: bool) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "user": _drop_none({
            "name": form_data.get("userName"),
            "email": form_data.get("userEmail"),
            "password": form_data.get("userPassword"),
            "phone": _or_none(form_data.get("userPhone")),
        }),
    }
    if with_company:
        payload["company"] = transform_form_data_to_company(form_data)
    return payload


def transform_company_to_form_data(company: Dict[str, Any]) -> Dict[str, Any]:
    address = company.get("address") or {}
    return {
        "companyName": company.get("name"),
        "companyEmail": company.get("email"),
        "companyPhone": company.get("phone"),
        "street": address.get("street"),
        "city": address.get("city"),
        "state": address.get("state"),
        "postalCode": address.get("postalCode"),
        "country": address.get("country"),
        "website": company.get("website") or "",
        "industry": company.get("industry") or "",
        "description": company.get("description") or "",
    }


def transform_user_to_form_data(user: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "name": user.get("name"),
        "email": user.get("email"),
        "phone": user.get("phone") or "",
    }
