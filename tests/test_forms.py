from fastapi.testclient import TestClient
import pytest

from app.forms.configs import (
    ADD_MEMBER_FORM,
    COMPANY_FORM,
    LOGIN_FORM,
    get_form_config,
    registration_form,
    transform_company_to_form_data,
    transform_form_data_to_company,
    transform_registration_data,
    transform_user_to_form_data,
)
from app.forms.state import FormState
from app.forms.types import FieldConfig, FieldType, FormConfig, ValidationRule
from app.forms.validation import validate_field, validate_form
from app.main import create_app
from conftest import make_settings


@pytest.mark.parametrize("value, rules, expected", [
    ("", ValidationRule(required=True), "This field is required"),
    ([], ValidationRule(required=True), "This field is required"),
    ("", ValidationRule(min_length=3), None),
    ("abc", ValidationRule(email=True, min_length=10), "Please enter a valid email address"),
    ("ab", ValidationRule(pattern=r"^\d+$", min_length=3), "Invalid format"),
    ("ab", ValidationRule(min_length=3), "Minimum length is 3 characters"),
    ("abcd", ValidationRule(max_length=3), "Maximum length is 3 characters"),
    (5, ValidationRule(min=18), "Minimum value is 18"),
    (150, ValidationRule(max=120), "Maximum value is 120"),
    ("password1", ValidationRule(custom="strong_password"), "The password must contain upper-case, lower-case letters and numbers"),
    ("Password1", ValidationRule(custom="strong_password"), None),
    ("not a url", ValidationRule(custom="url"), "Please enter a valid URL"),
    ("ana@example.com", ValidationRule(required=True, email=True), None),
])
def test_validate_field(value, rules, expected):
    assert validate_field(value, rules) == expected


def test_validate_field_without_rules():
    assert validate_field("", None) is None


def test_unknown_custom_validator():
    with pytest.raises(ValueError):
        validate_field("x", ValidationRule(custom="nope"))


def test_validate_form_collects_errors():
    errors = validate_form({"email": "bad"}, LOGIN_FORM.fields)
    assert errors == {"email": "Please enter a valid email address", "password": "This field is required"}


def test_errors_hidden_until_touched():
    state = FormState(LOGIN_FORM)
    assert state.errors == {}
    assert not state.is_valid

    state.change("email", "bad")
    assert state.errors == {"email": "Please enter a valid email address"}

    state.change("email", "ana@example.com")
    assert state.errors == {}


def test_submit_revalidates_everything_and_blocks():
    submitted = []
    state = FormState(LOGIN_FORM)

    assert state.submit(submitted.append) is False
    assert set(state.errors) == {"email", "password"}
    assert submitted == []

    state.change("email", "ana@example.com")
    state.change("password", "secret")
    assert state.submit(submitted.append) is True
    assert submitted == [{"email": "ana@example.com", "password": "secret"}]


def test_external_errors_are_gated_and_cleared_on_change():
    state = FormState(LOGIN_FORM, initial_values={"email": "ana@example.com", "password": "x"})
    state.set_external_errors({"email": "This email is already registered"})
    assert state.errors == {}

    state.touch("email")
    assert state.errors == {"email": "This email is already registered"}

    state.change("email", "other@example.com")
    assert state.errors == {}


def test_reset_on_submit_restores_initial_values():
    state = FormState(ADD_MEMBER_FORM)
    assert state.values == {"email": None, "role": "member"}

    state.change("email", "bob@example.com")
    state.change("role", "admin")
    assert state.submit() is True
    assert state.values == {"email": None, "role": "member"}
    assert state.touched == set()


def test_render_props():
    form = FormConfig(name="demo", fields=[
        FieldConfig(name="bio", label="Bio", type=FieldType.TEXTAREA),
        FieldConfig(name="age", label="Age", type=FieldType.NUMBER, validation=ValidationRule(required=True)),
        FieldConfig(name="tags", label="Tags", type=FieldType.MULTISELECT, options=[{"value": "a", "label": "A"}]),
        FieldConfig(name="terms", label="Terms", type=FieldType.CHECKBOX),
        FieldConfig(name="start", label="Start", type=FieldType.DATE, min_date="2024-01-01"),
    ])
    state = FormState(form, initial_values={"terms": True})
    state.submit()

    bio, age, tags, terms, start = state.render(loading=True)

    assert (bio["component"], bio["multiline"], bio["rows"], bio["value"]) == ("text", True, 4, "")
    assert (age["inputType"], age["required"], age["error"], age["helperText"]) == ("number", True, True, "This field is required")
    assert tags["multiple"] is True and tags["value"] == []
    assert tags["options"] == [{"value": "a", "label": "A", "disabled": False}]
    assert terms["checked"] is True and terms["labelPlacement"] == "end"
    assert start["inputType"] == "date" and start["min"] == "2024-01-01"
    assert all(props["disabled"] for props in (bio, age, tags, terms, start))


def test_registration_form_company_fields_follow_mode():
    user_only = [f.name for f in registration_form(with_company=False).fields]
    with_company = [f.name for f in registration_form(with_company=True).fields]

    assert user_only == ["userName", "userEmail", "userPassword", "userPhone"]
    assert with_company[:4] == user_only
    assert "companyName" in with_company and "postalCode" in with_company


def test_company_form_round_trip():
    company = {
        "name": "Acme",
        "email": "contact@acme.com",
        "phone": "555",
        "address": {"street": "Main", "city": "Lima", "state": "Lima", "postalCode": "15001", "country": "pe"},
        "website": None,
        "industry": "retail",
    }
    form_data = transform_company_to_form_data(company)
    assert form_data["companyName"] == "Acme"
    assert form_data["website"] == ""
    assert form_data["description"] == ""
    assert validate_form(form_data, COMPANY_FORM.fields) == {}

    payload = transform_form_data_to_company(form_data)
    assert payload["address"] == company["address"]
    assert "website" not in payload
    assert payload["industry"] == "retail"


def test_transform_registration_data():
    form_data = {"userName": "Ana", "userEmail": "ana@example.com", "userPassword": "Secret123", "userPhone": ""}
    assert transform_registration_data(form_data, with_company=False) == {
        "user": {"name": "Ana", "email": "ana@example.com", "password": "Secret123"},
    }
    assert "company" in transform_registration_data(form_data, with_company=True)


def test_transform_user_to_form_data():
    assert transform_user_to_form_data({"name": "Ana", "email": "a@b.com", "phone": None}) == {
        "name": "Ana", "email": "a@b.com", "phone": "",
    }


def test_get_form_config_unknown():
    from app.core.exceptions import NotFoundError
    with pytest.raises(NotFoundError):
        get_form_config("nope", make_settings())


def test_add_member_role_options_use_role_labels():
    role = ADD_MEMBER_FORM.field("role")
    assert [(o.value, o.label) for o in role.options] == [
        ("owner", "Owner"), ("admin", "Administrator"), ("member", "Member"), ("viewer", "Viewer"),
    ]


def test_forms_endpoints(client):
    names = client.get("/api/forms").json()["data"]["forms"]
    assert "registration" in names and "add_member" in names

    response = client.get("/api/forms/company")
    assert response.status_code == 200
    config = response.json()["data"]
    assert config["submitLabel"] == "Save changes"
    country = next(f for f in config["fields"] if f["name"] == "country")
    assert country["type"] == "select"
    assert country["validation"] == {"required": True, "email": False}
    website = next(f for f in config["fields"] if f["name"] == "website")
    assert website["validation"]["custom"] == "url"

    assert client.get("/api/forms/unknown").status_code == 404


def test_registration_form_endpoint_follows_mode(store, identity):
    app = create_app(make_settings(REGISTRATION_MODE="with_company"), store=store, identity_provider=identity)
    fields = TestClient(app).get("/api/forms/registration").json()["data"]["fields"]
    assert any(f["name"] == "companyName" for f in fields)
