"""
app/forms/state.py

Purpose: Controlled form state

- Values, touched fields and submit attempts for one form instance
- Errors are shown only for touched fields or after a submit attempt
- Server errors share the same path and clear when their field changes
- render() turns descriptors into controlled-input props
"""

from typing import Any, Callable, Dict, List, Optional, Set

from app.core.logging import get_logger
from app.forms.types import FieldConfig, FieldType, FormConfig, TEXT_INPUT_TYPES, OPTION_TYPES
from app.forms.validation import validate_field, validate_form

logger = get_logger(__name__)


class FormState:
    """
    State of one rendered form.

    Usage:
        state = FormState(get_form_config("login"))
        state.change("email", "ana@example.com")
        if state.submit(send):
            ...
    """

    def __init__(
        self,
        config: FormConfig,
        initial_values: Optional[Dict[str, Any]] = None,
        external_errors: Optional[Dict[str, str]] = None,
    ):
        self.config = config
        self.initial_values = dict(initial_values or {})
        self.values: Dict[str, Any] = {}
        self.touched: Set[str] = set()
        self.submitted = False
        self._errors: Dict[str, str] = {}
        self._external_errors: Dict[str, str] = {}
        self.reset()
        if external_errors:
            self.set_external_errors(external_errors)

    def _initial_value(self, field: FieldConfig) -> Any:
        if field.name in self.initial_values:
            return self.initial_values[field.name]
        return field.default_value

    def reset(self):
        """
        Restores the initial values and forgets touched state and errors.
        """
        self.values = {field.name: self._initial_value(field) for field in self.config.fields}
        self.touched = set()
        self.submitted = False
        self._errors = {}
        self._external_errors = {}

    def change(self, name: str, value: Any):
        """
        Sets a field value, marks it touched and revalidates it.
        Any server error for the field is dropped.
        """
        self.values[name] = value
        self.touched.add(name)
        self._external_errors.pop(name, None)
        self._validate(name)

    def touch(self, name: str):
        self.touched.add(name)
        self._validate(name)

    def _validate(self, name: str):
        field = self.config.field(name)
        error = validate_field(self.values.get(name), field.validation) if field else None
        if error:
            self._errors[name] = error
        else:
            self._errors.pop(name, None)

    def set_external_errors(self, errors: Dict[str, str]):
        """
        Merges errors returned by the API (field name -> message).
        """
        self._external_errors = dict(errors)

    @property
    def errors(self) -> Dict[str, str]:
        """
        Errors visible to the user, in field order.
        """
        visible = {}
        for field in self.config.fields:
            message = self._errors.get(field.name) or self._external_errors.get(field.name)
            if message and (self.submitted or field.name in self.touched):
                visible[field.name] = message
        return visible

    @property
    def is_valid(self) -> bool:
        return not validate_form(self.values, self.config.fields)

    def submit(self, on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None) -> bool:
        """
        Validates every field and hands the values to `on_submit`.

        Returns:
            False if validation failed and nothing was submitted
        """
        self.submitted = True
        self._errors = validate_form(self.values, self.config.fields)
        if self._errors:
            logger.debug(f"Form {self.config.name} blocked: {sorted(self._errors)}")
            return False

        if on_submit is not None:
            on_submit(dict(self.values))

        if self.config.reset_on_submit:
            self.reset()
        return True

    def render(self, loading: bool = False) -> List[Dict[str, Any]]:
        """
        Props for each field's controlled input.
        """
        errors = self.errors
        return [self._render_field(field, errors.get(field.name), loading) for field in self.config.fields]

    def _render_field(self, field: FieldConfig, error: Optional[str], loading: bool) -> Dict[str, Any]:
        value = self.values.get(field.name)
        props: Dict[str, Any] = {
            "name": field.name,
            "label": field.label,
            "error": error is not None,
            "helperText": error or field.helper_text,
            "disabled": field.disabled or loading,
            "required": field.required,
            "fullWidth": field.full_width,
        }

        if field.type in TEXT_INPUT_TYPES or field.type == FieldType.TEXTAREA:
            is_textarea = field.type == FieldType.TEXTAREA
            props.update({
                "component": "text",
                "inputType": "text" if is_textarea else field.type.value,
                "placeholder": field.placeholder,
                "value": value if value not in (None, "") else "",
                "multiline": is_textarea or field.multiline,
                "rows": (field.rows or 4) if is_textarea else field.rows,
            })
        elif field.type in OPTION_TYPES:
            multiple = field.type == FieldType.MULTISELECT
            props.update({
                "component": "select",
                "multiple": multiple,
                "value": value or ([] if multiple else ""),
                "options": [option.model_dump(by_alias=True) for option in field.options or []],
            })
        elif field.type == FieldType.DATE:
            props.update({
                "component": "text",
                "inputType": "date",
                "value": value or "",
                "min": field.min_date,
                "max": field.max_date,
            })
        elif field.type == FieldType.CHECKBOX:
            props.update({
                "component": "checkbox",
                "checked": bool(value),
                "labelPlacement": field.label_placement or "end",
            })

        return props
