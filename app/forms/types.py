"""
app/forms/types.py

Purpose: Declarative form descriptors

- Field types and validation rules
- Field and form configuration models served to the web client
"""

from enum import Enum
from typing import Any, List, Literal, Optional, Union

from app.schemas.base import CamelModel


class FieldType(str, Enum):
    TEXT = "text"
    EMAIL = "email"
    PASSWORD = "password"
    NUMBER = "number"
    TEL = "tel"
    URL = "url"
    TEXTAREA = "textarea"
    SELECT = "select"
    MULTISELECT = "multiselect"
    DATE = "date"
    CHECKBOX = "checkbox"


# Types rendered as a single text input
TEXT_INPUT_TYPES = frozenset({
    FieldType.TEXT,
    FieldType.EMAIL,
    FieldType.PASSWORD,
    FieldType.NUMBER,
    FieldType.TEL,
    FieldType.URL,
})

OPTION_TYPES = frozenset({FieldType.SELECT, FieldType.MULTISELECT})


class ValidationRule(CamelModel):
    """
    Field validation rules.

    `custom` names a registered check (see forms.validation) so the
    config stays JSON-serializable.
    """
    required: bool = False
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None
    email: bool = False
    custom: Optional[str] = None


class SelectOption(CamelModel):
    value: Union[str, int]
    label: str
    disabled: bool = False


class FieldConfig(CamelModel):
    name: str
    label: str
    type: FieldType
    placeholder: Optional[str] = None
    helper_text: Optional[str] = None
    disabled: bool = False
    validation: Optional[ValidationRule] = None
    full_width: bool = True
    default_value: Any = None
    options: Optional[List[SelectOption]] = None
    multiline: bool = False
    rows: Optional[int] = None
    min_date: Optional[str] = None
    max_date: Optional[str] = None
    label_placement: Optional[Literal["end", "start", "top", "bottom"]] = None

    @property
    def required(self) -> bool:
        return bool(self.validation and self.validation.required)


class FormConfig(CamelModel):
    name: str
    fields: List[FieldConfig]
    spacing: int = 3
    direction: Literal["column", "row"] = "column"
    submit_label: str = "Submit"
    show_submit_button: bool = True
    reset_on_submit: bool = False

    def field(self, name: str) -> Optional[FieldConfig]:
        for field in self.fields:
            if field.name == name:
                return field
        return None
