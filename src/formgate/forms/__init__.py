"""Form definitions: YAML loading, schema checks and in-memory inputs."""

from formgate.forms.form import Form, FormValueError
from formgate.forms.inputs import (
    CheckboxInput,
    Input,
    RadioInput,
    SelectInput,
    TextInput,
    link_radio_group,
)
from formgate.forms.loader import (
    FormDefinition,
    FormDefinitionError,
    FormLoader,
    InputDefinition,
)
from formgate.forms.schema import ValidationIssue, validate_forms_dir, validate_yaml_file

__all__ = [
    "CheckboxInput",
    "Form",
    "FormDefinition",
    "FormDefinitionError",
    "FormLoader",
    "FormValueError",
    "Input",
    "InputDefinition",
    "RadioInput",
    "SelectInput",
    "TextInput",
    "ValidationIssue",
    "link_radio_group",
    "validate_forms_dir",
    "validate_yaml_file",
]
