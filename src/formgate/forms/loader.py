"""Load form definitions from YAML files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from formgate.forms.form import Form
from formgate.forms.inputs import (
    CheckboxInput,
    Input,
    RadioInput,
    SelectInput,
    TextInput,
    link_radio_group,
)
from formgate.validation import ConfigurationError

logger = logging.getLogger(__name__)


# Input types accepted in YAML; every text-like type maps onto TextInput
TEXT_TYPES = {"text", "password", "email", "tel", "textarea"}
INPUT_TYPES = TEXT_TYPES | {"checkbox", "radio", "select"}


class FormDefinitionError(ConfigurationError):
    """A form YAML file is structurally invalid."""
    pass


@dataclass
class InputDefinition:
    name: str
    type: str
    display_name: str
    validation: str | None = None
    options: list[str] | None = None
    default: Any = None

    @property
    def is_group(self) -> bool:
        return self.type in ("checkbox", "radio") and bool(self.options)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "displayName": self.display_name,
            "validation": self.validation,
            "options": self.options,
        }


@dataclass
class FormDefinition:
    name: str
    display_name: str
    inputs: list[InputDefinition] = field(default_factory=list)
    description: str = ""

    def build(self, values: dict[str, Any] | None = None) -> Form:
        """Create a fresh form instance, optionally seeded with values.

        Raises:
            ConfigurationError: If a directive is malformed or references
                a field or group that does not exist
            FormValueError: If a value does not fit its input
        """
        widgets: list[Input] = []
        for definition in self.inputs:
            widgets.extend(_create_widgets(definition))

        form = Form(self.name, widgets)
        defaults = {
            d.name: d.default for d in self.inputs if d.default is not None
        }
        form.set_values(defaults)
        if values:
            form.set_values(values)
        return form

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "displayName": self.display_name,
            "description": self.description,
            "inputs": [i.to_dict() for i in self.inputs],
        }


def _create_widgets(definition: InputDefinition) -> list[Input]:
    """Create the input widget(s) for one definition.

    Groups expand into one widget per option; the directive goes on the
    first member only.
    """
    name = definition.name
    directive = definition.validation

    if definition.type in TEXT_TYPES:
        return [TextInput(name, directive)]

    if definition.type == "select":
        return [SelectInput(name, definition.options or [], directive)]

    options = definition.options or ["on"]
    if definition.type == "radio":
        radios = [
            RadioInput(name, directive if i == 0 else None, value=option)
            for i, option in enumerate(options)
        ]
        link_radio_group(radios)
        return list(radios)

    return [
        CheckboxInput(name, directive if i == 0 else None, value=option)
        for i, option in enumerate(options)
    ]


class FormLoader:
    """Loads form definitions from a directory of YAML files."""

    def __init__(self, forms_path: Path):
        self.forms_path = forms_path
        self.forms: dict[str, FormDefinition] = {}

    def load_all(self) -> None:
        """Load every form and check that each one builds.

        Raises:
            FormDefinitionError: If a file is structurally invalid
            ConfigurationError: If a directive is malformed or dangling
        """
        if not self.forms_path.exists():
            logger.warning("Forms directory not found at %s", self.forms_path)
            return

        for yaml_file in sorted(self.forms_path.glob("*.yaml")):
            with open(yaml_file) as f:
                data = yaml.safe_load(f)
            if not data or "form" not in data:
                logger.warning("Skipping %s: no 'form' key", yaml_file)
                continue

            form = self._resolve_form(data)
            if form.name in self.forms:
                raise FormDefinitionError(
                    f"Form '{form.name}' is defined more than once ({yaml_file.name})"
                )
            # Building parses every directive and checks references
            form.build()
            self.forms[form.name] = form
            logger.debug("Loaded form '%s' from %s", form.name, yaml_file.name)

    def _resolve_form(self, data: dict) -> FormDefinition:
        name = data["form"]
        inputs = [self._resolve_input(name, i) for i in data.get("inputs", [])]
        return FormDefinition(
            name=name,
            display_name=data.get("displayName", self._to_display_name(name)),
            inputs=inputs,
            description=data.get("description", ""),
        )

    def _resolve_input(self, form_name: str, data: dict) -> InputDefinition:
        name = data.get("name")
        if not name:
            raise FormDefinitionError(f"Form '{form_name}' has an input without a name")

        input_type = data.get("type", "text")
        if input_type not in INPUT_TYPES:
            raise FormDefinitionError(
                f"Input '{name}' in form '{form_name}' has unknown type '{input_type}'"
            )

        options = data.get("options")
        if options is not None:
            options = [str(option) for option in options]
        if input_type in ("radio", "select") and not options:
            raise FormDefinitionError(
                f"Input '{name}' in form '{form_name}' needs options"
            )

        return InputDefinition(
            name=name,
            type=input_type,
            display_name=data.get("displayName", self._to_display_name(name)),
            validation=data.get("validation"),
            options=options,
            default=data.get("default"),
        )

    def _to_display_name(self, name: str) -> str:
        """Convert camelCase to Title Case."""
        result = []
        for i, char in enumerate(name):
            if char.isupper() and i > 0:
                result.append(" ")
            result.append(char)
        return "".join(result).title()

    def get_form(self, name: str) -> FormDefinition | None:
        """Get a loaded form by name."""
        return self.forms.get(name)

    def list_forms(self) -> list[str]:
        """List all loaded form names."""
        return list(self.forms.keys())
