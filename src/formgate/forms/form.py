"""A built form: live inputs plus the field registry validating them."""

from typing import Any

from formgate.forms.inputs import CheckboxInput, Input, RadioInput, SelectInput, TextInput
from formgate.validation import (
    FieldRegistry,
    FormReport,
    FormValidator,
    StatusSink,
    SubmitGate,
)


class FormValueError(ValueError):
    """A submitted value does not fit the input it is meant for."""
    pass


class Form:
    """Inputs of one form instance and their FieldRegistry.

    Values are set by input name:
    - text inputs take a string
    - a checkbox group takes a list of checked option values
    - a single checkbox takes a boolean
    - a radio group takes the chosen option value (None clears it)
    - a select takes an option value or an option index
    """

    def __init__(self, name: str, inputs: list[Input]):
        self.name = name
        self.inputs = inputs
        self.registry = FieldRegistry.from_inputs(inputs)

    def validator(
        self,
        sink: StatusSink | None = None,
        gate: SubmitGate | None = None,
    ) -> FormValidator:
        return FormValidator(self.registry, sink=sink, gate=gate)

    def fill(
        self,
        values: dict[str, Any],
        sink: StatusSink | None = None,
        gate: SubmitGate | None = None,
    ) -> FormReport:
        """Run the initial pass, then enter values one input at a time.

        Each value fires a change notification, so the form goes through
        the same sequence of passes as one filled in by hand.
        """
        validator = self.validator(sink=sink, gate=gate)
        report = validator.start()
        for name, value in values.items():
            self.set_value(name, value)
            report = validator.report or report
        return report

    def members(self, name: str) -> list[Input]:
        """All inputs sharing a name (one, unless it is a group)."""
        return [widget for widget in self.inputs if widget.name == name]

    def set_values(self, values: dict[str, Any]) -> None:
        for name, value in values.items():
            self.set_value(name, value)

    def set_value(self, name: str, value: Any) -> None:
        members = self.members(name)
        if not members:
            raise FormValueError(f"Form '{self.name}' has no input named '{name}'")

        first = members[0]
        try:
            if isinstance(first, CheckboxInput) and len(members) > 1:
                self._set_checkbox_group(name, members, value)
            elif isinstance(first, RadioInput):
                self._set_radio_group(name, members, value)
            else:
                first.set(value)
        except (TypeError, IndexError, ValueError) as e:
            raise FormValueError(str(e)) from e

    def _set_checkbox_group(self, name: str, members: list[Input], value: Any) -> None:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple)):
            raise FormValueError(f"Checkbox group '{name}' expects a list of options")
        options = {m.value for m in members}
        unknown = [v for v in value if v not in options]
        if unknown:
            raise FormValueError(
                f"Checkbox group '{name}' has no option(s): " + ", ".join(map(str, unknown))
            )
        for member in members:
            member.set(member.value in value)

    def _set_radio_group(self, name: str, members: list[Input], value: Any) -> None:
        if value is None:
            for member in members:
                member.set(False)
            return
        if not isinstance(value, str):
            raise FormValueError(f"Radio group '{name}' expects an option value")
        chosen = next((m for m in members if m.value == value), None)
        if chosen is None:
            raise FormValueError(f"'{value}' is not an option of radio group '{name}'")
        chosen.set(True)

    def values(self) -> dict[str, Any]:
        """Current values in the same shapes set_value accepts."""
        result: dict[str, Any] = {}
        for widget in self.inputs:
            if widget.name in result:
                continue
            members = self.members(widget.name)
            if isinstance(widget, CheckboxInput) and len(members) > 1:
                result[widget.name] = [m.value for m in members if m.checked]
            elif isinstance(widget, RadioInput):
                result[widget.name] = next((m.value for m in members if m.checked), None)
            elif isinstance(widget, CheckboxInput):
                result[widget.name] = widget.checked
            elif isinstance(widget, (TextInput, SelectInput)):
                result[widget.name] = widget.value
        return result
