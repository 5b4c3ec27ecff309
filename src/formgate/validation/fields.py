"""Field registry for the formgate validation engine.

A Field wraps one validation-enabled input with its parsed rules and its
last computed state. The FieldRegistry holds every field of a form in
declaration order, plus an index of checkbox/radio inputs by group name so
group rules can count checked members.

Evaluators never touch the registry directly; they get a RegistryView,
which is read-only and carries the validity snapshot of the previous round.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from formgate.validation.errors import DuplicateField, UnknownField, UnknownGroup
from formgate.validation.parser import parse_directive
from formgate.validation.types import (
    CheckboxGroupCount,
    EitherOr,
    FieldState,
    FormInput,
    InputKind,
    MatchField,
    RadioGroupRequired,
    Rule,
    ValidationResult,
)


_GROUP_KINDS = (InputKind.CHECKBOX, InputKind.RADIO)


def referenced_fields(rule: Rule) -> tuple[str, ...]:
    """Names of other inputs a rule reads."""
    if isinstance(rule, (MatchField, EitherOr)):
        return (rule.other,)
    return ()


def referenced_group(rule: Rule) -> str | None:
    """Name of the group a rule counts, if any."""
    if isinstance(rule, (RadioGroupRequired, CheckboxGroupCount)):
        return rule.group
    return None


@dataclass
class Field:
    """A validation-enabled input and its last computed state.

    Attributes:
        name: Stable name, unique within the form
        widget: The input this field reads its value from
        rules: Rules in declared (evaluation) order
        state: Outcome of the most recent pass; only the orchestrator sets it
        message: Failure message when state is INVALID
    """

    name: str
    widget: FormInput
    rules: list[Rule] = field(default_factory=list)
    state: FieldState = FieldState.UNVALIDATED
    message: str | None = None

    @property
    def valid(self) -> bool:
        return self.state is FieldState.VALID

    @property
    def kind(self) -> InputKind:
        return self.widget.kind

    @property
    def value(self) -> str:
        return self.widget.value

    @property
    def checked(self) -> bool:
        return self.widget.checked

    @property
    def selected_index(self) -> int:
        return self.widget.selected_index

    @property
    def is_cross_field(self) -> bool:
        """True if any rule reads another input or a group."""
        return any(
            referenced_fields(rule) or referenced_group(rule) for rule in self.rules
        )

    def apply(self, result: ValidationResult) -> None:
        self.state = FieldState.VALID if result.valid else FieldState.INVALID
        self.message = result.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "rules": [rule.to_dict() for rule in self.rules],
            "state": self.state.value,
            "message": self.message,
        }


class FieldRegistry:
    """All validation-enabled fields of one form, in declaration order.

    Built once from the form's inputs; field state is mutated in place by
    the orchestrator on every pass.

    Example:
        registry = FieldRegistry.from_inputs(inputs)
        for field in registry:
            ...
    """

    def __init__(self, fields: Iterable[Field], inputs: Iterable[FormInput] = ()):
        self._fields: dict[str, Field] = {}
        for f in fields:
            if f.name in self._fields:
                raise DuplicateField(f.name)
            self._fields[f.name] = f

        self._inputs: list[FormInput] = list(inputs)
        self._groups: dict[str, list[FormInput]] = {}
        for widget in self._inputs:
            if widget.kind in _GROUP_KINDS:
                self._groups.setdefault(widget.name, []).append(widget)

        self._cross_field_names = self._collect_cross_field_names()

    @classmethod
    def from_inputs(cls, inputs: Iterable[FormInput]) -> "FieldRegistry":
        """Build a registry from a form's inputs.

        Every input with a directive becomes a field. Directives are parsed
        and cross-field references are checked here, so configuration
        mistakes fail before the first pass.

        Raises:
            MalformedDirective: If a directive cannot be parsed
            DuplicateField: If two inputs with directives share a name
            UnknownField: If a match/or rule names a missing input
            UnknownGroup: If a group rule names a group with no members
        """
        inputs = list(inputs)
        fields = [
            Field(name=widget.name, widget=widget, rules=parse_directive(widget.directive))
            for widget in inputs
            if widget.directive is not None
        ]
        registry = cls(fields, inputs)
        registry.verify_references()
        return registry

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[Field]:
        return iter(self._fields.values())

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, name: object) -> bool:
        return name in self._fields

    def get(self, name: str) -> Field:
        """Get a field by name.

        Raises:
            UnknownField: If no field has this name
        """
        if name not in self._fields:
            raise UnknownField(name)
        return self._fields[name]

    def names(self) -> list[str]:
        return list(self._fields.keys())

    @property
    def inputs(self) -> list[FormInput]:
        return list(self._inputs)

    def find_input(self, name: str) -> FormInput:
        """Find the first input with this name, validated or not."""
        if name in self._fields:
            return self._fields[name].widget
        for widget in self._inputs:
            if widget.name == name:
                return widget
        raise UnknownField(name)

    def members(self, group: str) -> list[FormInput]:
        """All checkbox/radio inputs sharing a group name.

        Raises:
            UnknownGroup: If the group has no members
        """
        members = self._groups.get(group)
        if not members:
            raise UnknownGroup(group)
        return list(members)

    # -------------------------------------------------------------------------
    # Cross-field bookkeeping
    # -------------------------------------------------------------------------

    def verify_references(self) -> None:
        """Check that every referenced field and group exists."""
        for f in self:
            for rule in f.rules:
                for name in referenced_fields(rule):
                    if isinstance(rule, EitherOr):
                        self.get(name)
                    else:
                        self.find_input(name)
                group = referenced_group(rule)
                if group is not None:
                    self.members(group)

    def participates_in_cross_field(self, name: str) -> bool:
        """True if an input name reads, or is read by, a cross-field rule."""
        return name in self._cross_field_names

    def _collect_cross_field_names(self) -> set[str]:
        names: set[str] = set()
        for f in self._fields.values():
            if not f.is_cross_field:
                continue
            names.add(f.name)
            for rule in f.rules:
                names.update(referenced_fields(rule))
                group = referenced_group(rule)
                if group is not None:
                    names.add(group)
        return names

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> dict[str, bool]:
        """Current validity of every field, keyed by name."""
        return {f.name: f.valid for f in self}

    @property
    def all_valid(self) -> bool:
        return all(f.valid for f in self)

    def view(self, validity: Mapping[str, bool] | None = None) -> "RegistryView":
        """Read-only view for evaluators.

        Args:
            validity: Validity snapshot rules should read; defaults to the
                current state of every field
        """
        return RegistryView(self, self.snapshot() if validity is None else validity)


class RegistryView:
    """Read-only access to a form's fields for rule evaluation.

    Field validity comes from a snapshot fixed when the view is created, so
    every rule evaluated in one round sees the same previous-round state.
    """

    def __init__(self, registry: FieldRegistry, validity: Mapping[str, bool]):
        self._registry = registry
        self._validity = dict(validity)

    def value_of(self, name: str) -> str:
        """Raw value of any input in the form."""
        return self._registry.find_input(name).value

    def was_valid(self, name: str) -> bool:
        """Validity of a field as of the snapshot."""
        if name not in self._validity:
            raise UnknownField(name)
        return self._validity[name]

    def count_checked(self, group: str) -> int:
        return sum(1 for widget in self._registry.members(group) if widget.checked)
