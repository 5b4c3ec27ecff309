"""Core types for the formgate validation engine.

This module defines the foundational types shared by every layer:
- Rule descriptors: one frozen dataclass per directive kind
- ValidationResult / FormReport: outcomes of a single field and of a pass
- Collaborator protocols: FormInput (field source), StatusSink, SubmitGate
"""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Protocol


# Text handed to the status sink for a valid field
SUCCESS_MESSAGE = "Good"


# =============================================================================
# Rule Descriptors
# =============================================================================


@dataclass(frozen=True)
class Rule:
    """Base class for rule descriptors.

    Subclasses set `token` to the directive name they are parsed from.
    """

    token: ClassVar[str] = ""

    @property
    def directive(self) -> str:
        """Canonical directive text for this rule."""
        return self.token

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"rule": self.token}
        data.update(asdict(self))
        return data


@dataclass(frozen=True)
class Required(Rule):
    """Field must contain non-whitespace text."""

    token: ClassVar[str] = "req"


@dataclass(frozen=True)
class Length(Rule):
    """Trimmed length must lie in [min, max] inclusive."""

    token: ClassVar[str] = "len"

    min: int
    max: int

    @property
    def directive(self) -> str:
        return f"len:{self.min}-{self.max}"


@dataclass(frozen=True)
class Pattern(Rule):
    """Trimmed value must match a preset pattern."""

    token: ClassVar[str] = "regex"

    preset: str

    @property
    def directive(self) -> str:
        return f"regex:{self.preset}"


@dataclass(frozen=True)
class MatchField(Rule):
    """Trimmed value must equal another field's trimmed value."""

    token: ClassVar[str] = "match"

    other: str

    @property
    def directive(self) -> str:
        return f"match:{self.other}"


@dataclass(frozen=True)
class RadioGroupRequired(Rule):
    """Exactly one member of a radio group must be checked."""

    token: ClassVar[str] = "radio"

    group: str

    @property
    def directive(self) -> str:
        return f"radio:{self.group}"


@dataclass(frozen=True)
class CheckboxGroupCount(Rule):
    """Number of checked boxes in a group must lie in [min, max]."""

    token: ClassVar[str] = "checkbox"

    group: str
    min: int
    max: int

    @property
    def directive(self) -> str:
        return f"checkbox:{self.group}:{self.min}-{self.max}"


@dataclass(frozen=True)
class SelectRequired(Rule):
    """A select must not sit on its placeholder option (index 0)."""

    token: ClassVar[str] = "select-req"


@dataclass(frozen=True)
class SelectAlwaysValid(Rule):
    """A select that can never be invalid but still gets a status."""

    token: ClassVar[str] = "select"


@dataclass(frozen=True)
class EitherOr(Rule):
    """This field or another one must be filled in.

    Reads the other field's validity as of the previous evaluation round.
    """

    token: ClassVar[str] = "or"

    other: str
    label: str

    @property
    def directive(self) -> str:
        return f"or:{self.other}:{self.label}"


# =============================================================================
# Results
# =============================================================================


class FieldState(Enum):
    """Validation state of a single field."""

    UNVALIDATED = "unvalidated"
    VALID = "valid"
    INVALID = "invalid"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of evaluating one rule or one field.

    Attributes:
        valid: True if the rule (or every rule of the field) passed
        message: User-facing failure reason; None exactly when valid
    """

    valid: bool
    message: str | None = None

    def __post_init__(self) -> None:
        if self.valid and self.message is not None:
            raise ValueError("A valid result cannot carry a failure message")
        if not self.valid and not self.message:
            raise ValueError("An invalid result requires a failure message")

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, message: str) -> "ValidationResult":
        return cls(valid=False, message=message)

    def to_dict(self) -> dict[str, Any]:
        return {"valid": self.valid, "message": self.message}


@dataclass
class FormReport:
    """Result of one validation pass over a form.

    Attributes:
        valid: Aggregate validity, the AND of every field's validity
        results: Per-field results in declaration order
    """

    valid: bool
    results: dict[str, ValidationResult] = field(default_factory=dict)

    @property
    def errors(self) -> dict[str, str]:
        """Failure messages keyed by field name."""
        return {
            name: result.message
            for name, result in self.results.items()
            if not result.valid and result.message
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "fields": [
                {"name": name, **result.to_dict()}
                for name, result in self.results.items()
            ],
        }


# =============================================================================
# Collaborator Protocols
# =============================================================================


class InputKind(Enum):
    """Kinds of input widget the engine knows how to read."""

    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"


ChangeCallback = Callable[["FormInput"], None]


class FormInput(Protocol):
    """Protocol for the field source collaborator.

    One object per input widget. Checkbox and radio groups are several
    inputs sharing a name; at most one of them carries the directive.
    """

    name: str
    kind: InputKind
    directive: str | None

    @property
    def value(self) -> str:
        """Raw text value (option value for selects and group members)."""
        ...

    @property
    def checked(self) -> bool:
        """Checked state of checkboxes and radio members."""
        ...

    @property
    def selected_index(self) -> int:
        """Selected option index of selects."""
        ...

    def subscribe(self, callback: ChangeCallback) -> None:
        """Register a callback fired on every value-changing edit."""
        ...


class StatusSink(Protocol):
    """Protocol for the status rendering collaborator."""

    def render(self, field_name: str, is_valid: bool, message: str) -> None:
        """Show a success or error indicator for one field."""
        ...


class SubmitGate(Protocol):
    """Protocol for the collaborator that enables form submission."""

    def set_enabled(self, enabled: bool) -> None:
        ...
