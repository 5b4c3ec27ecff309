"""Tests for the field registry."""

import pytest

from formgate.forms.inputs import CheckboxInput, RadioInput, TextInput
from formgate.validation.errors import (
    DuplicateField,
    MalformedDirective,
    UnknownField,
    UnknownGroup,
)
from formgate.validation.fields import Field, FieldRegistry
from formgate.validation.types import (
    FieldState,
    InputKind,
    Length,
    Required,
    ValidationResult,
)


def signup_inputs():
    return [
        TextInput("username", "req len:5-16"),
        TextInput("password", "req"),
        TextInput("confirm", "match:password"),
        TextInput("nickname", None),
        CheckboxInput("topics", "checkbox:topics:1-2", value="news"),
        CheckboxInput("topics", None, value="tips"),
    ]


class TestFromInputs:
    def test_only_inputs_with_directives_become_fields(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        assert registry.names() == ["username", "password", "confirm", "topics"]
        assert "nickname" not in registry
        assert len(registry) == 4

    def test_rules_are_parsed(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        assert registry.get("username").rules == [Required(), Length(min=5, max=16)]

    def test_fields_start_unvalidated(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        for field in registry:
            assert field.state is FieldState.UNVALIDATED
            assert field.valid is False

    def test_malformed_directive_fails_loudly(self):
        with pytest.raises(MalformedDirective):
            FieldRegistry.from_inputs([TextInput("age", "req len:x")])

    def test_duplicate_field(self):
        with pytest.raises(DuplicateField, match="username"):
            FieldRegistry.from_inputs([
                TextInput("username", "req"),
                TextInput("username", "len:1-5"),
            ])

    def test_match_unknown_field(self):
        with pytest.raises(UnknownField, match="password"):
            FieldRegistry.from_inputs([TextInput("confirm", "match:password")])

    def test_either_or_needs_a_validated_field(self):
        with pytest.raises(UnknownField, match="phone"):
            FieldRegistry.from_inputs([
                TextInput("email", "or:phone:phone"),
                TextInput("phone", None),
            ])

    def test_unknown_group(self):
        with pytest.raises(UnknownGroup, match="plan"):
            FieldRegistry.from_inputs([TextInput("plan", "radio:plan")])


class TestLookup:
    def test_get_unknown_field(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        with pytest.raises(UnknownField):
            registry.get("missing")

    def test_find_input_without_directive(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        assert registry.find_input("nickname").kind is InputKind.TEXT

    def test_members_of_group(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        assert [m.value for m in registry.members("topics")] == ["news", "tips"]

    def test_text_inputs_are_not_group_members(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        with pytest.raises(UnknownGroup):
            registry.members("username")

    def test_view_counts_checked(self):
        inputs = signup_inputs()
        inputs[5].checked = True
        registry = FieldRegistry.from_inputs(inputs)
        assert registry.view().count_checked("topics") == 1

    def test_view_unknown_validity(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        with pytest.raises(UnknownField):
            registry.view().was_valid("nickname")


class TestCrossFieldParticipation:
    def test_participants(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        assert registry.participates_in_cross_field("confirm")
        assert registry.participates_in_cross_field("password")
        assert registry.participates_in_cross_field("topics")
        assert not registry.participates_in_cross_field("username")
        assert not registry.participates_in_cross_field("nickname")

    def test_group_membership_marks_radios(self):
        radios = [RadioInput("plan", "radio:plan", value="a"), RadioInput("plan", None, value="b")]
        registry = FieldRegistry.from_inputs(radios)
        assert registry.participates_in_cross_field("plan")


class TestFieldState:
    def test_apply_valid(self):
        field = Field(name="x", widget=TextInput("x", "req"), rules=[Required()])
        field.apply(ValidationResult.ok())
        assert field.state is FieldState.VALID
        assert field.valid
        assert field.message is None

    def test_apply_invalid(self):
        field = Field(name="x", widget=TextInput("x", "req"), rules=[Required()])
        field.apply(ValidationResult.fail("Required"))
        assert field.state is FieldState.INVALID
        assert not field.valid
        assert field.message == "Required"

    def test_snapshot(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        registry.get("password").apply(ValidationResult.ok())
        assert registry.snapshot() == {
            "username": False,
            "password": True,
            "confirm": False,
            "topics": False,
        }

    def test_to_dict(self):
        registry = FieldRegistry.from_inputs(signup_inputs())
        data = registry.get("username").to_dict()
        assert data == {
            "name": "username",
            "kind": "text",
            "rules": [{"rule": "req"}, {"rule": "len", "min": 5, "max": 16}],
            "state": "unvalidated",
            "message": None,
        }


class TestValidationResult:
    def test_valid_cannot_carry_message(self):
        with pytest.raises(ValueError):
            ValidationResult(valid=True, message="Good")

    def test_invalid_needs_message(self):
        with pytest.raises(ValueError):
            ValidationResult(valid=False)
