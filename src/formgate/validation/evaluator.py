"""Rule evaluator for the formgate validation engine.

Evaluates rule descriptors against a field's current value. Cross-field
rules read other inputs through a RegistryView; `or` rules read the other
field's validity from the view's previous-round snapshot.
"""

from formgate.validation.fields import Field, RegistryView
from formgate.validation.patterns import EMAIL_PRESET, PatternRegistry
from formgate.validation.types import (
    CheckboxGroupCount,
    EitherOr,
    Length,
    MatchField,
    Pattern,
    RadioGroupRequired,
    Required,
    Rule,
    SelectAlwaysValid,
    SelectRequired,
    ValidationResult,
)


REQUIRED_MESSAGE = "Required"
INVALID_CHARACTERS_MESSAGE = "Contains invalid characters"
INVALID_EMAIL_MESSAGE = "Not a valid email address"
MISMATCH_MESSAGE = "Does not match"


class RuleEvaluator:
    """Evaluates rules for fields of one form.

    Usage:
        evaluator = RuleEvaluator(registry.view())
        result = evaluator.evaluate_rules(registry.get("username"))
    """

    def __init__(self, view: RegistryView):
        self.view = view

    def evaluate(self, rule: Rule, field: Field) -> ValidationResult:
        """Evaluate one rule against a field."""
        method_name = f"_check_{type(rule).__name__.lower()}"
        method = getattr(self, method_name, None)

        if method is None:
            raise TypeError(f"Unknown rule type: {type(rule).__name__}")

        return method(rule, field)

    def evaluate_rules(self, field: Field) -> ValidationResult:
        """Evaluate a field's rules in order; the first failure wins."""
        results = (self.evaluate(rule, field) for rule in field.rules)
        return next((r for r in results if not r.valid), ValidationResult.ok())

    # -------------------------------------------------------------------------
    # Rule checks
    # -------------------------------------------------------------------------

    def _check_required(self, rule: Required, field: Field) -> ValidationResult:
        if not field.value.strip():
            return ValidationResult.fail(REQUIRED_MESSAGE)
        return ValidationResult.ok()

    def _check_length(self, rule: Length, field: Field) -> ValidationResult:
        length = len(field.value.strip())
        if length < rule.min:
            return ValidationResult.fail(f"Must be longer than {rule.min - 1} characters")
        if length > rule.max:
            return ValidationResult.fail(f"Must be shorter than {rule.max + 1} characters")
        return ValidationResult.ok()

    def _check_pattern(self, rule: Pattern, field: Field) -> ValidationResult:
        value = field.value.strip()
        if rule.preset == EMAIL_PRESET:
            # Empty is left to `req`
            if value and not PatternRegistry.matches(EMAIL_PRESET, value):
                return ValidationResult.fail(INVALID_EMAIL_MESSAGE)
            return ValidationResult.ok()

        if not PatternRegistry.matches(rule.preset, value):
            return ValidationResult.fail(INVALID_CHARACTERS_MESSAGE)
        return ValidationResult.ok()

    def _check_matchfield(self, rule: MatchField, field: Field) -> ValidationResult:
        if field.value.strip() != self.view.value_of(rule.other).strip():
            return ValidationResult.fail(MISMATCH_MESSAGE)
        return ValidationResult.ok()

    def _check_radiogrouprequired(
        self, rule: RadioGroupRequired, field: Field
    ) -> ValidationResult:
        if self.view.count_checked(rule.group) != 1:
            return ValidationResult.fail(REQUIRED_MESSAGE)
        return ValidationResult.ok()

    def _check_checkboxgroupcount(
        self, rule: CheckboxGroupCount, field: Field
    ) -> ValidationResult:
        checked = self.view.count_checked(rule.group)
        if checked == 0 and rule.min > 0:
            return ValidationResult.fail(REQUIRED_MESSAGE)
        if checked < rule.min:
            return ValidationResult.fail(f"Select at least {rule.min}")
        if checked > rule.max:
            return ValidationResult.fail(f"Select {rule.max} at most")
        return ValidationResult.ok()

    def _check_selectrequired(self, rule: SelectRequired, field: Field) -> ValidationResult:
        if field.selected_index == 0:
            return ValidationResult.fail(REQUIRED_MESSAGE)
        return ValidationResult.ok()

    def _check_selectalwaysvalid(
        self, rule: SelectAlwaysValid, field: Field
    ) -> ValidationResult:
        return ValidationResult.ok()

    def _check_eitheror(self, rule: EitherOr, field: Field) -> ValidationResult:
        length = len(field.value.strip())
        other_length = len(self.view.value_of(rule.other).strip())

        both_empty = length == 0 and other_length == 0
        other_invalid = other_length != 0 and not self.view.was_valid(rule.other)
        if both_empty or other_invalid:
            return ValidationResult.fail(f"Either this or {rule.label} must be filled in")
        return ValidationResult.ok()


def evaluate(rule: Rule, field: Field, view: RegistryView) -> ValidationResult:
    """Evaluate a single rule against a field."""
    return RuleEvaluator(view).evaluate(rule, field)


def evaluate_rules(field: Field, view: RegistryView) -> ValidationResult:
    """Evaluate every rule of a field, stopping at the first failure."""
    return RuleEvaluator(view).evaluate_rules(field)
