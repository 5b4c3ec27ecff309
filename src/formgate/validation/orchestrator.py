"""Validation orchestrator for formgate forms.

Runs validation passes over a FieldRegistry, pushes each field's status to
a StatusSink and the aggregate validity to a SubmitGate.

Ordering policy: a pass is made of rounds. Every round evaluates all fields
in declaration order against a validity snapshot taken before the round,
so no rule ever sees a sibling's state from the round in progress. Raw
values and checked states are always read live. Rounds repeat until the
validity vector stops changing, which makes a second pass with no
intervening edit reproduce the first one.
"""

import logging

from formgate.validation.errors import ConfigurationError
from formgate.validation.evaluator import RuleEvaluator
from formgate.validation.fields import Field, FieldRegistry, RegistryView
from formgate.validation.types import (
    SUCCESS_MESSAGE,
    EitherOr,
    FieldState,
    FormInput,
    FormReport,
    StatusSink,
    SubmitGate,
    ValidationResult,
)

logger = logging.getLogger(__name__)

# Shown for a field whose rules hit a configuration error mid-pass
CONFIGURATION_ERROR_MESSAGE = "Cannot be validated"


class FormValidator:
    """Validates every field of a form and gates submission.

    Example:
        validator = FormValidator(registry, sink=StatusBoard(), gate=SubmitButton())
        validator.start()          # subscribe + initial pass
        username.value = "alice"   # change notification triggers a new pass
        validator.form_valid
    """

    def __init__(
        self,
        registry: FieldRegistry,
        sink: StatusSink | None = None,
        gate: SubmitGate | None = None,
    ):
        self.registry = registry
        self.sink = sink
        self.gate = gate
        self.report: FormReport | None = None
        self._started = False
        self._validating = False
        self._reads_validity = any(
            isinstance(rule, EitherOr) for f in registry for rule in f.rules
        )

    @property
    def form_valid(self) -> bool:
        """Aggregate validity after the most recent pass."""
        return self.report is not None and self.report.valid

    def state_of(self, name: str) -> FieldState:
        return self.registry.get(name).state

    def start(self) -> FormReport:
        """Subscribe to change notifications and run the initial pass.

        Required-but-empty fields are flagged by this pass before any user
        interaction. Calling start() again only returns the last report.
        """
        if self._started and self.report is not None:
            return self.report
        self._started = True
        for widget in self.registry.inputs:
            widget.subscribe(self.handle_change)
        return self.validate_all()

    def handle_change(self, widget: FormInput) -> None:
        """Change-notification callback for every input of the form."""
        self.validate_field(widget.name)

    # -------------------------------------------------------------------------
    # Passes
    # -------------------------------------------------------------------------

    def validate_all(self) -> FormReport:
        """Re-evaluate every field, emit statuses and push the aggregate."""
        if self._validating:
            logger.debug("Ignoring re-entrant validation pass")
            return self._current_report()

        self._validating = True
        try:
            results = self._settle()
            self._emit(results)
            return self._finish(results)
        finally:
            self._validating = False

    def validate_field(self, name: str) -> FormReport:
        """Re-evaluate after a change to the input called `name`.

        Falls back to a full pass unless the input is a field that neither
        reads nor is read by any cross-field rule.
        """
        if self._validating:
            logger.debug("Ignoring re-entrant validation of '%s'", name)
            return self._current_report()

        if (
            self.report is None
            or name not in self.registry
            or self.registry.participates_in_cross_field(name)
        ):
            return self.validate_all()

        self._validating = True
        try:
            field = self.registry.get(name)
            result = self._evaluate(field, self.registry.view())
            field.apply(result)
            self._emit({name: result})
            results = dict(self.report.results)
            results[name] = result
            return self._finish(results)
        finally:
            self._validating = False

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _settle(self) -> dict[str, ValidationResult]:
        """Run rounds until field validity stops changing."""
        max_rounds = len(self.registry) + 1
        results: dict[str, ValidationResult] = {}

        for round_number in range(1, max_rounds + 1):
            previous = self.registry.snapshot()
            view = self.registry.view(previous)
            results = {f.name: self._evaluate(f, view) for f in self.registry}
            for f in self.registry:
                f.apply(results[f.name])

            if not self._reads_validity or self.registry.snapshot() == previous:
                logger.debug("Validation pass settled after %d round(s)", round_number)
                break
        else:
            logger.warning(
                "Field validity did not settle after %d rounds; keeping last round",
                max_rounds,
            )

        return results

    def _evaluate(self, field: Field, view: RegistryView) -> ValidationResult:
        """Evaluate one field, isolating configuration errors to it."""
        try:
            return RuleEvaluator(view).evaluate_rules(field)
        except ConfigurationError:
            logger.exception("Configuration error while validating field '%s'", field.name)
            return ValidationResult.fail(CONFIGURATION_ERROR_MESSAGE)

    def _emit(self, results: dict[str, ValidationResult]) -> None:
        if self.sink is None:
            return
        for name, result in results.items():
            message = SUCCESS_MESSAGE if result.valid else result.message
            self.sink.render(name, result.valid, message)

    def _finish(self, results: dict[str, ValidationResult]) -> FormReport:
        self.report = FormReport(valid=self.registry.all_valid, results=results)
        if self.gate is not None:
            self.gate.set_enabled(self.report.valid)
        logger.debug(
            "Form is %s (%d invalid field(s))",
            "valid" if self.report.valid else "invalid",
            len(self.report.errors),
        )
        return self.report

    def _current_report(self) -> FormReport:
        if self.report is not None:
            return self.report
        return FormReport(valid=False)
