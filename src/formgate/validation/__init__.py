"""formgate validation engine.

This package turns validation directives into typed rules and keeps a
form's per-field status and aggregate validity up to date:
- parser: directive strings -> Rule descriptors
- patterns: preset regular expressions for `regex:` rules
- fields: FieldRegistry of validation-enabled inputs
- evaluator: Rule + Field -> ValidationResult
- orchestrator: FormValidator runs passes and gates submission

Usage:
    from formgate.validation import FieldRegistry, FormValidator

    registry = FieldRegistry.from_inputs(inputs)
    validator = FormValidator(registry, sink=StatusBoard(), gate=SubmitButton())
    validator.start()
"""

from formgate.validation.errors import (
    ConfigurationError,
    DuplicateField,
    MalformedDirective,
    UnknownField,
    UnknownGroup,
    UnknownPreset,
)
from formgate.validation.evaluator import RuleEvaluator, evaluate, evaluate_rules
from formgate.validation.fields import Field, FieldRegistry, RegistryView
from formgate.validation.orchestrator import CONFIGURATION_ERROR_MESSAGE, FormValidator
from formgate.validation.parser import DirectiveParser, format_directive, parse_directive
from formgate.validation.patterns import PatternRegistry
from formgate.validation.sinks import (
    FieldStatus,
    LoggingStatusSink,
    StatusBoard,
    SubmitButton,
)
from formgate.validation.types import (
    SUCCESS_MESSAGE,
    CheckboxGroupCount,
    EitherOr,
    FieldState,
    FormInput,
    FormReport,
    InputKind,
    Length,
    MatchField,
    Pattern,
    RadioGroupRequired,
    Required,
    Rule,
    SelectAlwaysValid,
    SelectRequired,
    StatusSink,
    SubmitGate,
    ValidationResult,
)

__all__ = [
    # Types
    "FieldState",
    "FormInput",
    "FormReport",
    "InputKind",
    "StatusSink",
    "SubmitGate",
    "SUCCESS_MESSAGE",
    "ValidationResult",
    # Rules
    "CheckboxGroupCount",
    "EitherOr",
    "Length",
    "MatchField",
    "Pattern",
    "RadioGroupRequired",
    "Required",
    "Rule",
    "SelectAlwaysValid",
    "SelectRequired",
    # Errors
    "ConfigurationError",
    "DuplicateField",
    "MalformedDirective",
    "UnknownField",
    "UnknownGroup",
    "UnknownPreset",
    # Parsing
    "DirectiveParser",
    "PatternRegistry",
    "format_directive",
    "parse_directive",
    # Registry and evaluation
    "Field",
    "FieldRegistry",
    "RegistryView",
    "RuleEvaluator",
    "evaluate",
    "evaluate_rules",
    # Orchestration
    "CONFIGURATION_ERROR_MESSAGE",
    "FormValidator",
    # Sinks
    "FieldStatus",
    "LoggingStatusSink",
    "StatusBoard",
    "SubmitButton",
]
