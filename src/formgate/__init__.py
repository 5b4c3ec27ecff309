"""formgate — declarative, rule-based form validation."""

from formgate.validation import (
    FieldRegistry,
    FormReport,
    FormValidator,
    ValidationResult,
    parse_directive,
)

__version__ = "0.1.0"

__all__ = [
    "FieldRegistry",
    "FormReport",
    "FormValidator",
    "ValidationResult",
    "parse_directive",
]
