"""In-memory status sinks and submit gates.

Rendering proper belongs to the host UI; these implementations record or
log what the orchestrator pushes so forms can be driven headless (CLI, API,
tests).
"""

import logging
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldStatus:
    """Last status rendered for a field."""

    is_valid: bool
    message: str

    @property
    def css_class(self) -> str:
        return "status-success" if self.is_valid else "status-error"


@dataclass
class StatusBoard:
    """Keeps the latest status per field and a count of renders."""

    statuses: dict[str, FieldStatus] = field(default_factory=dict)
    render_count: int = 0

    def render(self, field_name: str, is_valid: bool, message: str) -> None:
        self.statuses[field_name] = FieldStatus(is_valid=is_valid, message=message)
        self.render_count += 1

    def message_for(self, field_name: str) -> str | None:
        status = self.statuses.get(field_name)
        return status.message if status else None


class LoggingStatusSink:
    """Writes every rendered status to a logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger(__name__)

    def render(self, field_name: str, is_valid: bool, message: str) -> None:
        if is_valid:
            self.logger.info("%s: %s", field_name, message)
        else:
            self.logger.warning("%s: %s", field_name, message)


@dataclass
class SubmitButton:
    """Submit gate that mirrors a button's `disabled` property."""

    disabled: bool = True

    def set_enabled(self, enabled: bool) -> None:
        self.disabled = not enabled
