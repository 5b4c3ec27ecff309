"""Parser for formgate validation directives.

A directive is a space-separated list of tokens. Each token is a rule name,
optionally followed by colon-separated parameters; ranges use a dash:

    req len:5-16 regex:username
    checkbox:topics:1-3
    or:phone:phone

Tokens are evaluated in the order they are written, so the parser keeps
that order in the returned rule list.
"""

import re
from typing import Callable, Iterator

from formgate.validation.errors import MalformedDirective, UnknownPreset
from formgate.validation.patterns import PatternRegistry
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
)


_BOUND_PATTERN = re.compile(r"[0-9]+")


class DirectiveParser:
    """Turns one directive string into an ordered list of rules.

    Usage:
        parser = DirectiveParser("req len:5-16 regex:letters")
        rules = parser.parse()
    """

    def __init__(self, directive: str):
        self.directive = directive
        self._handlers: dict[str, Callable[[list[str], str, int], Rule]] = {
            Required.token: self._parse_flag(Required),
            SelectRequired.token: self._parse_flag(SelectRequired),
            SelectAlwaysValid.token: self._parse_flag(SelectAlwaysValid),
            Length.token: self._parse_length,
            Pattern.token: self._parse_pattern,
            MatchField.token: self._parse_match,
            RadioGroupRequired.token: self._parse_radio,
            CheckboxGroupCount.token: self._parse_checkbox,
            EitherOr.token: self._parse_either_or,
        }

    def parse(self) -> list[Rule]:
        """Parse the directive and return its rules in declared order."""
        return [self._parse_token(token, position) for position, token in self._tokens()]

    # -------------------------------------------------------------------------
    # Helper methods
    # -------------------------------------------------------------------------

    def _tokens(self) -> Iterator[tuple[int, str]]:
        """Yield (position, token) pairs, skipping empty tokens."""
        position = 0
        for token in self.directive.split(" "):
            if token:
                yield position, token
            position += len(token) + 1

    def _parse_token(self, token: str, position: int) -> Rule:
        name, *params = token.split(":")
        handler = self._handlers.get(name)
        if handler is None:
            raise self._error(f"Unknown rule '{name}'", token, position)
        return handler(params, token, position)

    def _error(self, message: str, token: str, position: int) -> MalformedDirective:
        return MalformedDirective(message, self.directive, token, position)

    def _expect_params(self, params: list[str], count: int, token: str, position: int) -> None:
        if len(params) != count:
            raise self._error(
                f"Expected {count} parameter(s), got {len(params)}", token, position
            )
        for param in params:
            if not param:
                raise self._error("Empty parameter", token, position)

    def _parse_range(self, text: str, token: str, position: int) -> tuple[int, int]:
        """Parse a `<min>-<max>` pair of non-negative integers."""
        bounds = text.split("-")
        if len(bounds) != 2 or not all(_BOUND_PATTERN.fullmatch(b) for b in bounds):
            raise self._error(f"Expected a '<min>-<max>' range, got '{text}'", token, position)
        low, high = int(bounds[0]), int(bounds[1])
        if low > high:
            raise self._error(f"Range minimum {low} exceeds maximum {high}", token, position)
        return low, high

    # -------------------------------------------------------------------------
    # Rule parsers
    # -------------------------------------------------------------------------

    def _parse_flag(self, rule_class: type[Rule]) -> Callable[[list[str], str, int], Rule]:
        """Build a parser for rules that take no parameters."""

        def parse(params: list[str], token: str, position: int) -> Rule:
            if params:
                raise self._error(f"'{rule_class.token}' takes no parameters", token, position)
            return rule_class()

        return parse

    def _parse_length(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 1, token, position)
        low, high = self._parse_range(params[0], token, position)
        return Length(min=low, max=high)

    def _parse_pattern(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 1, token, position)
        preset = params[0]
        if not PatternRegistry.is_registered(preset):
            raise UnknownPreset(
                f"Unknown pattern preset '{preset}'", self.directive, token, position
            )
        return Pattern(preset=preset)

    def _parse_match(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 1, token, position)
        return MatchField(other=params[0])

    def _parse_radio(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 1, token, position)
        return RadioGroupRequired(group=params[0])

    def _parse_checkbox(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 2, token, position)
        low, high = self._parse_range(params[1], token, position)
        return CheckboxGroupCount(group=params[0], min=low, max=high)

    def _parse_either_or(self, params: list[str], token: str, position: int) -> Rule:
        self._expect_params(params, 2, token, position)
        return EitherOr(other=params[0], label=params[1])


def parse_directive(directive: str) -> list[Rule]:
    """Parse a directive string into rules.

    Raises:
        MalformedDirective: If a token is unknown or badly parameterized
    """
    return DirectiveParser(directive).parse()


def format_directive(rules: list[Rule]) -> str:
    """Render rules back into canonical directive text."""
    return " ".join(rule.directive for rule in rules)
