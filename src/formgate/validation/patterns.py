"""Preset patterns referenced by `regex:<name>` directives.

Every preset except `email` accepts the empty string: emptiness is the
business of the `req` rule, not of pattern rules. The email check exempts
empty values in the evaluator instead.
"""

import re


# =============================================================================
# Preset Patterns
# =============================================================================

# Letters only
LETTERS_PATTERN = re.compile(r"^[a-zA-Z]*$")

# Letters, spaces, hyphens and apostrophes
NAME_PATTERN = re.compile(r"^[a-zA-Z \-']*$")

# Letters, digits and _ . ! ? -
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_.!?-]*$")

# Digits only
NUMBERS_PATTERN = re.compile(r"^[0-9]*$")

# Digits, spaces, hyphens and +
PHONE_PATTERN = re.compile(r"^[0-9 \-+]*$")

# ISO date: YYYY-MM-DD
DATE_PATTERN = re.compile(r"^(?:\d{4}-\d{2}-\d{2})?$", re.ASCII)

# Email: simplified RFC 5322 (regular-expressions.info variant)
EMAIL_PATTERN = re.compile(
    r"^[a-z0-9!#$%&'*+/=?^_`{|}~-]+(?:\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    r"@(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\.)+[a-z0-9](?:[a-z0-9-]*[a-z0-9])?$",
    re.IGNORECASE | re.ASCII,
)

EMAIL_PRESET = "email"


class PatternRegistry:
    """Fixed lookup from preset name to compiled pattern.

    Example:
        if not PatternRegistry.matches("username", value):
            ...
    """

    _presets: dict[str, re.Pattern[str]] = {
        "letters": LETTERS_PATTERN,
        "name": NAME_PATTERN,
        "username": USERNAME_PATTERN,
        "numbers": NUMBERS_PATTERN,
        "phone": PHONE_PATTERN,
        "date": DATE_PATTERN,
        EMAIL_PRESET: EMAIL_PATTERN,
    }

    @classmethod
    def get(cls, name: str) -> re.Pattern[str]:
        """Get a preset pattern by name.

        Raises:
            KeyError: If no preset has this name
        """
        if name not in cls._presets:
            raise KeyError(
                f"Pattern preset '{name}' does not exist. "
                "Available presets: " + ", ".join(cls.list_registered())
            )
        return cls._presets[name]

    @classmethod
    def is_registered(cls, name: str) -> bool:
        return name in cls._presets

    @classmethod
    def list_registered(cls) -> list[str]:
        return sorted(cls._presets.keys())

    @classmethod
    def matches(cls, name: str, value: str) -> bool:
        """Check a whole value against a preset."""
        return cls.get(name).fullmatch(value) is not None
