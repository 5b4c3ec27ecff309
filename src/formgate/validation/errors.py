"""Configuration errors raised by the formgate validation engine.

These are programmer mistakes (bad directives, dangling references) and are
raised when a form is parsed or built. They never reach the user-facing
status flow; validation failures are plain ValidationResult values.
"""


class ConfigurationError(Exception):
    """Base class for form configuration errors."""
    pass


class MalformedDirective(ConfigurationError):
    """A directive token has an unknown name or the wrong parameter shape."""

    def __init__(self, message: str, directive: str, token: str, position: int):
        self.directive = directive
        self.token = token
        self.position = position
        super().__init__(f"{message} in token '{token}' at position {position}")


class UnknownPreset(MalformedDirective):
    """A regex directive names a preset that is not registered."""
    pass


class UnknownField(ConfigurationError):
    """A rule references a field that is not part of the form."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Field '{name}' is not part of this form")


class UnknownGroup(ConfigurationError):
    """A group rule references a group with no inputs."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Group '{name}' has no inputs in this form")


class DuplicateField(ConfigurationError):
    """Two validation-enabled inputs share the same name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Field '{name}' is declared more than once")
