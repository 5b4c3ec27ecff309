"""In-memory input widgets implementing the FormInput protocol.

Each setter fires the widget's change callbacks when the value actually
changes, the way a browser fires input/change events.
"""

from typing import Any

from formgate.validation.types import ChangeCallback, InputKind


class Input:
    """Base class for in-memory inputs."""

    kind: InputKind = InputKind.TEXT

    def __init__(self, name: str, directive: str | None = None):
        self.name = name
        self.directive = directive
        self._callbacks: list[ChangeCallback] = []

    @property
    def value(self) -> str:
        return ""

    @property
    def checked(self) -> bool:
        return False

    @property
    def selected_index(self) -> int:
        return -1

    def subscribe(self, callback: ChangeCallback) -> None:
        self._callbacks.append(callback)

    def _notify(self) -> None:
        for callback in list(self._callbacks):
            callback(self)

    def set(self, value: Any) -> None:
        """Set the widget from a plain value (used by loaders and the API)."""
        raise NotImplementedError("Subclasses must implement set()")

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, value={self.value!r})"


class TextInput(Input):
    """Text-like input: text, password, email, textarea."""

    kind = InputKind.TEXT

    def __init__(self, name: str, directive: str | None = None, value: str = ""):
        super().__init__(name, directive)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    @value.setter
    def value(self, value: str) -> None:
        if value != self._value:
            self._value = value
            self._notify()

    def set(self, value: Any) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Input '{self.name}' expects text, got {type(value).__name__}")
        self.value = value


class CheckboxInput(Input):
    """A single checkbox; groups are several checkboxes sharing a name."""

    kind = InputKind.CHECKBOX

    def __init__(
        self,
        name: str,
        directive: str | None = None,
        value: str = "on",
        checked: bool = False,
    ):
        super().__init__(name, directive)
        self._value = value
        self._checked = checked

    @property
    def value(self) -> str:
        return self._value

    @property
    def checked(self) -> bool:
        return self._checked

    @checked.setter
    def checked(self, checked: bool) -> None:
        if checked != self._checked:
            self._checked = checked
            self._notify()

    def set(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"Checkbox '{self.name}' expects a boolean")
        self.checked = value


class RadioInput(Input):
    """A radio button. Checking one member unchecks its linked siblings."""

    kind = InputKind.RADIO

    def __init__(
        self,
        name: str,
        directive: str | None = None,
        value: str = "on",
        checked: bool = False,
    ):
        super().__init__(name, directive)
        self._value = value
        self._checked = checked
        self.siblings: list["RadioInput"] = []

    @property
    def value(self) -> str:
        return self._value

    @property
    def checked(self) -> bool:
        return self._checked

    @checked.setter
    def checked(self, checked: bool) -> None:
        if checked == self._checked:
            return
        if checked:
            # Browsers fire no change event on the radio being unchecked
            for sibling in self.siblings:
                sibling._checked = False
        self._checked = checked
        self._notify()

    def set(self, value: Any) -> None:
        if not isinstance(value, bool):
            raise TypeError(f"Radio '{self.name}' expects a boolean")
        self.checked = value


class SelectInput(Input):
    """A single-choice select. Option 0 is the placeholder."""

    kind = InputKind.SELECT

    def __init__(
        self,
        name: str,
        options: list[str],
        directive: str | None = None,
        selected_index: int = 0,
    ):
        super().__init__(name, directive)
        self.options = list(options)
        self._selected_index = selected_index if self.options else -1

    @property
    def value(self) -> str:
        if self._selected_index < 0:
            return ""
        return self.options[self._selected_index]

    @property
    def selected_index(self) -> int:
        return self._selected_index

    @selected_index.setter
    def selected_index(self, index: int) -> None:
        if not 0 <= index < len(self.options):
            raise IndexError(f"Select '{self.name}' has no option at index {index}")
        if index != self._selected_index:
            self._selected_index = index
            self._notify()

    def select(self, option: str) -> None:
        """Select an option by its value."""
        if option not in self.options:
            raise ValueError(f"'{option}' is not an option of select '{self.name}'")
        self.selected_index = self.options.index(option)

    def set(self, value: Any) -> None:
        if isinstance(value, bool):
            raise TypeError(f"Select '{self.name}' expects an option or index")
        if isinstance(value, int):
            self.selected_index = value
        elif isinstance(value, str):
            self.select(value)
        else:
            raise TypeError(f"Select '{self.name}' expects an option or index")


def link_radio_group(members: list[RadioInput]) -> None:
    """Make radio inputs mutually exclusive."""
    for member in members:
        member.siblings = [m for m in members if m is not member]
