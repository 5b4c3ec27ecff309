"""Tests for form loading, in-memory inputs and form instances."""

import logging
from pathlib import Path

import pytest

from formgate.forms import (
    FormDefinitionError,
    FormLoader,
    FormValueError,
    RadioInput,
    SelectInput,
    TextInput,
    link_radio_group,
)
from formgate.validation import (
    MalformedDirective,
    StatusBoard,
    SubmitButton,
    UnknownField,
)


FORMS_DIR = Path(__file__).resolve().parents[1] / "forms"

SIGNUP_VALUES = {
    "username": "alice_01",
    "firstName": "Alice",
    "email": "alice@example.com",
    "password": "s3cretpass",
    "confirmPassword": "s3cretpass",
    "plan": "pro",
    "topics": ["news", "tips"],
    "country": "New Zealand",
}


@pytest.fixture
def loader():
    loader = FormLoader(FORMS_DIR)
    loader.load_all()
    return loader


@pytest.fixture
def signup(loader):
    return loader.get_form("signup")


def write_form(tmp_path: Path, filename: str, text: str) -> Path:
    path = tmp_path / filename
    path.write_text(text)
    return path


# =============================================================================
# Loader
# =============================================================================


class TestFormLoader:
    def test_loads_bundled_forms(self, loader):
        assert sorted(loader.list_forms()) == ["contact", "signup"]

    def test_definition_fields(self, signup):
        assert signup.display_name == "Sign up"
        assert len(signup.inputs) == 10
        plan = next(i for i in signup.inputs if i.name == "plan")
        assert plan.type == "radio"
        assert plan.options == ["basic", "pro", "team"]
        assert plan.is_group

    def test_display_name_from_camel_case(self, signup):
        first_name = next(i for i in signup.inputs if i.name == "firstName")
        assert first_name.display_name == "First Name"

    def test_get_unknown_form(self, loader):
        assert loader.get_form("missing") is None

    def test_missing_directory_loads_nothing(self, tmp_path, caplog):
        loader = FormLoader(tmp_path / "nowhere")
        with caplog.at_level(logging.WARNING):
            loader.load_all()
        assert loader.list_forms() == []
        assert "not found" in caplog.text

    def test_skips_files_without_form_key(self, tmp_path):
        write_form(tmp_path, "notes.yaml", "title: not a form\n")
        loader = FormLoader(tmp_path)
        loader.load_all()
        assert loader.list_forms() == []

    def test_duplicate_form_name(self, tmp_path):
        body = "form: login\ninputs:\n  - name: user\n    validation: req\n"
        write_form(tmp_path, "a.yaml", body)
        write_form(tmp_path, "b.yaml", body)
        with pytest.raises(FormDefinitionError, match="more than once"):
            FormLoader(tmp_path).load_all()

    def test_unknown_input_type(self, tmp_path):
        write_form(tmp_path, "a.yaml", "form: login\ninputs:\n  - name: when\n    type: date\n")
        with pytest.raises(FormDefinitionError, match="unknown type 'date'"):
            FormLoader(tmp_path).load_all()

    def test_input_without_name(self, tmp_path):
        write_form(tmp_path, "a.yaml", "form: login\ninputs:\n  - type: text\n")
        with pytest.raises(FormDefinitionError, match="without a name"):
            FormLoader(tmp_path).load_all()

    def test_radio_needs_options(self, tmp_path):
        write_form(tmp_path, "a.yaml", "form: login\ninputs:\n  - name: plan\n    type: radio\n")
        with pytest.raises(FormDefinitionError, match="needs options"):
            FormLoader(tmp_path).load_all()

    def test_malformed_directive_fails_load(self, tmp_path):
        write_form(
            tmp_path, "a.yaml", "form: login\ninputs:\n  - name: user\n    validation: 'len:9-3'\n"
        )
        with pytest.raises(MalformedDirective):
            FormLoader(tmp_path).load_all()

    def test_dangling_reference_fails_load(self, tmp_path):
        write_form(
            tmp_path,
            "a.yaml",
            "form: login\ninputs:\n  - name: confirm\n    validation: 'match:password'\n",
        )
        with pytest.raises(UnknownField):
            FormLoader(tmp_path).load_all()


# =============================================================================
# Built forms
# =============================================================================


class TestBuild:
    def test_groups_expand_per_option(self, signup):
        form = signup.build()
        assert [m.value for m in form.members("topics")] == ["news", "offers", "events", "tips"]
        assert [m.directive for m in form.members("plan")] == ["radio:plan", None, None]

    def test_registry_holds_validated_inputs(self, signup):
        form = signup.build()
        assert form.registry.names() == [
            "username",
            "firstName",
            "email",
            "password",
            "confirmPassword",
            "birthDate",
            "plan",
            "topics",
            "country",
            "referrer",
        ]

    def test_each_build_is_independent(self, signup):
        first = signup.build({"username": "alice_01"})
        second = signup.build()
        assert first.values()["username"] == "alice_01"
        assert second.values()["username"] == ""

    def test_defaults_are_applied(self, loader):
        form = loader.get_form("contact").build()
        assert form.values()["subscribe"] is False

    def test_to_dict(self, signup):
        data = signup.to_dict()
        assert data["name"] == "signup"
        assert data["inputs"][0] == {
            "name": "username",
            "type": "text",
            "displayName": "Username",
            "validation": "req len:5-16 regex:username",
            "options": None,
        }


class TestFill:
    def test_valid_signup(self, signup):
        board = StatusBoard()
        button = SubmitButton()
        report = signup.build().fill(SIGNUP_VALUES, sink=board, gate=button)
        assert report.valid
        assert not button.disabled
        assert board.message_for("birthDate") == "Good"

    def test_empty_signup(self, signup):
        report = signup.build().fill({})
        assert not report.valid
        assert report.errors == {
            "username": "Required",
            "firstName": "Required",
            "email": "Required",
            "password": "Required",
            "confirmPassword": "Required",
            "plan": "Required",
            "topics": "Required",
            "country": "Required",
        }

    def test_signup_failures(self, signup):
        values = dict(
            SIGNUP_VALUES,
            email="alice@",
            confirmPassword="different",
            topics=["news", "offers", "events", "tips"],
            birthDate="1/2/2000",
        )
        report = signup.build().fill(values)
        assert report.errors == {
            "email": "Not a valid email address",
            "confirmPassword": "Does not match",
            "birthDate": "Contains invalid characters",
            "topics": "Select 3 at most",
        }

    def test_contact_needs_email_or_phone(self, loader):
        contact = loader.get_form("contact")
        report = contact.build().fill({"name": "Alice", "message": "Hello there, friend"})
        assert report.errors == {
            "email": "Either this or phone must be filled in",
            "phone": "Either this or email must be filled in",
        }

    def test_contact_with_email_only(self, loader):
        contact = loader.get_form("contact")
        report = contact.build().fill(
            {"name": "Alice", "email": "alice@example.com", "message": "Hello there, friend"}
        )
        assert report.valid

    def test_contact_with_both(self, loader):
        contact = loader.get_form("contact")
        report = contact.build().fill(
            {
                "name": "Alice",
                "email": "alice@example.com",
                "phone": "+64 21 555 0101",
                "message": "Hello there, friend",
            }
        )
        assert report.valid


class TestSetValue:
    def test_values_round_trip(self, signup):
        form = signup.build(SIGNUP_VALUES)
        values = form.values()
        assert values["plan"] == "pro"
        assert values["topics"] == ["news", "tips"]
        assert values["country"] == "New Zealand"
        assert values["referrer"] == "Nobody"

    def test_unknown_input(self, signup):
        with pytest.raises(FormValueError, match="no input named 'age'"):
            signup.build().set_value("age", "42")

    def test_text_rejects_non_string(self, signup):
        with pytest.raises(FormValueError, match="expects text"):
            signup.build().set_value("username", 42)

    def test_checkbox_group_unknown_option(self, signup):
        with pytest.raises(FormValueError, match="sports"):
            signup.build().set_value("topics", ["news", "sports"])

    def test_checkbox_group_accepts_single_string(self, signup):
        form = signup.build()
        form.set_value("topics", "tips")
        assert form.values()["topics"] == ["tips"]

    def test_radio_unknown_option(self, signup):
        with pytest.raises(FormValueError, match="gold"):
            signup.build().set_value("plan", "gold")

    def test_radio_none_clears(self, signup):
        form = signup.build({"plan": "pro"})
        form.set_value("plan", None)
        assert form.values()["plan"] is None

    def test_radio_is_exclusive(self, signup):
        form = signup.build()
        form.set_value("plan", "pro")
        form.set_value("plan", "team")
        assert [m.checked for m in form.members("plan")] == [False, False, True]

    def test_select_by_index(self, signup):
        form = signup.build()
        form.set_value("country", 2)
        assert form.values()["country"] == "Australia"

    def test_select_index_out_of_range(self, signup):
        with pytest.raises(FormValueError, match="no option at index 9"):
            signup.build().set_value("country", 9)

    def test_select_unknown_option(self, signup):
        with pytest.raises(FormValueError, match="Fiji"):
            signup.build().set_value("country", "Fiji")

    def test_select_rejects_bool(self, signup):
        with pytest.raises(FormValueError):
            signup.build().set_value("country", True)


# =============================================================================
# Inputs
# =============================================================================


class TestInputs:
    def test_text_notifies_on_change_only(self):
        seen = []
        widget = TextInput("name")
        widget.subscribe(seen.append)
        widget.value = "Ann"
        widget.value = "Ann"
        assert seen == [widget]

    def test_radio_checks_uncheck_siblings_silently(self):
        radios = [RadioInput("plan", value=v) for v in ("a", "b")]
        link_radio_group(radios)
        seen = []
        for radio in radios:
            radio.subscribe(seen.append)

        radios[0].checked = True
        radios[1].checked = True
        assert [r.checked for r in radios] == [False, True]
        assert seen == [radios[0], radios[1]]

    def test_select_defaults_to_placeholder(self):
        select = SelectInput("country", ["Choose", "NZ"])
        assert select.selected_index == 0
        assert select.value == "Choose"

    def test_empty_select(self):
        select = SelectInput("country", [])
        assert select.selected_index == -1
        assert select.value == ""
