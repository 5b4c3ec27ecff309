"""Form CLI commands — validate, list and check."""

import json
from pathlib import Path
from typing import Any

import click

from formgate.config import FormgateConfig
from formgate.forms import (
    FormDefinition,
    FormLoader,
    FormValueError,
    validate_forms_dir,
    validate_yaml_file,
)
from formgate.validation import ConfigurationError, StatusBoard, SubmitButton

_TRUE_WORDS = {"1", "true", "yes", "on"}
_FALSE_WORDS = {"", "0", "false", "no", "off"}


def _forms_path(ctx: click.Context) -> Path:
    return ctx.obj.get("forms_path") or FormgateConfig.from_env().forms_path


def _load_forms(ctx: click.Context) -> FormLoader:
    forms_path = _forms_path(ctx)
    if not forms_path.exists():
        click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
        raise SystemExit(1)

    loader = FormLoader(forms_path)
    try:
        loader.load_all()
    except ConfigurationError as e:
        click.echo(click.style(f"Invalid form configuration: {e}", fg="red"), err=True)
        raise SystemExit(1)
    return loader


def _coerce(definition: FormDefinition, assignment: str) -> tuple[str, Any]:
    """Turn a NAME=VALUE option into a value shaped for Form.set_value."""
    if "=" not in assignment:
        raise click.BadParameter(f"'{assignment}' is not NAME=VALUE", param_hint="--set")
    name, raw = assignment.split("=", 1)

    spec = next((i for i in definition.inputs if i.name == name), None)
    if spec is None:
        raise click.BadParameter(
            f"Form '{definition.name}' has no input named '{name}'", param_hint="--set"
        )

    if spec.type == "checkbox" and spec.is_group:
        return name, [option for option in raw.split(",") if option]
    if spec.type == "checkbox":
        word = raw.lower()
        if word not in _TRUE_WORDS | _FALSE_WORDS:
            raise click.BadParameter(f"'{raw}' is not a boolean", param_hint="--set")
        return name, word in _TRUE_WORDS
    if spec.type == "radio":
        return name, raw or None
    if spec.type == "select" and raw not in (spec.options or []) and raw.isdigit():
        return name, int(raw)
    return name, raw


@click.group()
@click.option(
    "--forms",
    "forms_path",
    default=None,
    type=click.Path(path_type=Path),
    help="Forms directory (defaults to FORMGATE_FORMS_PATH or ./forms).",
)
@click.pass_context
def form(ctx: click.Context, forms_path: Path | None):
    """Form definition commands."""
    ctx.ensure_object(dict)
    ctx.obj["forms_path"] = forms_path


@form.command()
@click.option(
    "--strict",
    is_flag=True,
    default=False,
    help="Treat warnings as errors.",
)
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, path_type=Path),
    help="Validate a single YAML file instead of the whole forms directory.",
)
@click.pass_context
def validate(ctx: click.Context, strict: bool, target_path: Path | None):
    """Validate form YAML files against the schema and their directives."""
    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    if target_path is not None:
        schema_issues = validate_yaml_file(target_path)
        if strict:
            for issue in schema_issues:
                issue.severity = "error"
    else:
        forms_path = _forms_path(ctx)
        if not forms_path.exists():
            click.echo(f"Error: Forms directory not found at {forms_path}", err=True)
            raise SystemExit(1)
        schema_issues = validate_forms_dir(forms_path, strict=strict)

    errors = [i for i in schema_issues if i.severity == "error"]
    warnings = [i for i in schema_issues if i.severity == "warning"]

    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    if warnings:
        click.echo(click.style(f"{len(warnings)} warning(s) found.", fg="yellow"))

    # ── Semantic (directive) validation ─────────────────────────────────────
    # Only runs when validating the full directory (target_path is None)
    if target_path is None:
        loader = _load_forms(ctx)
        names = loader.list_forms()
        click.echo(f"\nLoaded {len(names)} form(s):")
        for name in sorted(names):
            definition = loader.get_form(name)
            click.echo(f"  ✓ {name} ({len(definition.inputs)} inputs)")

    click.echo(click.style("\nAll forms are valid.", fg="green", bold=True))


@form.command("list")
@click.pass_context
def list_cmd(ctx: click.Context):
    """List the available forms."""
    loader = _load_forms(ctx)
    names = loader.list_forms()
    if not names:
        click.echo("No forms found.")
        return
    for name in sorted(names):
        definition = loader.get_form(name)
        click.echo(f"{name:<20} {definition.display_name} ({len(definition.inputs)} inputs)")


@form.command()
@click.argument("form_name")
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Input value; checkbox groups take comma-separated options.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the report as JSON.")
@click.pass_context
def check(ctx: click.Context, form_name: str, assignments: tuple[str, ...], as_json: bool):
    """Fill in a form and run a validation pass over it."""
    loader = _load_forms(ctx)
    definition = loader.get_form(form_name)
    if definition is None:
        click.echo(f"Error: Form '{form_name}' not found", err=True)
        raise SystemExit(1)

    values = dict(_coerce(definition, assignment) for assignment in assignments)
    board = StatusBoard()
    button = SubmitButton()
    try:
        report = definition.build().fill(values, sink=board, gate=button)
    except FormValueError as e:
        raise click.BadParameter(str(e), param_hint="--set")

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        for name, status in board.statuses.items():
            mark, colour = ("✓", "green") if status.is_valid else ("✗", "red")
            click.echo(click.style(f"  {mark} {name}: {status.message}", fg=colour))
        state = "enabled" if not button.disabled else "disabled"
        click.echo(f"\nSubmit {state}.")

    if not report.valid:
        raise SystemExit(1)
