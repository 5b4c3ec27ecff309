"""Directive CLI commands — parse."""

import json

import click

from formgate.validation import MalformedDirective, parse_directive


@click.group()
def directive():
    """Directive commands."""
    pass


@directive.command("parse")
@click.argument("text")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print rules as JSON.")
def parse_cmd(text: str, as_json: bool):
    """Parse a directive string and show its rules in evaluation order."""
    try:
        rules = parse_directive(text)
    except MalformedDirective as e:
        click.echo(click.style(f"Malformed directive: {e}", fg="red"), err=True)
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([rule.to_dict() for rule in rules], indent=2))
        return

    if not rules:
        click.echo("No rules.")
        return

    for i, rule in enumerate(rules, 1):
        click.echo(f"  {i}. {rule.directive:<24} {type(rule).__name__}")
