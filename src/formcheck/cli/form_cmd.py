"""Form CLI commands — check field values and validate definitions."""

import json
from pathlib import Path

import click

from formcheck.engine import ValidationEngine
from formcheck.fields.identifiers import ContainerIdentifiers, SequentialIdentifierSource
from formcheck.forms.loader import FormLoader
from formcheck.forms.schema import validate_form_file
from formcheck.hooks import Event
from formcheck.validation import ConfigurationError, Verdict


def _parse_assignments(assignments: tuple[str, ...]) -> dict[str, str]:
    values: dict[str, str] = {}
    for assignment in assignments:
        name, sep, value = assignment.partition("=")
        if not sep or not name:
            raise click.BadParameter(
                f"Expected NAME=VALUE, got '{assignment}'", param_hint="--set"
            )
        values[name] = value
    return values


def _report_schema_issues(form_file: Path) -> None:
    issues = validate_form_file(form_file)
    for issue in issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour), err=True)
    if any(issue.severity == "error" for issue in issues):
        click.echo(
            click.style(f"\n{len(issues)} schema error(s) found", fg="red", bold=True),
            err=True,
        )
        raise SystemExit(1)


@click.command()
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="NAME=VALUE",
    help="Set a field's value before validating (repeatable).",
)
@click.option(
    "--event",
    "event_type",
    default=None,
    help="Event type to validate with (default: the manual trigger).",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print reports as JSON.")
def check(form_file: Path, assignments: tuple[str, ...], event_type: str | None, as_json: bool):
    """Validate every field of FORM_FILE and report the verdicts."""
    _report_schema_issues(form_file)

    try:
        form = FormLoader(form_file).load()
    except ValueError as e:
        click.echo(click.style(f"Cannot load form: {e}", fg="red"), err=True)
        raise SystemExit(1)

    for name, value in _parse_assignments(assignments).items():
        element = form.element(name)
        if element is None:
            click.echo(click.style(f"Unknown field '{name}'", fg="red"), err=True)
            raise SystemExit(1)
        element.value = value

    engine = ValidationEngine.for_form(
        form,
        identifiers=ContainerIdentifiers(SequentialIdentifierSource()),
    )
    event_type = event_type or form.settings.manual_trigger

    reports = {}
    for field in form.fields():
        try:
            reports[field.element.name] = engine.validate(
                field, Event(event_type, target=field.element)
            )
        except ConfigurationError as e:
            click.echo(
                click.style(f"Field '{field.element.name}' is misconfigured: {e}", fg="red"),
                err=True,
            )
            raise SystemExit(1)

    if as_json:
        click.echo(json.dumps({name: r.to_dict() for name, r in reports.items()}, indent=2))
    else:
        click.echo(f"Form '{form.name}' ({event_type}):")
        for name, report in reports.items():
            if report.verdict is Verdict.VALID:
                click.echo(click.style(f"  ✓ {name}", fg="green"))
            elif report.verdict is Verdict.INVALID:
                click.echo(click.style(f"  ✗ {name}", fg="red"))
                for message in engine.presenter.messages(report.field_id):
                    click.echo(f"      {message}")
            elif report.vetoed:
                click.echo(f"  - {name} (deferred by {', '.join(report.vetoed_by)})")
            else:
                click.echo(f"  - {name} (no constraints)")

    if any(r.verdict is Verdict.INVALID for r in reports.values()):
        raise SystemExit(1)


@click.command()
@click.argument("form_files", nargs=-1, required=True,
                type=click.Path(exists=True, dir_okay=False, path_type=Path))
def schema(form_files: tuple[Path, ...]):
    """Validate form definition files against the form schema."""
    failed = False
    for form_file in form_files:
        issues = validate_form_file(form_file)
        for issue in issues:
            click.echo(click.style(str(issue), fg="red"))
        failed = failed or bool(issues)

    if failed:
        raise SystemExit(1)

    click.echo(click.style("All form definitions are valid.", fg="green", bold=True))
