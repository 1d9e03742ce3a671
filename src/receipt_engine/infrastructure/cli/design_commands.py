"""CLI commands for receipt designs."""

from __future__ import annotations

import json
from pathlib import Path

import click

from receipt_engine.application.import_design import ImportDesignHandler
from receipt_engine.domain.exceptions import DomainException
from receipt_engine.domain.model.elements import DividerElement, UnknownElement
from receipt_engine.domain.service.alignment import effective_alignment
from receipt_engine.infrastructure.bootstrap import design_repository


def _read_json(path: str) -> object:
    try:
        return json.loads(Path(path).read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"{path} is not valid JSON: {exc}")


@click.command("import")
@click.option("--name", required=True, help="Name to store the design under.")
@click.option(
    "--file", "file_path", required=True,
    type=click.Path(exists=True, dir_okay=False), help="Editor JSON export.",
)
def design_import(name: str, file_path: str) -> None:
    """Import a design exported from the editor."""
    raw = _read_json(file_path)
    handler = ImportDesignHandler(design_repo=design_repository())

    try:
        summary = handler.handle(name=name, raw=raw)  # type: ignore[arg-type]
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Design '{summary.name}' imported ({summary.element_count} elements)")
    for type_name in summary.unknown_types:
        click.echo(f"  warning: unknown element type '{type_name}' will print nothing")


@click.command("list")
def design_list() -> None:
    """List stored and built-in designs."""
    try:
        names = design_repository().list_names()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not names:
        click.echo("No designs found.")
        return
    for name in names:
        click.echo(name)


@click.command("show")
@click.option("--name", required=True, help="Design name.")
def design_show(name: str) -> None:
    """Show a design's elements and the alignment each prints with."""
    try:
        design = design_repository().get_by_name(name)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    if design is None:
        raise click.ClickException(f"Design '{name}' not found")

    elements = design.elements
    click.echo(f"{'#':>3}  {'Type':<15} {'Align':<7} Payload")
    click.echo("-" * 60)
    for i, element in enumerate(elements):
        if isinstance(element, UnknownElement):
            type_name, align = f"?{element.type_name}", ""
        else:
            type_name = element.kind.value
            printable = element.kind.value not in ("align", "feedLine", "cutPaper", "split_payments")
            align = effective_alignment(elements, i).value if printable else ""
        payload = {k: v for k, v in element.to_dict().items() if k != "type"}
        click.echo(f"{i:>3}  {type_name:<15} {align:<7} {json.dumps(payload) if payload else ''}")
    click.echo("-" * 60)
    click.echo(f"{len(elements)} element(s)")
