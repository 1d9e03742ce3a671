import click

from receipt_engine.infrastructure.bootstrap import configure_logging
from receipt_engine.infrastructure.cli.design_commands import (
    design_import,
    design_list,
    design_show,
)
from receipt_engine.infrastructure.cli.order_commands import order_import, order_list
from receipt_engine.infrastructure.cli.render_commands import receipt_fields, receipt_render


@click.group()
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING (default) or ERROR.")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines.")
def cli(log_level: str | None, log_json: bool) -> None:
    """Receipt design interpreter"""
    configure_logging(log_level, json_output=log_json)


@cli.group()
def design() -> None:
    """Manage receipt designs."""


@cli.group()
def order() -> None:
    """Manage order snapshots."""


# Register subcommands
cli.add_command(receipt_render)
cli.add_command(receipt_fields)
design.add_command(design_import)
design.add_command(design_list)
design.add_command(design_show)
order.add_command(order_import)
order.add_command(order_list)
