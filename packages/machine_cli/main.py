"""Main CLI entry point"""

import click
from rich.console import Console

from machine_cli.commands.describe import describe
from machine_cli.commands.listen import listen
from machine_cli.commands.send import request, send
from machine_cli.utils.output import OutputFormatter
from machine_link.main import setup_logging


@click.group()
@click.option('--json', 'json_mode', is_flag=True, help='Output as JSON')
@click.option('--debug', is_flag=True, help='Debug logging')
@click.pass_context
def cli(ctx, json_mode: bool, debug: bool):
    """machine-sync - send, request and listen for machine node state

    Examples:
        machine-sync send 127.0.0.1 9000 --machine 1 --next 2
        machine-sync request 127.0.0.1 9000 --machine 3 --next 5 --length 8
        machine-sync --json listen --port 9000
    """
    ctx.ensure_object(dict)
    if debug:
        setup_logging(debug=True)

    console = Console()
    ctx.obj['console'] = console
    ctx.obj['formatter'] = OutputFormatter(json_mode=json_mode, console=console)


# Register commands
cli.add_command(send)
cli.add_command(request)
cli.add_command(listen)
cli.add_command(describe)


if __name__ == '__main__':
    cli()
