"""Describe command - render a node state without sending it"""

import click

from machine_core.state import NodeState
from machine_cli.commands.options import identity_options, position_options


@click.command()
@identity_options
@position_options
@click.pass_context
def describe(ctx, **fields):
    """Print the diagnostic rendering of a node state

    Example:
        machine-sync describe --machine 3 --next 5 --length 8
    """
    state = NodeState(**fields)
    ctx.obj['formatter'].success(state.describe(), state.to_dict())
