"""Send commands - push one state or request message to a peer"""

import click

from machine_core.state import NodeState
from machine_link.sender import StateSender
from machine_cli.commands.options import identity_options, position_options


@click.command()
@click.argument('host')
@click.argument('port', type=click.IntRange(1, 65535))
@identity_options
@position_options
@click.pass_context
def send(ctx, host: str, port: int, **fields):
    """Send a full-state message

    Example:
        machine-sync send 127.0.0.1 9000 --machine 1 --next 2 --index 0
    """
    formatter = ctx.obj['formatter']
    state = NodeState(**fields)

    if state.sequence_index >= state.sequence_length:
        formatter.error(
            "Invalid state",
            f"--index {state.sequence_index} must be below --length {state.sequence_length}",
        )
        raise click.Abort()

    _deliver(formatter, host, port, state, request=False)


@click.command()
@click.argument('host')
@click.argument('port', type=click.IntRange(1, 65535))
@identity_options
@click.pass_context
def request(ctx, host: str, port: int, **fields):
    """Send a request message (trailing slots are zero)

    Example:
        machine-sync request 127.0.0.1 9000 --machine 3 --next 5 --length 8
    """
    formatter = ctx.obj['formatter']
    state = NodeState(**fields, sequence_index=0, pulses_since_banged=0)
    _deliver(formatter, host, port, state, request=True)


def _deliver(formatter, host: str, port: int, state: NodeState, request: bool) -> None:
    sender = StateSender(host, port)
    sender.connect()
    try:
        sent = sender.send_request(state) if request else sender.send_state(state)
    finally:
        sender.disconnect()

    kind = "request" if request else "state"
    if not sent:
        formatter.error(f"Failed to send {kind}", f"{host}:{port}")
        raise click.Abort()

    formatter.success(f"Sent {kind} to {host}:{port}", state.to_dict())
