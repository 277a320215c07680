"""Listen command - print node state messages as they arrive"""

import asyncio

import click

from machine_core.state import NodeState, ValidationPolicy
from machine_link.receiver import StateReceiver


@click.command()
@click.option('--host', default='0.0.0.0', help='Interface to bind')
@click.option('--port', type=click.IntRange(1024, 65535), default=9000, help='UDP port')
@click.option('--machine', 'machine_num', type=int, default=0, help='Local machine_num')
@click.option('--policy', type=click.Choice([p.value for p in ValidationPolicy]),
              default=ValidationPolicy.CLAMP.value, help='Invariant handling')
@click.option('--count', type=click.IntRange(min=1), default=None,
              help='Stop after this many applied messages')
@click.pass_context
def listen(ctx, host: str, port: int, machine_num: int, policy: str, count):
    """Receive and print node state messages

    Example:
        machine-sync listen --port 9000
        machine-sync --json listen --count 1
    """
    formatter = ctx.obj['formatter']
    receiver = StateReceiver(
        NodeState(machine_num=machine_num, policy=ValidationPolicy(policy))
    )

    def on_update(role: str, state: NodeState) -> None:
        formatter.state(role, state.to_dict(), state.describe())
        if count is not None and receiver.received >= count:
            receiver.stop()

    receiver.on_update = on_update

    formatter.info(f"Listening on {host}:{port} (Ctrl+C to stop)")
    try:
        asyncio.run(receiver.serve(host, port))
    except KeyboardInterrupt:
        pass
    except OSError as e:
        formatter.error(f"Cannot listen on {host}:{port}", str(e))
        raise click.Abort()

    formatter.summary(receiver.received, receiver.dropped)
