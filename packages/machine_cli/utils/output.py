"""Output formatting for machine-sync commands

JSON mode prints one document per event so `listen` output can be piped
line by line; human mode renders through rich.
"""

import json
from typing import Any, Optional

import click
from rich.console import Console
from rich.table import Table


class OutputFormatter:
    """Renders command results, received states and listener summaries"""

    def __init__(
        self,
        json_mode: bool = False,
        console: Optional[Console] = None,
        err_console: Optional[Console] = None,
    ):
        self.json_mode = json_mode
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def _emit(self, document: dict[str, Any], err: bool = False) -> None:
        click.echo(json.dumps(document), err=err)

    def success(self, message: str, data: Optional[dict[str, Any]] = None) -> None:
        """Result of a send/request/describe, with the state fields"""
        if self.json_mode:
            self._emit({"status": "success", "message": message, "data": data})
            return

        self.console.print(f"[green]✓[/green] {message}")
        if data:
            self.console.print(self._fields_table(data))

    def error(self, message: str, details: Optional[str] = None) -> None:
        if self.json_mode:
            self._emit({"status": "error", "message": message, "details": details}, err=True)
            return

        self.err_console.print(f"[red]✗[/red] {message}")
        if details:
            self.err_console.print(f"  {details}")

    def info(self, message: str) -> None:
        """Human mode only; JSON output stays machine-readable"""
        if not self.json_mode:
            self.console.print(f"[blue]ℹ[/blue] {message}")

    def state(self, role: str, data: dict[str, Any], text: str) -> None:
        """One applied message seen by a listener

        Args:
            role: "state" or "request"
            data: State fields after the message was applied
            text: NodeState.describe() rendering
        """
        if self.json_mode:
            self._emit({"role": role, "state": data})
        else:
            self.console.print(f"[cyan]{role:>7}[/cyan] {text}")

    def summary(self, received: int, dropped: int) -> None:
        """Counters printed when a listener stops"""
        if self.json_mode:
            self._emit({"status": "stopped", "received": received, "dropped": dropped})
        else:
            style = "yellow" if dropped else "green"
            self.console.print(
                f"[{style}]■[/{style}] Listener stopped: "
                f"{received} applied, {dropped} dropped"
            )

    @staticmethod
    def _fields_table(data: dict[str, Any]) -> Table:
        table = Table(show_header=False, box=None, padding=(0, 2))
        for key, value in data.items():
            table.add_row(key, str(value))
        return table
