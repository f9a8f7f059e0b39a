# fleet_deploy/cli/utils/output.py
"""Output formatting utilities"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...models import Connection, OperationStatus, QueueResult
from ...utils.formatting import format_duration

console = Console()

STATUS_STYLES = {
    OperationStatus.SUCCESS: "green",
    OperationStatus.FAILED: "red",
    OperationStatus.PARTIAL: "yellow",
    OperationStatus.SKIPPED: "dim",
}


def format_queue_result(result: QueueResult) -> None:
    """Format and display the result of a task queue"""
    if not result.targets:
        console.print("[yellow]No target to run on[/yellow]")
        return

    table = Table(title=f"Tasks: {', '.join(result.tasks)}", box=box.SIMPLE)
    table.add_column("Target", style="cyan", no_wrap=True)
    table.add_column("Task", style="white")
    table.add_column("Status", justify="center")
    table.add_column("Message")

    for handle, target in result.targets.items():
        if not target.tasks:
            table.add_row(handle, "-", "[dim]not run[/dim]", "")
        for task in target.tasks:
            style = STATUS_STYLES.get(task.status, "white")
            table.add_row(
                handle,
                task.task,
                f"[{style}]{task.status.value}[/{style}]",
                task.error or task.message or ""
            )

    console.print(table)

    style = STATUS_STYLES.get(result.status, "white")
    lines = [
        f"[bold]Status:[/bold] [{style}]{result.status.value}[/{style}]",
        f"[bold]Mode:[/bold] {'parallel' if result.parallel else 'sequential'}",
        f"[bold]Duration:[/bold] {format_duration(result.duration)}",
    ]
    if result.halted:
        lines.append("[yellow]Queue halted after a failure[/yellow]")
    if result.failed_targets:
        lines.append(f"[bold]Failed:[/bold] {', '.join(result.failed_targets)}")

    console.print(Panel("\n".join(lines), border_style=style))


def format_connections(connections: List[Connection], active: List[str]) -> None:
    """Display the available connections and their servers"""
    if not connections:
        console.print("[yellow]No connection configured[/yellow]")
        return

    table = Table(title="Connections", box=box.SIMPLE)
    table.add_column("Connection", style="cyan", no_wrap=True)
    table.add_column("Server", justify="center")
    table.add_column("Host", style="white")
    table.add_column("Username", style="white")
    table.add_column("Active", justify="center")

    for connection in connections:
        marker = "[green]✓[/green]" if connection.name in active else ""
        if not connection.servers:
            table.add_row(connection.name, "-", "[dim]no server[/dim]", "", marker)
        for server in connection.servers:
            table.add_row(
                connection.name,
                str(server.index),
                server.host or "-",
                str(server.credentials.get("username") or "-"),
                marker
            )

    console.print(table)
