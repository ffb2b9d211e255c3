"""Output formatting for CLI commands."""

from typing import Any, Dict, List

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from mesh.models.agent import AgentDetail, RemoteAgentSummary
from shared.models.config import AliasEntry


console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]✗[/red] {escape(message)}")


def print_warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[yellow]⚠[/yellow] {escape(message)}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]ℹ[/blue] {escape(message)}")


def print_header(title: str) -> None:
    """Print a section header."""
    console.print(Panel(title, style="bold blue"))


def mask_secret(value: str) -> str:
    """Keep the first four characters of a secret."""
    if value and len(value) > 4:
        return value[:4] + "..." + "*" * 4
    return "****" if value else ""


def print_config(config: Dict[str, Any]) -> None:
    """Print configuration summary."""
    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    def add_dict(d: Dict[str, Any], prefix: str = "") -> None:
        for key, value in d.items():
            if isinstance(value, dict):
                add_dict(value, f"{prefix}{key}.")
            else:
                # Mask sensitive values
                display_value = str(value)
                if any(s in key.lower() for s in ["key", "token", "secret", "password"]):
                    display_value = mask_secret(display_value)
                table.add_row(f"{prefix}{key}", display_value)

    add_dict(config)
    console.print(table)


def format_price(agent: RemoteAgentSummary) -> str:
    if not agent.price:
        return "[green]free[/green]"
    return f"{agent.price:g}/{agent.billing_period}"


def format_status(online: bool) -> str:
    return "[green]● online[/green]" if online else "[dim]○ offline[/dim]"


def format_published(published: bool) -> str:
    return "[green]yes[/green]" if published else "[dim]no[/dim]"


def print_agents(agents: List[RemoteAgentSummary]) -> None:
    """Print the user's agents."""
    table = Table(title="Agents")
    table.add_column("Name", style="cyan", max_width=24)
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Published")
    table.add_column("Price", justify="right")

    for agent in agents:
        table.add_row(
            escape(agent.name),
            agent.agent_type or "",
            format_status(agent.is_online),
            format_published(agent.is_published),
            format_price(agent),
        )

    console.print(table)


def print_agent_detail(agent: AgentDetail) -> None:
    """Print one agent's details."""
    table = Table(show_header=False, box=None, title=f"[bold]{escape(agent.name)}[/bold]")
    table.add_column("Field", style="dim")
    table.add_column("Value")

    table.add_row("ID", agent.id)
    table.add_row("Type", agent.agent_type or "")
    table.add_row("Status", format_status(agent.is_online))
    table.add_row("Published", format_published(agent.is_published))
    table.add_row("Price", format_price(agent))
    if agent.bridge_token:
        table.add_row("Bridge Token", agent.bridge_token)
    if agent.created_at:
        table.add_row("Created", agent.created_at)

    console.print()
    console.print(table)
    if agent.description:
        console.print(f"\n  {escape(agent.description)}")
    console.print()


def print_aliases(aliases: Dict[str, AliasEntry]) -> None:
    """Print the local alias map."""
    table = Table(title="Local Aliases")
    table.add_column("Alias", style="cyan")
    table.add_column("Agent ID", style="dim")
    table.add_column("Type")
    table.add_column("Added")

    for alias, entry in aliases.items():
        table.add_row(alias, entry.agent_id, entry.agent_type, entry.added_at)

    console.print(table)
