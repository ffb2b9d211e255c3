"""Local alias commands."""

import typer

from cli.auth_middleware import load_config
from cli.config_manager import ConfigError, ConfigManager
from cli.output_formatter import print_aliases, print_error, print_info, print_success
from cli.validators import validate_agent_id, validate_alias

app = typer.Typer(help="Manage local agent aliases")


@app.command("list")
def list_aliases() -> None:
    """List local aliases."""
    config = load_config()
    if not config.agents:
        print_info("No local aliases. Add one with: agent-mesh alias add <alias> <agent-id>")
        return
    print_aliases(config.agents)


@app.command("add")
def add_alias(
    alias: str = typer.Argument(..., help="Short name to remember the agent by"),
    agent_id: str = typer.Argument(..., help="Agent UUID"),
    agent_type: str = typer.Option("claude", "--type", help="Agent runtime type"),
) -> None:
    """Remember an agent under a short local alias."""
    if not validate_alias(alias):
        print_error(f"Invalid alias: {alias!r} (letters, digits, '.', '-' and '_' only)")
        raise typer.Exit(1)
    if not validate_agent_id(agent_id):
        print_error(f"Invalid agent id: {agent_id!r} (expected a UUID)")
        raise typer.Exit(1)

    config_manager = ConfigManager()
    try:
        replaced = config_manager.get_alias(alias) is not None
        config_manager.add_alias(alias, agent_id, agent_type=agent_type)
    except (ConfigError, OSError) as e:
        print_error(f"Failed to save alias: {e}")
        raise typer.Exit(1) from None

    print_success(f"Alias {'updated' if replaced else 'added'}: {alias} -> {agent_id}")


@app.command("remove")
def remove_alias(
    alias: str = typer.Argument(..., help="Alias to forget"),
) -> None:
    """Forget a local alias."""
    config_manager = ConfigManager()
    try:
        removed = config_manager.remove_alias(alias)
    except (ConfigError, OSError) as e:
        print_error(f"Failed to update aliases: {e}")
        raise typer.Exit(1) from None

    if not removed:
        print_error(f"No such alias: {alias}")
        raise typer.Exit(1)
    print_success(f"Alias removed: {alias}")
