"""Main CLI application using Typer."""

import logging
from typing import Optional

import questionary
import typer

from cli import __version__
from cli.auth_middleware import load_config
from cli.commands.agents import app as agents_app
from cli.commands.alias import app as alias_app
from cli.commands.rate import rate
from cli.config_manager import ConfigError, ConfigManager
from cli.output_formatter import (
    console,
    mask_secret,
    print_config,
    print_error,
    print_header,
    print_info,
    print_success,
    print_warning,
)
from cli.validators import validate_token, validate_url
from shared.utils.logging import setup_logging

logger = logging.getLogger(__name__)

# Create app
app = typer.Typer(
    name="agent-mesh",
    help="agent-mesh - command-line client for the agent marketplace",
    add_completion=False,
)

app.add_typer(agents_app, name="agents", help="Manage your agents on the platform")
app.add_typer(alias_app, name="alias", help="Manage local agent aliases")
app.command("rate")(rate)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose (debug) logging"),
) -> None:
    """Configure logging before any command runs."""
    level = "DEBUG" if verbose else None
    if level is None:
        try:
            level = ConfigManager().load().defaults.log_level
        except ConfigError:
            level = "WARNING"
    setup_logging(level=level)


@app.command()
def version():
    """Show version information."""
    console.print(f"agent-mesh v{__version__}")


@app.command()
def configure(
    show: bool = typer.Option(False, "--show", help="Show current configuration"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Set the platform base URL"),
):
    """Show or update the local configuration."""
    config_manager = ConfigManager()

    if base_url is not None:
        if not validate_url(base_url):
            print_error(f"Invalid URL: {base_url}")
            raise typer.Exit(1)
        try:
            path = config_manager.set_base_url(base_url)
        except (ConfigError, OSError) as e:
            print_error(f"Failed to save configuration: {e}")
            raise typer.Exit(1) from None
        print_success(f"Base URL saved to {path}")

    if show or base_url is None:
        config = load_config(config_manager)
        print_header("agent-mesh Configuration")
        print_config(config.to_yaml_dict())
        console.print(f"[dim]Config file: {config_manager.config_path}[/dim]")


# =====================================================================
# Authentication Commands
# =====================================================================


@app.command()
def login(
    token: Optional[str] = typer.Option(
        None, "--token", help="Provide the token directly (skip the prompt)"
    ),
    no_keyring: bool = typer.Option(
        False, "--no-keyring", help="Use file storage instead of system keyring"
    ),
):
    """Save a platform token for later commands.

    Get a CLI token from https://agents.hot/dashboard/settings. The token is
    stored in the system keyring (macOS Keychain, Windows Credential Store)
    or in ~/.agent-mesh/token.json with --no-keyring.
    """
    from cli.auth import load_token, save_token

    if load_token():
        print_info("You are already logged in. The new token will replace the stored one.")

    if not token:
        console.print("1. Visit https://agents.hot/dashboard/settings to get your CLI token")
        console.print("2. Paste the token below\n")
        token = questionary.password(
            "Token:",
            validate=lambda x: validate_token(x) or "Token looks invalid",
        ).ask()

    token = (token or "").strip()
    if not token:
        print_error("No token provided")
        raise typer.Exit(1)

    try:
        save_token(token, use_keyring=not no_keyring)
    except OSError as e:
        print_error(f"Failed to store token: {e}")
        raise typer.Exit(1) from None

    print_success("Token saved")


@app.command()
def logout():
    """Clear the stored platform token."""
    from cli.auth import clear_token, get_token_storage, token_from_env

    if not get_token_storage().get_token():
        print_warning("Not currently logged in")
        return

    try:
        clear_token()
    except OSError as e:
        print_error(f"Logout failed: {e}")
        raise typer.Exit(1) from None

    print_success("Successfully logged out")
    if token_from_env():
        print_warning("AGENT_MESH_TOKEN is still set in the environment")


@app.command()
def whoami():
    """Show current authentication status."""
    from cli.auth import TOKEN_ENV_VAR, get_token_storage, token_from_env

    env_token = token_from_env()
    token = env_token or get_token_storage().get_token()

    if not token:
        print_warning("Not logged in")
        print_info("Run 'agent-mesh login' to authenticate")
        raise typer.Exit(1)

    source = f"environment ({TOKEN_ENV_VAR})" if env_token else "token store"
    console.print(f"[cyan]Token:[/cyan] {mask_secret(token)}")
    console.print(f"[cyan]Source:[/cyan] {source}")
    console.print(f"[cyan]Platform:[/cyan] {load_config().base_url}")
    print_success("Authenticated")


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
