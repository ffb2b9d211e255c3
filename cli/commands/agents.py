"""Agent management commands."""

import json
import logging
import sys
from typing import NoReturn

import questionary
import typer

from cli.auth_middleware import AuthenticatedCommand
from cli.output_formatter import (
    console,
    print_agent_detail,
    print_agents,
    print_error,
    print_info,
    print_success,
)
from mesh.api_clients.platform_client import PlatformApiError
from mesh.resolver import AgentNotFoundError

logger = logging.getLogger(__name__)

app = typer.Typer(help="Manage your agents on the platform")


def _is_interactive() -> bool:
    return sys.stdin.isatty()


def _fail(e: Exception) -> NoReturn:
    """Report a command failure and exit non-zero."""
    print_error(str(e))
    raise typer.Exit(1) from None


@app.command("list")
def list_agents(
    as_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
) -> None:
    """List your agents."""
    with AuthenticatedCommand() as auth:
        try:
            response = auth.client.list_agents()
        except PlatformApiError as e:
            _fail(e)

        if as_json:
            console.print_json(
                json.dumps([agent.model_dump() for agent in response.agents])
            )
            return

        if not response.agents:
            print_info("No agents found.")
            return

        print_agents(response.agents)


@app.command("show")
def show_agent(
    agent: str = typer.Argument(..., help="Agent UUID, local alias or exact name"),
    as_json: bool = typer.Option(False, "--json", help="Output raw JSON"),
) -> None:
    """Show agent details."""
    with AuthenticatedCommand() as auth:
        try:
            target = auth.resolve(agent)
            detail = auth.client.get_agent(target.id)
        except (AgentNotFoundError, PlatformApiError) as e:
            _fail(e)

        if as_json:
            console.print_json(detail.model_dump_json(exclude_none=True))
            return

        print_agent_detail(detail)


def _set_published(agent: str, published: bool) -> None:
    with AuthenticatedCommand() as auth:
        try:
            target = auth.resolve(agent)
            auth.client.set_published(target.id, published)
        except (AgentNotFoundError, PlatformApiError) as e:
            _fail(e)

        print_success(f"Agent {'published' if published else 'unpublished'}: {target.name}")


@app.command("publish")
def publish_agent(
    agent: str = typer.Argument(..., help="Agent UUID, local alias or exact name"),
) -> None:
    """Publish an agent to the marketplace."""
    _set_published(agent, True)


@app.command("unpublish")
def unpublish_agent(
    agent: str = typer.Argument(..., help="Agent UUID, local alias or exact name"),
) -> None:
    """Remove an agent from the marketplace."""
    _set_published(agent, False)


@app.command("delete")
def delete_agent(
    agent: str = typer.Argument(..., help="Agent UUID, local alias or exact name"),
    confirm: bool = typer.Option(
        False, "--confirm", help="Delete even if the agent has active purchases (refunds them)"
    ),
) -> None:
    """Delete an agent (soft delete)."""
    with AuthenticatedCommand() as auth:
        try:
            target = auth.resolve(agent)
        except (AgentNotFoundError, PlatformApiError) as e:
            _fail(e)

        try:
            result = auth.client.delete_agent(target.id, confirm=confirm)
        except PlatformApiError as e:
            if confirm or e.error_code != "confirm_required":
                _fail(e)
            if not _is_interactive():
                _fail(e)

            approved = questionary.confirm(
                "This agent has active purchases. Delete and refund?",
                default=False,
            ).ask()
            if not approved:
                print_info("Cancelled.")
                return

            logger.info(f"Deleting {target.id} with refund confirmation")
            try:
                result = auth.client.delete_agent(target.id, confirm=True)
            except PlatformApiError as retry_error:
                _fail(retry_error)

        print_success(f"Agent deleted: {target.name}")
        if result.get("refund"):
            print_info("Active purchases have been refunded.")
