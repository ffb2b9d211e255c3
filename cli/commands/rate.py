"""Rate a completed agent call."""

import logging

import typer

from cli.auth_middleware import AuthenticatedCommand
from cli.output_formatter import print_error, print_success
from cli.validators import RatingValidationError, parse_rating
from mesh.api_clients.platform_client import PlatformApiError
from mesh.models.agent import RatingSubmission
from mesh.resolver import AgentNotFoundError

logger = logging.getLogger(__name__)


def rate(
    call_id: str = typer.Argument(..., help="ID of the completed call"),
    rating: str = typer.Argument(..., help="Rating from 1 to 5"),
    agent: str = typer.Option(
        ..., "--agent", help="Agent that was called (UUID, local alias or exact name)"
    ),
) -> None:
    """Rate a completed agent call (1-5).

    Examples:

        agent-mesh rate 7c9e6679-7425-40de-944b-e07fc1f90ae7 5 --agent my-bot
    """
    with AuthenticatedCommand() as auth:
        try:
            value = parse_rating(rating)
        except RatingValidationError as e:
            print_error(str(e))
            raise typer.Exit(1) from None

        try:
            target = auth.resolve(agent)
            submission = RatingSubmission(agent_id=target.id, call_id=call_id, rating=value)
            auth.client.submit_rating(submission)
        except (AgentNotFoundError, PlatformApiError) as e:
            print_error(str(e))
            raise typer.Exit(1) from None
        except Exception as e:
            logger.debug("Rating failed", exc_info=True)
            print_error(f"Rating failed: {e}")
            raise typer.Exit(1) from None

        print_success(f"Rated {value}/5 for call {call_id[:8]}...")
