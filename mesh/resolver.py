"""Resolve a user-supplied agent identifier to a canonical agent reference.

Users refer to agents by UUID, by a local alias, or by the display name shown
on the platform. Resolution tries these forms in order of cost and stops at
the first match:

1. UUID shape: used as-is, no lookup at all
2. Local alias: key in the alias map, or an alias whose stored id equals the input
3. Remote name: one call to the agent listing, case-insensitive exact name match
"""

import logging
import re
from typing import Callable, List, Mapping, Optional, Protocol

from mesh.models.agent import AgentListResponse, AgentReference
from shared.models.config import AliasEntry

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE
)


class AgentNotFoundError(LookupError):
    """Raised when no resolution tier matches the input."""

    def __init__(self, query: str):
        self.query = query
        super().__init__(
            f'Agent not found: "{query}". Use a UUID, local alias, or exact agent name.'
        )


class AgentLister(Protocol):
    """The slice of ``PlatformClient`` the resolver needs."""

    def list_agents(self) -> AgentListResponse: ...


# A tier returns a reference or None to pass to the next tier
Strategy = Callable[[str], Optional[AgentReference]]


def is_uuid(value: str) -> bool:
    """Check whether a string has the canonical 8-4-4-4-12 hex shape."""
    return bool(UUID_RE.match(value))


def match_uuid(query: str) -> Optional[AgentReference]:
    if is_uuid(query):
        return AgentReference(id=query, name=query)
    return None


def match_local_alias(
    query: str, aliases: Mapping[str, AliasEntry]
) -> Optional[AgentReference]:
    """Match an alias key, then fall back to an alias whose stored id equals the query."""
    entry = aliases.get(query)
    if entry is not None:
        return AgentReference(id=entry.agent_id, name=query)

    for alias, entry in aliases.items():
        if entry.agent_id == query:
            return AgentReference(id=entry.agent_id, name=alias)
    return None


def match_remote_name(query: str, client: AgentLister) -> Optional[AgentReference]:
    """Match the query against the user's agent names on the platform."""
    wanted = query.lower()
    for agent in client.list_agents().agents:
        if agent.name.lower() == wanted:
            return AgentReference(id=agent.id, name=agent.name)
    return None


def build_strategies(
    client: AgentLister, aliases: Mapping[str, AliasEntry]
) -> List[Strategy]:
    """Resolution tiers, cheapest first."""
    return [
        match_uuid,
        lambda query: match_local_alias(query, aliases),
        lambda query: match_remote_name(query, client),
    ]


def resolve_agent(
    query: str,
    client: AgentLister,
    aliases: Mapping[str, AliasEntry],
) -> AgentReference:
    """Resolve ``query`` to an agent reference.

    Args:
        query: UUID, local alias or exact agent name as typed by the user
        client: Authenticated platform client, only used by the remote tier
        aliases: Snapshot of the local alias map

    Returns:
        The first matching reference

    Raises:
        AgentNotFoundError: If no tier matches
        PlatformApiError: If the remote listing fails
    """
    for tier, strategy in enumerate(build_strategies(client, aliases), 1):
        ref = strategy(query)
        if ref is not None:
            logger.debug(f"Resolved {query!r} to {ref.id} (tier {tier})")
            return ref

    raise AgentNotFoundError(query)
