from __future__ import annotations

import pytest

from mesh.api_clients.platform_client import PlatformApiError
from mesh.resolver import AgentNotFoundError, build_strategies, is_uuid, resolve_agent
from shared.models.config import AliasEntry
from tests.conftest import ExplodingClient, FakePlatformClient

AGENT_UUID = "2f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a20"
OTHER_UUID = "9b7e4c2a-1d3f-4a5b-8c6d-0e1f2a3b4c5d"


@pytest.mark.parametrize(
    "value",
    [
        AGENT_UUID,
        AGENT_UUID.upper(),
        "00000000-0000-0000-0000-000000000000",
        "ABCDEF01-abcd-EF01-abcd-0123456789ab",
    ],
)
def test_uuid_input_returned_unchanged_without_remote_call(value: str) -> None:
    ref = resolve_agent(value, ExplodingClient(), {})

    assert ref.id == value
    assert ref.name == value


def test_uuid_tier_wins_over_alias_with_same_key() -> None:
    aliases = {AGENT_UUID: AliasEntry(agent_id=OTHER_UUID)}

    ref = resolve_agent(AGENT_UUID, ExplodingClient(), aliases)

    assert ref.id == AGENT_UUID


@pytest.mark.parametrize(
    "value",
    [
        "2f1c6a3e8b4d4c1e9f2a7d5b3c9e1a20",
        "2f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a2",
        "2f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a20x",
        "g f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a2",
        "{2f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a20}",
        "",
    ],
)
def test_is_uuid_rejects_near_misses(value: str) -> None:
    assert not is_uuid(value)


def test_alias_key_resolves_to_entry_id_with_alias_as_name() -> None:
    aliases = {"my-bot": AliasEntry(agent_id=AGENT_UUID)}

    ref = resolve_agent("my-bot", ExplodingClient(), aliases)

    assert ref.id == AGENT_UUID
    assert ref.name == "my-bot"


def test_stored_agent_id_resolves_to_its_alias() -> None:
    # Non-UUID ids reach the value scan instead of the shape tier
    aliases = {
        "first": AliasEntry(agent_id="legacy-agent-1"),
        "second": AliasEntry(agent_id="legacy-agent-2"),
    }

    ref = resolve_agent("legacy-agent-2", ExplodingClient(), aliases)

    assert ref.id == "legacy-agent-2"
    assert ref.name == "second"


def test_stored_agent_id_first_alias_wins() -> None:
    aliases = {
        "a": AliasEntry(agent_id="shared-id"),
        "b": AliasEntry(agent_id="shared-id"),
    }

    ref = resolve_agent("shared-id", ExplodingClient(), aliases)

    assert ref.name == "a"


def test_local_alias_shadows_remote_name() -> None:
    client = FakePlatformClient(agents=[{"id": OTHER_UUID, "name": "helper"}])
    aliases = {"helper": AliasEntry(agent_id=AGENT_UUID)}

    ref = resolve_agent("helper", client, aliases)

    assert ref.id == AGENT_UUID
    assert client.calls == []


def test_remote_name_match_is_case_insensitive_and_single_call() -> None:
    client = FakePlatformClient(
        agents=[
            {"id": OTHER_UUID, "name": "Other Bot"},
            {"id": AGENT_UUID, "name": "Research Bot"},
        ]
    )

    ref = resolve_agent("research BOT", client, {"unrelated": AliasEntry(agent_id="x-1")})

    assert ref.id == AGENT_UUID
    assert ref.name == "Research Bot"
    assert client.call_names() == ["list_agents"]


def test_remote_name_requires_exact_match() -> None:
    client = FakePlatformClient(agents=[{"id": AGENT_UUID, "name": "Research Bot"}])

    with pytest.raises(AgentNotFoundError):
        resolve_agent("Research", client, {})
    assert client.call_names() == ["list_agents"]


def test_remote_name_first_match_wins() -> None:
    client = FakePlatformClient(
        agents=[
            {"id": "first-id", "name": "twin"},
            {"id": "second-id", "name": "TWIN"},
        ]
    )

    assert resolve_agent("Twin", client, {}).id == "first-id"


def test_not_found_message_names_input_and_accepted_forms() -> None:
    client = FakePlatformClient(agents=[])

    with pytest.raises(AgentNotFoundError) as exc_info:
        resolve_agent("ghost", client, {})

    message = str(exc_info.value)
    assert '"ghost"' in message
    assert "UUID" in message
    assert "local alias" in message
    assert "exact agent name" in message
    assert exc_info.value.query == "ghost"


def test_remote_failure_propagates() -> None:
    class _FailingClient:
        def list_agents(self):
            raise PlatformApiError(0, "network_error", "Network error: boom")

    with pytest.raises(PlatformApiError, match="boom"):
        resolve_agent("anything", _FailingClient(), {})


def test_strategies_are_ordered_cheapest_first() -> None:
    client = FakePlatformClient(agents=[{"id": "remote-id", "name": "x"}])
    strategies = build_strategies(client, {"x": AliasEntry(agent_id="local-id")})

    assert len(strategies) == 3
    assert strategies[0]("x") is None
    assert strategies[1]("x").id == "local-id"
    assert strategies[2]("x").id == "remote-id"
