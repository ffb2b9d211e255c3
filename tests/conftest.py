from __future__ import annotations

import logging
from typing import Any

import pytest

from mesh.models.agent import AgentDetail, AgentListResponse, RatingSubmission


class FakePlatformClient:
    """In-memory stand-in for PlatformClient that records every call."""

    def __init__(self, agents: list[dict] | None = None) -> None:
        self.agents = agents or []
        self.calls: list[tuple[str, Any]] = []
        self.init_kwargs: dict[str, Any] = {}
        self.submit_error: Exception | None = None
        self.delete_errors: list[Exception] = []
        self.delete_result: dict = {"success": True}

    def __call__(self, **kwargs: Any) -> "FakePlatformClient":
        # Used as the PlatformClient factory in CLI tests
        self.init_kwargs = kwargs
        return self

    def list_agents(self) -> AgentListResponse:
        self.calls.append(("list_agents", None))
        return AgentListResponse(agents=self.agents)

    def get_agent(self, agent_id: str) -> AgentDetail:
        self.calls.append(("get_agent", agent_id))
        for agent in self.agents:
            if agent["id"] == agent_id:
                return AgentDetail(**agent)
        return AgentDetail(id=agent_id, name=agent_id)

    def set_published(self, agent_id: str, published: bool) -> dict:
        self.calls.append(("set_published", (agent_id, published)))
        return {"success": True}

    def delete_agent(self, agent_id: str, confirm: bool = False) -> dict:
        self.calls.append(("delete_agent", (agent_id, confirm)))
        if self.delete_errors:
            raise self.delete_errors.pop(0)
        return self.delete_result

    def submit_rating(self, submission: RatingSubmission) -> dict:
        self.calls.append(("submit_rating", submission))
        if self.submit_error is not None:
            raise self.submit_error
        return {"ok": True, "call_id": submission.call_id, "rating": submission.rating}

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


class ExplodingClient:
    """Fails the test if the resolver touches the network."""

    def list_agents(self) -> AgentListResponse:
        raise AssertionError("remote listing must not be called")


@pytest.fixture
def isolated_home(tmp_path, monkeypatch):
    """Point config and token storage at a temp directory with no credentials."""
    from cli import auth

    config_path = tmp_path / "config.yaml"
    store_dir = tmp_path / "store"

    monkeypatch.setenv("AGENT_MESH_CONFIG", str(config_path))
    monkeypatch.delenv("AGENT_MESH_TOKEN", raising=False)
    monkeypatch.delenv("AGENT_MESH_BASE_URL", raising=False)
    monkeypatch.setattr(
        auth,
        "get_token_storage",
        lambda use_keyring=True: auth.TokenStorage(use_keyring=False, config_dir=str(store_dir)),
    )
    return tmp_path


@pytest.fixture
def fake_client(monkeypatch) -> FakePlatformClient:
    client = FakePlatformClient()
    monkeypatch.setattr("cli.auth_middleware.PlatformClient", client)
    return client


@pytest.fixture
def logged_in(isolated_home, monkeypatch):
    monkeypatch.setenv("AGENT_MESH_TOKEN", "ah_test-token-123")
    return isolated_home


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI runs replace the root handlers; put them back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
