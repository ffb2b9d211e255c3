"""Platform-facing layer: API client, data models and agent resolution."""

from mesh.resolver import AgentNotFoundError, resolve_agent

__all__ = ["resolve_agent", "AgentNotFoundError"]
