"""Platform data models."""

from mesh.models.agent import (
    AgentDetail,
    AgentListResponse,
    AgentReference,
    RatingSubmission,
    RemoteAgentSummary,
)

__all__ = [
    "AgentReference",
    "RemoteAgentSummary",
    "AgentListResponse",
    "AgentDetail",
    "RatingSubmission",
]
