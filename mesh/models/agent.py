"""Agent data models exchanged with the platform API."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class AgentReference(BaseModel):
    """A resolved agent: canonical id plus the best display label found."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1, description="Canonical agent UUID")
    name: str = Field(..., description="Display label (falls back to the id)")


class RemoteAgentSummary(BaseModel):
    """One entry of the developer agent listing."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    agent_type: Optional[str] = None
    price: float = 0
    billing_period: str = "hour"
    is_online: bool = False
    is_published: bool = False


class AgentListResponse(BaseModel):
    """Response from ``GET /api/developer/agents``."""

    model_config = ConfigDict(extra="ignore")

    agents: List[RemoteAgentSummary] = Field(default_factory=list)
    author_login: Optional[str] = None


class AgentDetail(RemoteAgentSummary):
    """Full agent record from ``GET /api/developer/agents/{id}``."""

    description: Optional[str] = None
    min_units: Optional[int] = None
    bridge_token: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class RatingSubmission(BaseModel):
    """A validated rating for a completed call."""

    model_config = ConfigDict(frozen=True)

    agent_id: str = Field(..., min_length=1)
    call_id: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)

    def to_payload(self) -> dict:
        """Request body for the rate endpoint (the agent id travels in the path)."""
        return {"call_id": self.call_id, "rating": self.rating}
