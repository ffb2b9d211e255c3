"""Configuration models for the application.

This module defines the configuration schema that is loaded from
the ~/.agent-mesh/config.yaml config file or environment variables.
The ``agents`` section doubles as the local alias store: each key is a
user-chosen alias and each value records the remote agent it points at.
"""

from typing import Dict, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_BASE_URL = "https://agents.hot"


class AliasEntry(BaseModel):
    """A locally remembered agent, keyed by its alias in ``AppConfig.agents``."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    agent_id: str = Field(..., alias="agentId", description="Remote agent UUID")
    agent_type: str = Field(default="claude", description="Agent runtime type")
    added_at: str = Field(default="", description="ISO-8601 timestamp of when the alias was added")

    @field_validator("agent_id")
    @classmethod
    def validate_agent_id(cls, v: str) -> str:
        """Reject blank agent ids."""
        v = v.strip()
        if not v:
            raise ValueError("agentId must not be empty")
        return v


class DefaultsConfig(BaseModel):
    """Default settings."""

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    timeout: int = Field(default=30, gt=0, description="HTTP request timeout in seconds")


class AppConfig(BaseModel):
    """Complete application configuration.

    This configuration can be loaded from:
    1. Config file: ~/.agent-mesh/config.yaml
    2. Environment variables (override config file)
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Platform base URL")
    agents: Dict[str, AliasEntry] = Field(
        default_factory=dict, description="Local aliases keyed by alias name"
    )
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @field_validator("base_url")
    @classmethod
    def strip_base_url(cls, v: str) -> str:
        """Normalise the base URL so paths can be appended directly."""
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("base_url must not be empty")
        return v

    @field_validator("agents", mode="before")
    @classmethod
    def default_agents(cls, v):
        """Treat an empty ``agents:`` section in YAML as no aliases."""
        return v or {}

    def to_yaml_dict(self) -> Dict:
        """Dump to the plain structure written to the YAML file."""
        return {
            "base_url": self.base_url,
            "agents": {
                alias: entry.model_dump(by_alias=True)
                for alias, entry in self.agents.items()
            },
            "defaults": self.defaults.model_dump(),
        }

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "base_url": DEFAULT_BASE_URL,
                "agents": {
                    "my-bot": {
                        "agentId": "2f1c6a3e-8b4d-4c1e-9f2a-7d5b3c9e1a20",
                        "agent_type": "claude",
                        "added_at": "2026-01-01T00:00:00+00:00",
                    }
                },
                "defaults": {"log_level": "WARNING", "timeout": 30},
            }
        }
    )
