"""API clients for the agent platform."""

from mesh.api_clients.platform_client import PlatformApiError, PlatformClient

__all__ = ["PlatformClient", "PlatformApiError"]
