"""Client for the agent platform API."""

import logging
from typing import Any, Dict, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from mesh.models.agent import AgentDetail, AgentListResponse, RatingSubmission
from shared.models.config import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

AGENTS_PATH = "/api/developer/agents"

# User-friendly messages for known platform error codes
ERROR_HINTS: Dict[str, str] = {
    "unauthorized": "Not authenticated. Run `agent-mesh login` first.",
    "forbidden": "You don't own this agent.",
    "not_found": "Agent not found.",
    "agent_offline": "Agent must be online for first publish. Connect the agent first.",
    "email_required": "Email required. Visit https://agents.hot/settings to add one.",
    "github_required": "GitHub account required. Visit https://agents.hot/settings to link one.",
    "validation_error": "Invalid input. Check your command flags.",
    "permission_denied": "You don't have permission to modify this agent.",
    "confirm_required": "This agent has active purchases. Re-run with --confirm to delete and refund.",
}

# Codes whose server message carries the specific reason; their hint is a fallback
DETAIL_CODES = frozenset({"validation_error"})


class PlatformApiError(Exception):
    """Raised when a platform request fails at the transport or API level."""

    def __init__(self, status_code: int, error_code: str, message: str):
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


def _parse(model: Type[ModelT], data: Any, path: str) -> ModelT:
    """Validate a response body, reporting malformed payloads as API errors."""
    if not isinstance(data, dict):
        raise PlatformApiError(200, "invalid_response", f"Unexpected response from {path}")
    try:
        return model(**data)
    except ValidationError as e:
        logger.debug(f"Invalid payload from {path}: {e}")
        raise PlatformApiError(
            200,
            "invalid_response",
            f"Unexpected response from {path}: {e.error_count()} invalid field(s)",
        ) from e


class PlatformClient:
    """Client for the agent platform.

    Every request carries the user's bearer token. Requests are sent once;
    failures are raised as ``PlatformApiError`` and never retried.
    """

    def __init__(
        self,
        auth_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 30,
    ):
        """Initialize the client.

        Args:
            auth_token: Platform bearer token
            base_url: Platform base URL
            timeout: Request timeout in seconds
        """
        if not auth_token:
            raise PlatformApiError(401, "unauthorized", ERROR_HINTS["unauthorized"])

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

        self._session = requests.Session()
        self._session.headers["Authorization"] = f"Bearer {auth_token}"
        self._session.headers["Content-Type"] = "application/json"

    def get(self, path: str) -> Dict[str, Any]:
        return self._request("GET", path)

    def post(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("POST", path, body)

    def put(self, path: str, body: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", path, body)

    def delete(self, path: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return self._request("DELETE", path, body)

    def _request(
        self, method: str, path: str, body: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """Send a single request and decode the JSON response.

        Raises:
            PlatformApiError: On network failure or a non-2xx response
        """
        url = f"{self.base_url}{path}"
        logger.debug(f"{method} {url}")

        try:
            response = self._session.request(
                method,
                url,
                json=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise PlatformApiError(0, "network_error", f"Network error: {e}") from e

        if not response.ok:
            raise self._error_from_response(response)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise PlatformApiError(
                response.status_code, "invalid_response", f"Invalid JSON from {path}"
            ) from e

    @staticmethod
    def _error_from_response(response: requests.Response) -> PlatformApiError:
        """Build an error from a failed response, preferring friendly hints."""
        error_code = "unknown"
        message = f"HTTP {response.status_code}"
        try:
            data = response.json()
        except ValueError:
            data = None

        server_message = None
        if isinstance(data, dict):
            error_code = data.get("error") or error_code
            server_message = data.get("error_description") or data.get("message")

        logger.debug(f"Request failed: {response.status_code} {error_code}: {server_message}")
        if error_code in DETAIL_CODES and server_message:
            message = server_message
        else:
            message = ERROR_HINTS.get(error_code) or server_message or message
        return PlatformApiError(response.status_code, error_code, message)

    # =========================================================================
    # Endpoints
    # =========================================================================

    def list_agents(self) -> AgentListResponse:
        """List the authenticated user's agents."""
        return _parse(AgentListResponse, self.get(AGENTS_PATH), AGENTS_PATH)

    def get_agent(self, agent_id: str) -> AgentDetail:
        """Fetch full details for one agent."""
        path = f"{AGENTS_PATH}/{agent_id}"
        return _parse(AgentDetail, self.get(path), path)

    def set_published(self, agent_id: str, published: bool) -> Dict[str, Any]:
        """Publish or unpublish an agent on the marketplace."""
        return self.put(f"{AGENTS_PATH}/{agent_id}", {"is_published": published})

    def delete_agent(self, agent_id: str, confirm: bool = False) -> Dict[str, Any]:
        """Soft-delete an agent; ``confirm`` acknowledges refunds of active purchases."""
        body = {"confirm": True} if confirm else None
        return self.delete(f"{AGENTS_PATH}/{agent_id}", body)

    def submit_rating(self, submission: RatingSubmission) -> Dict[str, Any]:
        """Rate a completed call."""
        logger.info(f"Submitting rating {submission.rating} for call {submission.call_id}")
        return self.post(
            f"/api/agents/{submission.agent_id}/rate",
            submission.to_payload(),
        )
