"""Authentication middleware for CLI commands.

Provides the credential gate and the shared context that authenticated
commands run in.
"""

import logging
from typing import Dict, Optional

import typer

from cli.config_manager import ConfigError, ConfigManager
from cli.output_formatter import print_error
from mesh.api_clients.platform_client import PlatformClient
from mesh.models.agent import AgentReference
from mesh.resolver import resolve_agent
from shared.models.config import AliasEntry, AppConfig

logger = logging.getLogger(__name__)


def require_token() -> str:
    """Return the stored token or exit with an authentication error.

    Runs before any argument validation or network access.
    """
    from cli.auth import AuthenticationError, load_token

    token = load_token()
    if not token:
        print_error(str(AuthenticationError()))
        raise typer.Exit(1)
    return token


def load_config(config_manager: Optional[ConfigManager] = None) -> AppConfig:
    """Load config or exit with the parse error."""
    try:
        return (config_manager or ConfigManager()).load()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(1) from None


class AuthenticatedCommand:
    """Context manager for commands that act on the platform.

    Usage:
        with AuthenticatedCommand() as auth:
            # auth.token   - platform bearer token
            # auth.config  - loaded AppConfig
            # auth.client  - PlatformClient bound to the token
            agent = auth.resolve(user_input)
    """

    def __init__(self, config_manager: Optional[ConfigManager] = None):
        """Initialize authenticated command context.

        Args:
            config_manager: Config source (default location if not provided)
        """
        self.config_manager = config_manager or ConfigManager()
        self.token: Optional[str] = None
        self.config: Optional[AppConfig] = None
        self._client: Optional[PlatformClient] = None

    def __enter__(self):
        self.token = require_token()
        self.config = load_config(self.config_manager)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    @property
    def client(self) -> PlatformClient:
        """Platform client bound to the current token (created on first use)."""
        if self._client is None:
            self._client = PlatformClient(
                auth_token=self.token,
                base_url=self.config.base_url,
                timeout=self.config.defaults.timeout,
            )
        return self._client

    @property
    def aliases(self) -> Dict[str, AliasEntry]:
        return self.config_manager.list_aliases()

    def resolve(self, query: str) -> AgentReference:
        """Resolve a user-supplied agent identifier, alias or name."""
        return resolve_agent(query, self.client, self.aliases)
