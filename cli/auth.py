"""Platform token storage for the CLI.

Handles:
- Token storage in the system keyring
- File fallback when no keyring backend is usable
- AGENT_MESH_TOKEN environment override
"""

import json
import logging
import os
from typing import Optional

from cli.config_manager import CONFIG_DIR

logger = logging.getLogger(__name__)

# Service name for keyring storage
KEYRING_SERVICE = "agent-mesh"
KEYRING_USERNAME = "token"
TOKEN_ENV_VAR = "AGENT_MESH_TOKEN"


class AuthenticationError(Exception):
    """Raised when a command needs a token and none is stored."""

    def __init__(self, message: str = "Not authenticated. Run `agent-mesh login` first."):
        super().__init__(message)


class TokenStorage:
    """Token storage using system keyring or a 0600 file fallback."""

    def __init__(self, use_keyring: bool = True, config_dir: Optional[str] = None):
        """Initialize token storage.

        Args:
            use_keyring: Try to use system keyring (macOS Keychain, etc.)
            config_dir: Directory for fallback file storage
        """
        self.use_keyring = use_keyring
        self.config_dir = config_dir or str(CONFIG_DIR)
        self._keyring = None

        if use_keyring:
            try:
                import keyring
                self._keyring = keyring
            except ImportError:
                logger.debug("keyring not available, using file storage")
                self.use_keyring = False

    def _get_token_file(self) -> str:
        """Get path to token file."""
        return os.path.join(self.config_dir, "token.json")

    def store_token(self, token: str) -> None:
        """Store the token.

        Args:
            token: Platform bearer token
        """
        if self._keyring:
            try:
                self._keyring.set_password(KEYRING_SERVICE, KEYRING_USERNAME, token)
                logger.debug("Token stored in keyring")
                return
            except Exception as e:
                logger.warning(f"Keyring storage failed: {e}, using file fallback")

        os.makedirs(self.config_dir, mode=0o700, exist_ok=True)
        token_file = self._get_token_file()
        with open(token_file, "w") as f:
            json.dump({"token": token}, f)
        os.chmod(token_file, 0o600)  # User read/write only
        logger.debug("Token stored in file")

    def get_token(self) -> Optional[str]:
        """Retrieve the stored token.

        Returns:
            Token string or None if not found
        """
        token = None

        if self._keyring:
            try:
                token = self._keyring.get_password(KEYRING_SERVICE, KEYRING_USERNAME)
                if token:
                    logger.debug("Token retrieved from keyring")
            except Exception as e:
                logger.warning(f"Keyring retrieval failed: {e}")

        if not token:
            token_file = self._get_token_file()
            if os.path.exists(token_file):
                try:
                    with open(token_file, "r") as f:
                        token = json.load(f).get("token")
                    logger.debug("Token retrieved from file")
                except (OSError, ValueError, AttributeError) as e:
                    logger.error(f"Failed to read stored token: {e}")
                    return None

        return token or None

    def clear_token(self) -> None:
        """Clear the stored token."""
        if self._keyring:
            try:
                self._keyring.delete_password(KEYRING_SERVICE, KEYRING_USERNAME)
                logger.debug("Token cleared from keyring")
            except Exception as e:
                logger.debug(f"Nothing to clear in keyring: {e}")

        # Also clear file if exists
        token_file = self._get_token_file()
        if os.path.exists(token_file):
            os.remove(token_file)
            logger.debug("Token cleared from file")


def get_token_storage(use_keyring: bool = True) -> TokenStorage:
    """Get the configured token storage."""
    return TokenStorage(use_keyring=use_keyring)


def token_from_env() -> Optional[str]:
    value = os.environ.get(TOKEN_ENV_VAR, "").strip()
    return value or None


def load_token() -> Optional[str]:
    """Load the platform token.

    The AGENT_MESH_TOKEN environment variable wins over stored tokens.

    Returns:
        Token or None when unauthenticated
    """
    return token_from_env() or get_token_storage().get_token()


def save_token(token: str, use_keyring: bool = True) -> None:
    get_token_storage(use_keyring=use_keyring).store_token(token)


def clear_token() -> None:
    get_token_storage().clear_token()
