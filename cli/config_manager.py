"""Configuration manager for loading and saving config and local aliases."""

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from shared.models.config import AliasEntry, AppConfig

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".agent-mesh"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"
CONFIG_PATH_ENV_VAR = "AGENT_MESH_CONFIG"
BASE_URL_ENV_VAR = "AGENT_MESH_BASE_URL"


class ConfigError(ValueError):
    """Raised when the config file cannot be parsed or validated."""


def default_config_path() -> Path:
    """Config path, honouring the AGENT_MESH_CONFIG override."""
    override = os.environ.get(CONFIG_PATH_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH


class ConfigManager:
    """Manages application configuration from file and environment.

    The ``agents`` section of the config is the local alias store. Readers get
    a snapshot via ``list_aliases()``; only the ``alias`` commands write to it.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_path: Path to config file (uses default if not provided)
        """
        self.config_path = config_path or default_config_path()
        self._config: Optional[AppConfig] = None

    def load(self, apply_env: bool = True) -> AppConfig:
        """Load configuration from file and environment.

        A missing file yields the defaults (no aliases). Environment
        variables override file values unless ``apply_env`` is False,
        which writers use so overrides never end up in the file.

        Args:
            apply_env: Apply environment variable overrides

        Returns:
            Loaded configuration

        Raises:
            ConfigError: If the file is not valid YAML or fails validation
        """
        file_config: Dict[str, Any] = {}
        if self.config_path.exists():
            try:
                with open(self.config_path) as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"Invalid YAML in {self.config_path}: {e}") from e
            if not isinstance(file_config, dict):
                raise ConfigError(f"Expected a mapping at the top of {self.config_path}")
        else:
            logger.debug(f"No config file at {self.config_path}, using defaults")

        try:
            if apply_env:
                file_config = self._apply_env_overrides(file_config)
            self._config = AppConfig(**file_config)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration in {self.config_path}: {e}") from e
        return self._config

    def _apply_env_overrides(self, config: Dict[str, Any]) -> Dict[str, Any]:
        """Apply environment variable overrides to config.

        Supports:
        - AGENT_MESH_BASE_URL
        """
        if os.environ.get(BASE_URL_ENV_VAR):
            config["base_url"] = os.environ[BASE_URL_ENV_VAR]
        return config

    def get_config(self) -> AppConfig:
        """Get the loaded configuration.

        Returns:
            Configuration (loads if not already loaded)
        """
        if self._config is None:
            return self.load()
        return self._config

    def save(self, config: AppConfig) -> Path:
        """Write configuration to the YAML file.

        Args:
            config: Configuration to persist

        Returns:
            Path to saved file
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)

        content = "# agent-mesh configuration\n" + yaml.safe_dump(
            config.to_yaml_dict(), sort_keys=False, default_flow_style=False
        )
        self.config_path.write_text(content)
        self.config_path.chmod(0o600)  # Secure permissions

        self._config = None  # reload so env overrides apply again
        logger.debug(f"Configuration saved to {self.config_path}")
        return self.config_path

    # =========================================================================
    # Alias store
    # =========================================================================

    def list_aliases(self) -> Dict[str, AliasEntry]:
        """Snapshot of the alias map."""
        return dict(self.get_config().agents)

    def get_alias(self, alias: str) -> Optional[AliasEntry]:
        return self.get_config().agents.get(alias)

    def add_alias(self, alias: str, agent_id: str, agent_type: str = "claude") -> AliasEntry:
        """Store (or replace) an alias and persist the config."""
        config = self.load(apply_env=False)
        entry = AliasEntry(
            agent_id=agent_id,
            agent_type=agent_type,
            added_at=datetime.now(timezone.utc).isoformat(),
        )
        config.agents[alias] = entry
        self.save(config)
        return entry

    def remove_alias(self, alias: str) -> bool:
        """Remove an alias and persist the config.

        Returns:
            True if the alias existed
        """
        config = self.load(apply_env=False)
        if alias not in config.agents:
            return False
        del config.agents[alias]
        self.save(config)
        return True

    def set_base_url(self, base_url: str) -> Path:
        """Persist a new platform base URL."""
        config = self.load(apply_env=False)
        # Re-validate through the model so the URL is normalised
        updated = AppConfig(**{**config.to_yaml_dict(), "base_url": base_url})
        return self.save(updated)
