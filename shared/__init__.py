"""Shared code for the CLI and the platform layer."""

from shared.models.config import AliasEntry, AppConfig

__all__ = [
    "AppConfig",
    "AliasEntry",
]
