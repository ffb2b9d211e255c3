"""Shared data models."""

from shared.models.config import AliasEntry, AppConfig, DefaultsConfig

__all__ = [
    "AppConfig",
    "AliasEntry",
    "DefaultsConfig",
]
