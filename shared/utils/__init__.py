"""Shared helpers."""

from shared.utils.logging import setup_logging

__all__ = ["setup_logging"]
