"""Command line helpers for producing portolan batch descriptors."""

from .config import ToolConfig, load_config  # noqa: F401

__all__ = [
    "ToolConfig",
    "load_config",
]
