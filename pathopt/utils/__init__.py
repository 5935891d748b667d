"""Shared helpers: YAML files and logging setup."""

from pathopt.utils.fs import load_yaml, save_yaml
from pathopt.utils.logging_config import (
    log_context,
    pop_context,
    push_context,
    setup_logging,
)

__all__ = [
    "load_yaml",
    "log_context",
    "pop_context",
    "push_context",
    "save_yaml",
    "setup_logging",
]
