"""Pipeline configuration loading and validation."""

from pathopt.configs.loader import (
    ConfigError,
    OptimizerConfig,
    PassStep,
    load_config,
    save_config,
)

__all__ = [
    "ConfigError",
    "OptimizerConfig",
    "PassStep",
    "load_config",
    "save_config",
]
