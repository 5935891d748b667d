"""Configuration loader for the optimization pipeline.

Loads and validates ``pipeline.yaml`` into typed, frozen dataclasses.
The pass order and every pass parameter come from the config -- nothing
about a particular machine is hardcoded in the passes.

File layout::

    tolerance_mm: 0.0001
    passes:
      - name: route_grouping
        required: false
      - name: limit_feedrate
        feed: 1200.0

Every key of a pass entry other than ``name`` and ``required`` is a
parameter of that pass.

Usage::

    from pathopt.configs.loader import load_config
    cfg = load_config()                        # default path
    cfg = load_config("/custom/pipeline.yaml") # explicit path
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from pathopt.optimize.pipeline import PASSES
from pathopt.utils.fs import load_yaml, save_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "pipeline.yaml"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class ConfigError(Exception):
    """Raised when configuration validation fails."""

    pass


# ---------------------------------------------------------------------------
# Dataclasses -- mirror the YAML structure
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PassStep:
    """One pipeline entry.

    Parameters
    ----------
    name : str
        Registered pass name (see ``pathopt.optimize.pipeline.PASSES``).
    params : dict[str, Any]
        Keyword parameters passed to the pass.
    required : bool
        If ``True`` a failure of this pass aborts the pipeline; otherwise
        the failure is logged and the pass skipped.
    """

    name: str
    params: dict[str, Any] = field(default_factory=dict)
    required: bool = False


@dataclass(frozen=True)
class OptimizerConfig:
    """Complete pipeline configuration loaded from ``pipeline.yaml``."""

    tolerance_mm: float
    steps: tuple[PassStep, ...]

    @property
    def pass_names(self) -> tuple[str, ...]:
        return tuple(step.name for step in self.steps)

    def get_step(self, name: str) -> PassStep:
        """Return the first step running pass *name* or raise ``ConfigError``."""
        for step in self.steps:
            if step.name == name:
                return step
        raise ConfigError(
            f"Pass '{name}' is not configured. Configured: {list(self.pass_names)}"
        )


# ---------------------------------------------------------------------------
# Internal parsing helpers
# ---------------------------------------------------------------------------

# Range checks per parameter name: (predicate, description)
_PARAM_CHECKS: dict[str, tuple[Callable[[Any], bool], str]] = {
    "feed": (lambda v: v > 0, "must be positive"),
    "factor": (lambda v: v > 0, "must be positive"),
    "speed": (lambda v: v >= 0, "must be non-negative"),
    "height": (lambda v: v > 0, "must be positive"),
}


def _coerce_param(pass_name: str, key: str, value: Any, kind: type) -> Any:
    """Convert a raw YAML value to the parameter's declared type."""
    if kind is bool:
        if not isinstance(value, bool):
            raise ConfigError(
                f"Pass '{pass_name}' parameter '{key}' must be true/false, "
                f"got {value!r}"
            )
        return value

    # bool is an int subclass; reject it for numeric parameters
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(
            f"Pass '{pass_name}' parameter '{key}' must be a number, "
            f"got {value!r}"
        )
    value = kind(value)

    check = _PARAM_CHECKS.get(key)
    if check is not None and not check[0](value):
        raise ConfigError(
            f"Pass '{pass_name}' parameter '{key}' {check[1]}, got {value}"
        )
    return value


def _parse_step(idx: int, raw: Any) -> PassStep:
    """Parse a single ``passes`` entry (a bare name or a mapping)."""
    if isinstance(raw, str):
        raw = {"name": raw}
    if not isinstance(raw, dict):
        raise ConfigError(
            f"Pass entry {idx} must be a name or a mapping, got {raw!r}"
        )

    data = dict(raw)
    name = str(data.pop("name"))
    if name not in PASSES:
        raise ConfigError(
            f"Unknown pass '{name}'. Available: {sorted(PASSES)}"
        )
    required = data.pop("required", False)
    if not isinstance(required, bool):
        raise ConfigError(
            f"Pass '{name}' 'required' must be true/false, got {required!r}"
        )

    expected = PASSES[name].params
    unknown = set(data) - set(expected)
    if unknown:
        raise ConfigError(
            f"Pass '{name}' got unknown parameter(s) {sorted(unknown)}. "
            f"Expected: {sorted(expected)}"
        )
    missing = set(expected) - set(data)
    if missing:
        raise ConfigError(
            f"Pass '{name}' is missing parameter(s) {sorted(missing)}"
        )

    params = {
        key: _coerce_param(name, key, data[key], kind)
        for key, kind in expected.items()
    }
    return PassStep(name=name, params=params, required=required)


def _validate_config(cfg: OptimizerConfig) -> None:
    """Validate cross-field consistency.

    Raises
    ------
    ConfigError
        On any invalid combination.
    """
    if cfg.tolerance_mm < 0:
        raise ConfigError(
            f"tolerance_mm must be non-negative, got {cfg.tolerance_mm}"
        )
    if not cfg.steps:
        raise ConfigError("Configuration must list at least one pass")

    names = cfg.pass_names
    # Route grouping reads the drill feedrate, so it should see the
    # feedrates as generated.
    if "route_grouping" in names:
        first_route = names.index("route_grouping")
        for feed_pass in ("limit_feedrate", "feedrate_multiplier"):
            if feed_pass in names[:first_route]:
                logger.warning(
                    "'%s' runs before 'route_grouping'; the detected drill "
                    "feedrate will be the adjusted one",
                    feed_pass,
                )


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config(path: str | Path | None = None) -> OptimizerConfig:
    """Load and validate pipeline configuration from YAML.

    Parameters
    ----------
    path : str | Path | None
        Path to ``pipeline.yaml``.  ``None`` loads the default shipped
        alongside this module.

    Returns
    -------
    OptimizerConfig
        Fully validated, frozen configuration object.

    Raises
    ------
    ConfigError
        If any field is missing or fails validation.
    FileNotFoundError
        If *path* does not exist.
    """
    path = DEFAULT_CONFIG_PATH if path is None else Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    logger.info("Loading pipeline configuration from %s", path)

    data: dict[str, Any] = load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty configuration file: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration root must be a mapping: {path}")

    try:
        raw_passes = data["passes"]
        if not isinstance(raw_passes, list):
            raise ConfigError(
                f"'passes' must be a list, got {type(raw_passes).__name__}"
            )

        config = OptimizerConfig(
            tolerance_mm=float(data.get("tolerance_mm", 0.0001)),
            steps=tuple(
                _parse_step(idx, raw) for idx, raw in enumerate(raw_passes)
            ),
        )

        _validate_config(config)
        logger.info(
            "Configuration loaded: %d pass(es)", len(config.steps),
        )
        return config

    except KeyError as exc:
        raise ConfigError(
            f"Missing required configuration key: {exc}"
        ) from exc
    except (TypeError, ValueError) as exc:
        raise ConfigError(
            f"Invalid configuration value: {exc}"
        ) from exc


def save_config(config: OptimizerConfig, path: str | Path) -> Path:
    """Write *config* in the layout ``load_config`` reads."""
    passes: list[dict[str, Any]] = []
    for step in config.steps:
        entry: dict[str, Any] = {"name": step.name}
        if step.required:
            entry["required"] = True
        entry.update(step.params)
        passes.append(entry)
    return save_yaml(
        {"tolerance_mm": config.tolerance_mm, "passes": passes}, path,
    )
