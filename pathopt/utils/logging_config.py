"""Logging configuration for pathopt entrypoints.

Library modules only ever call ``logging.getLogger(__name__)``.  Whatever
drives the optimizer (a CLI, a CAM plugin, a test) calls
``setup_logging`` once:

    - Console handler (stderr) and optional file handler with rotation
    - Human-readable or JSON-lines output
    - Contextual fields (e.g. the running pass) on every record

Public API:
    setup_logging(log_level="INFO", log_file=None, json=False)
    push_context(job="bracket")
    pop_context(keys=["job"])
    with log_context(step="route_grouping"): ...

Format examples:
    Human: 2026-03-02T10:15:04.221Z | INFO     | step=lift_speed | Lift speed: 4 lift(s) promoted to rapid
    JSON:  {"t": "2026-03-02T10:15:04.221000+00:00", "lvl": "INFO", "name": "pathopt.optimize.lift", "step": "lift_speed", "msg": "..."}

Context uses contextvars, so concurrent pipelines in different threads
keep separate fields.  Repeated setup_logging() calls replace handlers
instead of duplicating them.
"""

import contextlib
import contextvars
import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional


_context_var: contextvars.ContextVar[Dict[str, Any]] = contextvars.ContextVar(
    'pathopt_logging_context', default={}
)

# Handlers installed by setup_logging, removed again on reconfiguration
_installed: List[logging.Handler] = []


class ContextFormatter(logging.Formatter):
    """Formatter that appends contextual fields to every record.

    Parameters
    ----------
    fmt_mode : str
        ``"human"`` or ``"json"``
    use_color : bool
        Colorize the level name (only when stderr is a TTY)
    """

    COLORS = {
        'DEBUG': '\033[36m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[35m',
    }
    RESET = '\033[0m'

    def __init__(self, fmt_mode: str = "human", use_color: bool = False):
        super().__init__()
        if fmt_mode not in ("human", "json"):
            raise ValueError(f"Unknown log format: {fmt_mode}. Use 'human' or 'json'.")
        self.fmt_mode = fmt_mode
        self.use_color = use_color and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        context = _context_var.get()
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc)
        if self.fmt_mode == "json":
            return self._format_json(record, ts, context)
        return self._format_human(record, ts, context)

    def _format_json(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: Dict[str, Any]
    ) -> str:
        log_dict = {
            't': ts.isoformat(),
            'lvl': record.levelname,
            'name': record.name,
        }
        log_dict.update(context)
        log_dict['msg'] = record.getMessage()
        if record.exc_info:
            log_dict['exc'] = self.formatException(record.exc_info)
        return json.dumps(log_dict, default=str)

    def _format_human(
        self,
        record: logging.LogRecord,
        ts: datetime,
        context: Dict[str, Any]
    ) -> str:
        ts_str = ts.strftime('%Y-%m-%dT%H:%M:%S.%f')[:-3] + 'Z'

        level = f"{record.levelname:8s}"
        if self.use_color:
            level = f"{self.COLORS.get(record.levelname, '')}{level}{self.RESET}"

        parts = [ts_str, '|', level, '|']
        if context:
            parts.append(' '.join(f"{k}={v}" for k, v in context.items()))
            parts.append('|')
        parts.append(record.getMessage())

        line = ' '.join(parts)
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    *,
    json: bool = False,
    color: bool = True,
    to_stderr: bool = True,
    rotate: Optional[Dict[str, Any]] = None,
    logger_name: str = "pathopt",
    context: Optional[Dict[str, Any]] = None
) -> List[logging.Handler]:
    """Configure the ``pathopt`` logger (idempotent).

    Parameters
    ----------
    log_level : str
        "DEBUG", "INFO", "WARNING", "ERROR" or "CRITICAL"
    log_file : str, optional
        Log file path; None for no file logging
    json : bool
        JSON-lines output on every handler, default False
    color : bool
        ANSI colors in console output, default True
    to_stderr : bool
        Log to stderr, default True
    rotate : dict, optional
        File rotation:
        - {"mode": "size", "max_bytes": 10_000_000, "backup_count": 5}
        - {"mode": "time", "when": "D", "interval": 1, "backup_count": 7}
    logger_name : str
        Logger to configure; "" for the root logger
    context : dict, optional
        Initial contextual fields (e.g. {"job": "bracket"})

    Returns
    -------
    list[logging.Handler]
        The installed handlers.

    Raises
    ------
    ValueError
        On unknown level or rotation mode.
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    logger = logging.getLogger(logger_name)
    for handler in _installed:
        logger.removeHandler(handler)
        handler.close()
    _installed.clear()

    logger.setLevel(level)
    fmt_mode = "json" if json else "human"

    if to_stderr:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(ContextFormatter(fmt_mode, use_color=color and not json))
        _installed.append(console_handler)

    if log_file:
        file_handler = _create_file_handler(log_file, rotate)
        file_handler.setFormatter(ContextFormatter(fmt_mode))
        _installed.append(file_handler)

    for handler in _installed:
        logger.addHandler(handler)

    if context:
        push_context(**context)

    return list(_installed)


def _create_file_handler(
    log_file: str,
    rotate: Optional[Dict[str, Any]]
) -> logging.Handler:
    """Create file handler with optional rotation."""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if not rotate:
        return logging.FileHandler(log_path, encoding='utf-8')

    mode = rotate.get('mode', 'size')
    if mode == 'size':
        return logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=rotate.get('max_bytes', 10_000_000),
            backupCount=rotate.get('backup_count', 5),
            encoding='utf-8'
        )
    if mode == 'time':
        return logging.handlers.TimedRotatingFileHandler(
            log_path,
            when=rotate.get('when', 'D'),
            interval=rotate.get('interval', 1),
            backupCount=rotate.get('backup_count', 7),
            encoding='utf-8'
        )
    raise ValueError(f"Unknown rotation mode: {mode}. Use 'size' or 'time'.")


def push_context(**kwargs: Any) -> None:
    """Add contextual fields to all subsequent log records.

    Examples
    --------
    >>> push_context(job="bracket")
    >>> logger.info("Loaded")  # → "... | job=bracket | Loaded"
    """
    _context_var.set({**_context_var.get(), **kwargs})


def pop_context(keys: Optional[List[str]] = None) -> None:
    """Remove contextual fields; all of them when *keys* is None."""
    if keys is None:
        _context_var.set({})
        return
    current = dict(_context_var.get())
    for key in keys:
        current.pop(key, None)
    _context_var.set(current)


@contextlib.contextmanager
def log_context(**kwargs: Any) -> Iterator[None]:
    """Scope contextual fields to a ``with`` block.

    The previous context is restored on exit, even on error.
    """
    token = _context_var.set({**_context_var.get(), **kwargs})
    try:
        yield
    finally:
        _context_var.reset(token)
