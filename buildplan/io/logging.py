"""Logging utilities for buildplan.

A compile run can send its stage log to a file of its own and append a
structured record of the resulting plan, either as YAML documents or as
JSON lines.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Optional, Tuple, Union

import yaml

from ..core.compiler import CompiledPlan, plan_to_dict

PathLike = Union[str, Path]

COMPILE_LOGGER = "buildplan.compile"
JSON_RECORD_SUFFIXES = (".json", ".jsonl")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def get_timestamped_log_path(log_path: PathLike, mode: Optional[str] = None) -> Path:
    """Add the compile mode and a timestamp to a log file name.

    Example: compile.log -> compile_production_20260301_080530.log
    """
    log_path = Path(log_path)
    parts = [log_path.stem]
    if mode:
        parts.append(mode)
    parts.append(datetime.now().strftime("%Y%m%d_%H%M%S"))
    return log_path.with_name("_".join(parts) + (log_path.suffix or ".log"))


def get_logger(
    log_path: PathLike,
    mode: Optional[str] = None,
    level: int = logging.INFO,
    timestamped: bool = True,
    name: str = COMPILE_LOGGER,
) -> Tuple[logging.Logger, Path]:
    """Return the logger a compile run reports its stages to.

    Parameters
    ----------
    log_path : PathLike
        Base path of the stage log.
    mode : str, optional
        Compile mode, added to timestamped file names.
    level : int
        Logging level (default: INFO).
    timestamped : bool
        If True, each run writes a new file next to log_path.
        If False, log_path itself is rewritten.
    name : str
        Logger name.

    Returns
    -------
    Tuple[logging.Logger, Path]
        The logger and the file it writes to. The logger does not
        propagate; pass it to ``close_logger`` when the run is over.
    """
    if timestamped:
        path = get_timestamped_log_path(log_path, mode)
    else:
        path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(name)
    close_logger(logger)
    logger.setLevel(level)
    logger.propagate = False
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(handler)
    return logger, path


def close_logger(logger: logging.Logger) -> None:
    """Detach and close a compile logger's handlers."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


def plan_record(plan: CompiledPlan, **context: Any) -> dict[str, Any]:
    """Build a structured record of a compiled plan.

    Extra keyword arguments (config path, mode, ...) are stored under
    ``context``.
    """
    return {
        "compiled_at": datetime.now().isoformat(timespec="seconds"),
        "context": {k: str(v) if isinstance(v, Path) else v for k, v in context.items()},
        "plan": plan_to_dict(plan),
    }


def _append(log_path: PathLike, text: str) -> None:
    path = Path(log_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(text)
        handle.write("\n")


def log_json(log_path: PathLike, record: dict[str, Any]) -> None:
    """Append a record to log_path as one JSON line."""
    _append(log_path, json.dumps(record, default=str))


def log_yaml(log_path: PathLike, record: dict[str, Any]) -> None:
    """Append a record to log_path as a YAML document."""
    yaml_text = yaml.safe_dump(record, sort_keys=False).rstrip("\n")
    _append(log_path, f"{yaml_text}\n---")


def append_plan_record(log_path: PathLike, record: dict[str, Any]) -> None:
    """Append a plan record, as JSON lines for .json/.jsonl files, else YAML."""
    if Path(log_path).suffix.lower() in JSON_RECORD_SUFFIXES:
        log_json(log_path, record)
    else:
        log_yaml(log_path, record)
