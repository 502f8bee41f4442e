"""I/O utilities for buildplan.

Provides compile-run file logging and structured plan records.
"""

from .logging import (
    append_plan_record,
    close_logger,
    get_logger,
    get_timestamped_log_path,
    log_json,
    log_yaml,
    plan_record,
)

__all__ = [
    "append_plan_record",
    "close_logger",
    "get_logger",
    "get_timestamped_log_path",
    "log_json",
    "log_yaml",
    "plan_record",
]
