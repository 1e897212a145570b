###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import inspect
import logging
import sys
from dataclasses import dataclass
from typing import Any

from .decorator import call_once

_logger = None

# Global variable to track the maximum module format width
_max_module_format_width = 20  # Start with a reasonable default

LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

stderr_sink_format = (
    "<blue>({extra[module_name]} pid={process}) </>"
    "[<green>{time:YYYYMMDD HH:mm:ss}</>]"
    "<level>{extra[level_padded]}</level>"
    "<level>{message}</level>"
)


@dataclass(frozen=True)
class LoggerConfig:
    module_name: str = "m3u-entrypoint"
    stderr_sink_level: str = "INFO"
    colorize: bool = True


def format_level_with_padding(record) -> bool:
    """
    Add a formatted level field with padding outside brackets.

    Format: [LEVEL] + spaces to align
    Examples:
        INFO     -> "[INFO]     " (total 11 chars)
        WARNING  -> "[WARNING]  " (total 11 chars)
        CRITICAL -> "[CRITICAL]" (total 11 chars)
    """
    bracket_content = f"[{record['level'].name}]"
    record["extra"]["level_padded"] = bracket_content.ljust(11)
    return True


class InterceptHandler(logging.Handler):
    """Route standard `logging` records into loguru with a module location prefix."""

    def emit(self, record):
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        module_name = record.name.split(".")[-1] if record.name else "unknown"
        formatted_message = f"{module_format(module_name, record.lineno)}: {record.getMessage()}"
        _logger.opt(depth=6, exception=record.exc_info).log(level, formatted_message)


@call_once
def setup_logger(cfg: LoggerConfig = LoggerConfig()):
    """
    Setup the loguru logger with a single stderr sink.

    Args:
        cfg: Logger configuration
    """
    global _logger

    from loguru import logger as loguru_logger

    level = cfg.stderr_sink_level.upper()
    if level not in LEVELS:
        level = "INFO"

    # remove default stderr sink
    loguru_logger.remove()
    loguru_logger = loguru_logger.bind(module_name=cfg.module_name)
    loguru_logger.add(
        sys.stderr,
        level=level,
        backtrace=True,
        diagnose=False,
        format=stderr_sink_format,
        colorize=cfg.colorize,
        filter=format_level_with_padding,
    )

    _logger = loguru_logger

    logging.root.handlers = [InterceptHandler()]
    logging.root.setLevel(logging.NOTSET)
    return _logger


def get_logger():
    if _logger is None:
        setup_logger()
    return _logger


def module_format(module_name: str, line: int):
    """
    Format module location with dynamic width adjustment.

    Returns:
        Formatted string like "[--------entrypoint.py:10] "
    """
    global _max_module_format_width

    location_str = f"{module_name}.py:{line}"
    if len(location_str) > _max_module_format_width:
        _max_module_format_width = len(location_str)

    return "[" + location_str.rjust(_max_module_format_width, "-") + "] "


def _with_caller(__message: str) -> str:
    # two frames up: the public helper, then its caller
    caller_frame = inspect.currentframe().f_back.f_back
    module_name = caller_frame.f_globals["__name__"].split(".")[-1]
    return f"{module_format(module_name, caller_frame.f_lineno)}: {__message}"


def debug(__message: str, *args: Any, **kwargs: Any) -> None:
    get_logger().debug(_with_caller(__message), *args, **kwargs)


def info(__message: str, *args: Any, **kwargs: Any) -> None:
    get_logger().info(_with_caller(__message), *args, **kwargs)


def warning(__message: str, *args: Any, **kwargs: Any) -> None:
    get_logger().warning(_with_caller(__message), *args, **kwargs)


def error(__message: str, *args: Any, **kwargs: Any) -> None:
    get_logger().error(_with_caller(__message), *args, **kwargs)


def log_kv(key: str, value: str, width=18, fillchar=" ") -> None:
    __message = f"{key}:".ljust(width, fillchar) + f"{value}"
    get_logger().debug(_with_caller(__message))
