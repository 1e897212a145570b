###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
m3u-proxy container entrypoint.

Sequence:
  1. trap SIGINT / SIGTERM (exit 130 / 143)
  2. warn about missing GPU device nodes
  3. fill in service defaults the caller did not pass
  4. exec the service binary in place of this process

The entrypoint takes no flags of its own; every argument is forwarded.
"""

from __future__ import annotations

import os
import sys
from typing import List, Mapping, Optional, Sequence

from m3u_entrypoint.core.config import LauncherConfig
from m3u_entrypoint.core.launcher.arg_builder import build_args, final_argv
from m3u_entrypoint.core.launcher.gpu_access import detect_gpu_access
from m3u_entrypoint.core.launcher.signals import install_exit_traps
from m3u_entrypoint.core.utils import logger

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126

# GPU access warnings must always reach stderr
MAX_SINK_LEVEL = "WARNING"


class LaunchError(RuntimeError):
    """Raised when the service binary cannot replace the current process."""

    def __init__(self, executable: str, exit_code: int, reason: str):
        super().__init__(f"cannot exec {executable!r}: {reason}")
        self.executable = executable
        self.exit_code = exit_code


def launch(
    executable: str,
    synthesized: Sequence[str],
    caller: Sequence[str],
    env: Optional[Mapping[str, str]] = None,
) -> None:
    """
    Replace the current process image with `executable`.

    argv is `[executable, *synthesized, *caller]`. The binary is looked up on
    PATH of `env`. On success this function does not return.

    Raises:
        LaunchError: the binary is missing or cannot be executed.
    """
    argv = final_argv(executable, synthesized, caller)
    exec_env = dict(os.environ if env is None else env)
    try:
        os.execvpe(executable, argv, exec_env)
    except FileNotFoundError as e:
        raise LaunchError(executable, EXIT_NOT_FOUND, "not found on PATH") from e
    except PermissionError as e:
        raise LaunchError(executable, EXIT_NOT_EXECUTABLE, "permission denied") from e
    except OSError as e:
        raise LaunchError(executable, EXIT_NOT_EXECUTABLE, e.strerror or str(e)) from e


def run_entrypoint(config: LauncherConfig, caller: Sequence[str]) -> int:
    """
    Run the startup sequence for an already-built config.

    Returns only when the exec failed, with the exit status to use.
    """
    detect_gpu_access(config.dri_path)

    synthesized: List[str] = build_args(config, caller)
    logger.log_kv("executable", config.executable)
    logger.log_kv("synthesized", " ".join(synthesized) or "-")
    logger.log_kv("caller", " ".join(caller) or "-")

    try:
        launch(config.executable, synthesized, caller, env=config.environ)
    except LaunchError as e:
        logger.error(str(e))
        return e.exit_code
    return 0


def sink_level(level: str) -> str:
    """Entrypoint log level, capped at WARNING; unknown names fall back to INFO."""
    name = level.upper()
    if name not in logger.LEVELS:
        return "INFO"
    levels = logger.LEVELS
    return levels[min(levels.index(name), levels.index(MAX_SINK_LEVEL))]


def main(argv: Optional[Sequence[str]] = None) -> int:
    install_exit_traps()
    caller = list(sys.argv[1:] if argv is None else argv)
    config = LauncherConfig.from_env()
    logger.setup_logger(logger.LoggerConfig(stderr_sink_level=sink_level(config.log_level)))
    return run_entrypoint(config, caller)


if __name__ == "__main__":
    sys.exit(main())
