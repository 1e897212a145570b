###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Argument reconciliation for the service binary.

Caller arguments always win: a default is only synthesized when the caller
did not pass the flag in any of its forms (`--long`, `--long=value`, `-s`).
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from m3u_entrypoint.core.config import LauncherConfig


def has_arg(long_flag: str, short_flag: str, args: Sequence[str]) -> bool:
    prefix = f"{long_flag}="
    for provided in args:
        if provided == long_flag or provided == short_flag or provided.startswith(prefix):
            return True
    return False


def synthesize_pairs(config: LauncherConfig, args: Sequence[str]) -> List[Tuple[str, str]]:
    """Return the (flag, value) defaults missing from `args`, in setting order."""
    pairs: List[Tuple[str, str]] = []
    for setting, value in config.defaults:
        if not has_arg(setting.long_flag, setting.short_flag, args):
            pairs.append((setting.long_flag, value))
    return pairs


def build_args(config: LauncherConfig, args: Sequence[str]) -> List[str]:
    """
    Build the synthesized argument list for the service binary.

    Args:
        config: Launcher configuration holding the resolved defaults.
        args: Raw caller arguments. They are only inspected, never modified.

    Returns:
        Flattened `[flag, value, ...]` list. Caller arguments are not included.

    Example:
        >>> build_args(LauncherConfig.from_env({}), ["--port", "9090"])[:2]
        ['--host', '0.0.0.0']
    """
    out: List[str] = []
    for flag, value in synthesize_pairs(config, args):
        out.extend((flag, value))
    return out


def final_argv(executable: str, synthesized: Sequence[str], caller: Sequence[str]) -> List[str]:
    return [executable, *synthesized, *caller]
