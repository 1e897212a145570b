###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Plan CLI subcommand.

Resolves the service command line exactly as the container entrypoint would,
then prints it instead of exec-ing.

Example:
    m3u-entrypoint plan -- --port 9090 --log-level=debug
"""

from __future__ import annotations

import json
import shlex
import sys
from typing import Any, List


def run(args: Any, extra_args: List[str]) -> int:
    """
    Entry point for the 'plan' subcommand.

    `extra_args` are treated as the caller arguments the container would
    receive.
    """
    from m3u_entrypoint.core.config import LauncherConfig
    from m3u_entrypoint.core.launcher.arg_builder import build_args, final_argv

    caller = list(extra_args)
    if caller and caller[0] == "--":
        caller = caller[1:]

    config = LauncherConfig.from_env()
    synthesized = build_args(config, caller)
    argv = final_argv(config.executable, synthesized, caller)

    if args.json:
        payload = {
            "executable": config.executable,
            "synthesized": synthesized,
            "caller": caller,
            "argv": argv,
        }
        sys.stdout.write(json.dumps(payload, indent=2))
        sys.stdout.write("\n")
    else:
        sys.stdout.write(shlex.join(argv) + "\n")
    return 0


def register_subcommand(subparsers):
    """
    Register the 'plan' subcommand to the main CLI parser.

    Args:
        subparsers: argparse subparsers object from main.py
    """

    parser = subparsers.add_parser(
        "plan",
        help="Print the service command line the entrypoint would exec.",
        description=(
            "Merge M3U_PROXY_* environment defaults with the given arguments "
            "(arguments win) and print the resulting command line. "
            "Put service arguments after `--` when they collide with plan's own "
            "options (`--json`, `-h`); everything after `--` is forwarded as is."
        ),
        allow_abbrev=False,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print a JSON object instead of a shell-quoted command line.",
    )
    parser.set_defaults(func=run)

    return parser
