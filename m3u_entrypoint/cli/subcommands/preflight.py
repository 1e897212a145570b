###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Preflight CLI subcommand.

This subcommand is a thin wrapper around
`m3u_entrypoint.tools.preflight.preflight_check.run_preflight`.

Example:
    m3u-entrypoint preflight --report-file /app/data/preflight.md
"""

from __future__ import annotations

from typing import Any, List


def run(args: Any, extra_args: List[str]) -> int:
    """
    Entry point for the 'preflight' subcommand.

    Any extra_args (unknown CLI tokens) are ignored.
    """
    from m3u_entrypoint.core.utils import logger

    if extra_args:
        logger.warning(f"Ignoring extra CLI args: {extra_args}")

    from m3u_entrypoint.tools.preflight.preflight_check import run_preflight

    return run_preflight(args)


def register_subcommand(subparsers):
    """
    Register the 'preflight' subcommand to the main CLI parser.

    Args:
        subparsers: argparse subparsers object from main.py
    """

    parser = subparsers.add_parser(
        "preflight",
        help="Check GPU device access and the service binary.",
        description=(
            "Run container preflight diagnostics (DRI nodes, render/video groups, "
            "ffmpeg hardware support, service binary) via "
            "m3u_entrypoint.tools.preflight.preflight_check.run_preflight."
        ),
    )
    from m3u_entrypoint.tools.preflight.preflight_args import add_preflight_parser

    add_preflight_parser(parser)

    parser.set_defaults(func=run)

    return parser
