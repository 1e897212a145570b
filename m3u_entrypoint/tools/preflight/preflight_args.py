###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Argument helpers for the entrypoint preflight tool.
"""

import argparse


def add_preflight_parser(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """
    Register preflight arguments to the given CLI parser.
    """
    parser.add_argument(
        "--report-file",
        type=str,
        default=None,
        help="Write the Markdown report to this file instead of stdout.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on warnings as well as failures.",
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=None,
        help="Timeout in seconds for each external probe "
        "(default: $M3U_PROXY_PREFLIGHT_TIMEOUT_S or 5).",
    )
    return parser
