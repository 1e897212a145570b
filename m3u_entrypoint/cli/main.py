###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import argparse
import importlib
import pkgutil
import sys
from typing import Callable, Iterable, List, Optional

SUBCOMMAND_PACKAGE = "m3u_entrypoint.cli.subcommands"


def _iter_subcommand_modules() -> Iterable[str]:
    """
    Yield the import paths of the diagnostics subcommands (`plan`,
    `preflight`) found in `m3u_entrypoint.cli.subcommands`. Private modules and
    subpackages are skipped.
    """

    package = importlib.import_module(SUBCOMMAND_PACKAGE)
    prefix = package.__name__ + "."
    for _, module_name, is_pkg in pkgutil.walk_packages(package.__path__, prefix):
        leaf = module_name.split(".")[-1]
        if leaf.startswith("_"):
            continue
        if is_pkg:
            continue
        yield module_name


def _load_subcommands(subparsers: argparse._SubParsersAction) -> None:
    """
    Import each subcommand module and let it add its parser. Modules without
    `register_subcommand` are ignored; a registered parser without a `func`
    default is a wiring error.
    """

    for module_path in _iter_subcommand_modules():
        module = importlib.import_module(module_path)
        register: Callable[[argparse._SubParsersAction], argparse.ArgumentParser] = getattr(
            module, "register_subcommand", None
        )
        if register is None:
            continue
        parser = register(subparsers)
        if parser is None:
            continue
        if not hasattr(parser, "get_default") or parser.get_default("func") is None:
            raise RuntimeError(
                f"Subcommand registered by '{module_path}' must call parser.set_defaults(func=...)"
            )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="m3u-entrypoint",
        description="Diagnostics for the m3u-proxy container entrypoint",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)
    _load_subcommands(subparsers)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    m3u-entrypoint CLI

    Currently supported:
    - plan: print the command line the entrypoint would exec.
    - preflight: GPU / hardware-acceleration readiness report.

    The container entrypoint itself is `m3u-proxy-entrypoint`; it takes no
    flags and is not part of this CLI.
    """
    parser = build_parser()
    args, unknown_args = parser.parse_known_args(argv)

    if hasattr(args, "func"):
        return args.func(args, unknown_args) or 0
    parser.print_help()
    return 0


if __name__ == "__main__":
    if len(sys.argv) > 1 and sys.argv[1] == "--":
        sys.argv.pop(1)
    sys.exit(main())
