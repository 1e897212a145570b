###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Exit traps for the short window before the service binary takes over.

`exec` resets caught signals to their default disposition, so these handlers
only matter while the entrypoint itself still owns the process.
"""

from __future__ import annotations

import signal
from typing import Dict

# 128 + signal number, as a shell reports it
EXIT_CODES: Dict[int, int] = {
    signal.SIGINT: 130,
    signal.SIGTERM: 143,
}


def _exit_on_signal(signum, frame):
    raise SystemExit(EXIT_CODES[signum])


def install_exit_traps() -> Dict[int, object]:
    """Install the traps and return the previous handlers keyed by signal."""
    previous = {}
    for signum in EXIT_CODES:
        previous[signum] = signal.signal(signum, _exit_on_signal)
    return previous


def restore_handlers(previous: Dict[int, object]) -> None:
    for signum, handler in previous.items():
        signal.signal(signum, handler)
