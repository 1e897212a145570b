###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import signal

import pytest

from m3u_entrypoint.core.launcher.signals import (
    EXIT_CODES,
    install_exit_traps,
    restore_handlers,
)


@pytest.fixture
def traps():
    previous = install_exit_traps()
    try:
        yield previous
    finally:
        restore_handlers(previous)


def test_exit_codes():
    assert EXIT_CODES == {signal.SIGINT: 130, signal.SIGTERM: 143}


@pytest.mark.parametrize("signum,code", [(signal.SIGINT, 130), (signal.SIGTERM, 143)])
def test_trap_exits_with_conventional_code(traps, signum, code):
    handler = signal.getsignal(signum)
    with pytest.raises(SystemExit) as ei:
        handler(signum, None)
    assert ei.value.code == code


def test_delivered_sigterm_exits_143(traps):
    with pytest.raises(SystemExit) as ei:
        signal.raise_signal(signal.SIGTERM)
    assert ei.value.code == 143


def test_restore_handlers():
    before = signal.getsignal(signal.SIGTERM)
    previous = install_exit_traps()
    restore_handlers(previous)
    assert signal.getsignal(signal.SIGTERM) == before
