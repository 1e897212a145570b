###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from functools import wraps


def call_once(func):
    """
    Run `func` on the first call only; later calls return the first result.

    The wrapped function exposes `reset()` so tests can re-arm it.
    """
    state = {"called": False, "result": None}

    @wraps(func)
    def wrapper(*args, **kwargs):
        if not state["called"]:
            state["result"] = func(*args, **kwargs)
            state["called"] = True
        return state["result"]

    def reset():
        state["called"] = False
        state["result"] = None

    wrapper.reset = reset
    return wrapper
