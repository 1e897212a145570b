###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import sys
from pathlib import Path

import pytest


def pytest_configure(config):
    # Project root first so the in-tree package wins over an installed copy
    project_root = Path(__file__).resolve().parent.parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


@pytest.fixture
def clean_env():
    """A process-like environment with none of the M3U_PROXY_* variables set."""
    return {"PATH": "/usr/local/bin:/usr/bin:/bin", "HOME": "/home/appuser"}
