###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from __future__ import annotations

import glob
import grp
import os
from typing import List, Optional

from m3u_entrypoint.core.utils import logger

RENDER_NODE_PATTERN = "render*"
CARD_NODE_PATTERN = "card*"

GETENT_RENDER_HINT = "$(getent group render | cut -d: -f3)"


def lookup_group_id(name: str) -> Optional[int]:
    # GIDs differ between host distributions; only trust the group database.
    try:
        return grp.getgrnam(name).gr_gid
    except KeyError:
        return None


def list_nodes(dri_path: str, pattern: str) -> List[str]:
    return sorted(glob.glob(os.path.join(dri_path, pattern)))


def access_hint(dri_path: str) -> str:
    gid = lookup_group_id("render")
    group_add = str(gid) if gid is not None else GETENT_RENDER_HINT
    return f"--device={dri_path}:{dri_path} --group-add {group_add}"


def detect_gpu_access(dri_path: str = "/dev/dri") -> List[str]:
    """
    Warn when the DRI directory exists but its render/card nodes are missing.

    An absent directory means the container was started without GPU devices
    on purpose and is not reported. The check never blocks startup.

    Returns:
        The warning lines that were emitted; empty when nothing was reported.
    """
    if not os.path.exists(dri_path):
        return []

    if list_nodes(dri_path, RENDER_NODE_PATTERN) and list_nodes(dri_path, CARD_NODE_PATTERN):
        logger.debug(f"GPU device nodes present under {dri_path}")
        return []

    lines = [
        "Warning: GPU devices found but may not be accessible due to permissions",
        f"For hardware acceleration, run with: {access_hint(dri_path)}",
    ]
    for line in lines:
        logger.warning(line)
    return lines
