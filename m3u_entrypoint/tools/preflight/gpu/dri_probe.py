###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
DRI device and group membership probes.
"""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional

from m3u_entrypoint.core.launcher.gpu_access import (
    CARD_NODE_PATTERN,
    RENDER_NODE_PATTERN,
    access_hint,
    list_nodes,
    lookup_group_id,
)

from .utils import Finding

ACCEL_GROUPS = ("render", "video")


def node_access(path: str) -> Dict[str, Any]:
    return {
        "path": path,
        "readable": os.access(path, os.R_OK),
        "writable": os.access(path, os.W_OK),
    }


def collect_dri_findings(dri_path: str) -> List[Finding]:
    findings: List[Finding] = []

    if not os.path.exists(dri_path):
        findings.append(
            Finding(
                "info",
                "No DRI directory (software transcoding only)",
                {"dri_path": dri_path},
            )
        )
        return findings

    render_nodes = list_nodes(dri_path, RENDER_NODE_PATTERN)
    card_nodes = list_nodes(dri_path, CARD_NODE_PATTERN)
    findings.append(
        Finding(
            "info",
            "DRI devices",
            {"dri_path": dri_path, "render_nodes": render_nodes, "card_nodes": card_nodes},
        )
    )

    if not render_nodes or not card_nodes:
        findings.append(
            Finding(
                "warn",
                "GPU devices found but render/card nodes are missing",
                {"hint": access_hint(dri_path)},
            )
        )
        return findings

    blocked = [a for a in (node_access(p) for p in render_nodes) if not (a["readable"] and a["writable"])]
    if blocked:
        findings.append(
            Finding(
                "warn",
                "Render nodes not accessible by this process",
                {"nodes": blocked, "hint": access_hint(dri_path)},
            )
        )
    return findings


def collect_group_findings(process_gids: Optional[List[int]] = None) -> List[Finding]:
    gids = set(os.getgroups() if process_gids is None else process_gids)
    gids.add(os.getegid())

    groups: Dict[str, Dict[str, Any]] = {}
    for name in ACCEL_GROUPS:
        gid = lookup_group_id(name)
        groups[name] = {"gid": gid, "member": gid is not None and gid in gids}

    findings = [Finding("info", "Acceleration groups", {"groups": groups, "process_gids": sorted(gids)})]

    render = groups["render"]
    if render["gid"] is not None and not render["member"]:
        findings.append(
            Finding(
                "warn",
                "Process is not in the render group",
                {"render_gid": render["gid"]},
            )
        )
    return findings
