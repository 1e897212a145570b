###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
GPU check orchestration.
"""

from __future__ import annotations

from typing import List, Optional

from .dri_probe import collect_dri_findings, collect_group_findings
from .ffmpeg_probe import collect_ffmpeg_findings
from .utils import Finding, default_probe_timeout_s


def run_gpu_checks(
    dri_path: str,
    path: Optional[str] = None,
    timeout_s: Optional[int] = None,
) -> List[Finding]:
    """Run DRI, group and ffmpeg checks (WARN at most, never FAIL)."""
    timeout = default_probe_timeout_s() if timeout_s is None else int(timeout_s)

    out: List[Finding] = []
    out.extend(collect_dri_findings(dri_path))
    out.extend(collect_group_findings())
    out.extend(collect_ffmpeg_findings(path=path, timeout_s=timeout))
    return out
