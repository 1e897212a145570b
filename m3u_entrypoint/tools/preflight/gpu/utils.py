###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence, Tuple

EXIT_TIMEOUT = 124


@dataclass
class Finding:
    # "info" | "warn" | "fail"
    level: str
    message: str
    details: Dict[str, Any]


def env_int(name: str, default: int) -> int:
    v = os.environ.get(name)
    if v is None or v == "":
        return default
    try:
        return int(v)
    except ValueError:
        return default


def default_probe_timeout_s() -> int:
    return env_int("M3U_PROXY_PREFLIGHT_TIMEOUT_S", 5)


def run_cmd(cmd: Sequence[str], timeout_s: int = 5) -> Tuple[int, str, str]:
    try:
        p = subprocess.run(
            list(cmd),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            timeout=timeout_s,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return EXIT_TIMEOUT, "", f"timed out after {timeout_s}s"
    return p.returncode, (p.stdout or "").strip(), (p.stderr or "").strip()


def which(name: str, path: Optional[str] = None) -> Optional[str]:
    search = os.environ.get("PATH", "") if path is None else path
    for p in search.split(os.pathsep):
        if not p:
            continue
        cand = os.path.join(p, name)
        if os.path.isfile(cand) and os.access(cand, os.X_OK):
            return cand
    return None
