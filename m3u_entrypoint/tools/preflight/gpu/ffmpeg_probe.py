###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from __future__ import annotations

from typing import Dict, List, Optional

from .utils import Finding, run_cmd, which

HW_ENCODER_FAMILIES = ("vaapi", "nvenc", "qsv", "amf")


def parse_hwaccels(out: str) -> List[str]:
    """
    Parse `ffmpeg -hwaccels` output.

    Example:
        Hardware acceleration methods:
        vaapi
        cuda
    """
    methods: List[str] = []
    for ln in out.splitlines():
        s = ln.strip()
        if not s or s.endswith(":"):
            continue
        methods.append(s)
    return methods


def parse_hw_encoders(out: str) -> Dict[str, List[str]]:
    """
    Group hardware encoders from `ffmpeg -encoders` by family.

    Encoder lines look like ` V....D h264_vaapi   H.264/AVC (VAAPI)`; the
    legend above the `------` separator is skipped.
    """
    families: Dict[str, List[str]] = {f: [] for f in HW_ENCODER_FAMILIES}
    in_table = False
    for ln in out.splitlines():
        s = ln.strip()
        if s.startswith("---"):
            in_table = True
            continue
        if not in_table:
            continue
        parts = s.split()
        if len(parts) < 2:
            continue
        name = parts[1]
        for family in HW_ENCODER_FAMILIES:
            if name.endswith(f"_{family}"):
                families[family].append(name)
    return families


def collect_ffmpeg_findings(path: Optional[str] = None, timeout_s: int = 5) -> List[Finding]:
    ffmpeg = which("ffmpeg", path)
    if ffmpeg is None:
        return [Finding("warn", "ffmpeg not found on PATH (transcoding unavailable)", {})]

    findings: List[Finding] = []

    rc, out, err = run_cmd([ffmpeg, "-hide_banner", "-hwaccels"], timeout_s=timeout_s)
    if rc != 0:
        findings.append(Finding("warn", "ffmpeg -hwaccels failed", {"rc": rc, "err": err}))
    else:
        findings.append(
            Finding(
                "info",
                "ffmpeg hardware accelerators",
                {"ffmpeg": ffmpeg, "hwaccels": parse_hwaccels(out)},
            )
        )

    rc, out, err = run_cmd([ffmpeg, "-hide_banner", "-encoders"], timeout_s=timeout_s)
    if rc != 0:
        findings.append(Finding("warn", "ffmpeg -encoders failed", {"rc": rc, "err": err}))
        return findings

    families = parse_hw_encoders(out)
    findings.append(Finding("info", "ffmpeg hardware encoders", {"encoders": families}))
    if not any(families.values()):
        findings.append(Finding("warn", "No hardware encoders in this ffmpeg build", {}))
    return findings
