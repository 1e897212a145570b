###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Container preflight: can the service start, and can it use the GPU?

Findings are collected locally and rendered as a Markdown report.
"""

from __future__ import annotations

import json
import sys
from typing import Any, List, Optional

from m3u_entrypoint.core.config import LauncherConfig
from m3u_entrypoint.core.utils import logger

from .gpu import Finding, run_gpu_checks
from .gpu.utils import which


def collect_binary_findings(config: LauncherConfig) -> List[Finding]:
    path = config.environ.get("PATH", "")
    resolved = which(config.executable, path)
    if resolved is None:
        return [
            Finding(
                "fail",
                "Service binary not found on PATH",
                {"executable": config.executable, "path": path},
            )
        ]
    return [Finding("info", "Service binary", {"executable": resolved})]


def status_from_counts(fail_count: int, warn_count: int) -> str:
    if fail_count > 0:
        return "FAIL"
    if warn_count > 0:
        return "WARN"
    return "OK"


def collect_findings(config: LauncherConfig, timeout_s: Optional[int] = None) -> List[Finding]:
    findings: List[Finding] = []
    findings.extend(collect_binary_findings(config))
    findings.extend(run_gpu_checks(config.dri_path, path=config.environ.get("PATH", ""), timeout_s=timeout_s))
    return findings


def write_report(f: Any, findings: List[Finding]) -> str:
    """Write the Markdown report and return the overall status."""
    fail_count = sum(1 for x in findings if x.level == "fail")
    warn_count = sum(1 for x in findings if x.level == "warn")
    status = status_from_counts(fail_count, warn_count)

    f.write("# m3u-proxy Preflight\n\n")
    f.write(f"**Status:** {status} (fail={fail_count}, warn={warn_count})\n\n")

    f.write("| level | message |\n")
    f.write("|---|---|\n")
    for x in findings:
        f.write(f"| {x.level.upper()} | {x.message} |\n")
    f.write("\n")

    f.write("## Details\n\n")
    for x in findings:
        if not x.details:
            continue
        f.write(f"### {x.message}\n\n")
        f.write("```json\n")
        f.write(json.dumps(x.details, indent=2, sort_keys=True, default=str))
        f.write("\n```\n\n")
    return status


def run_preflight(args: Any, config: Optional[LauncherConfig] = None) -> int:
    """
    Entry point used by the `preflight` subcommand.

    Returns:
        Process exit status: 1 on FAIL (or WARN with --strict), else 0.
    """
    config = LauncherConfig.from_env() if config is None else config
    findings = collect_findings(config, timeout_s=getattr(args, "timeout", None))

    report_file = getattr(args, "report_file", None)
    if report_file:
        with open(report_file, "w", encoding="utf-8") as f:
            status = write_report(f, findings)
        logger.info(f"Preflight report written to {report_file} (status={status})")
    else:
        status = write_report(sys.stdout, findings)

    if status == "FAIL" or (status == "WARN" and getattr(args, "strict", False)):
        return 1
    return 0
