###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import io
from types import SimpleNamespace

import pytest

from m3u_entrypoint.core.config import LauncherConfig
from m3u_entrypoint.tools.preflight import preflight_check
from m3u_entrypoint.tools.preflight.gpu import Finding
from m3u_entrypoint.tools.preflight.gpu import dri_probe
from m3u_entrypoint.tools.preflight.preflight_check import (
    collect_binary_findings,
    run_preflight,
    status_from_counts,
    write_report,
)


def _args(**kwargs):
    defaults = {"report_file": None, "strict": False, "timeout": None}
    defaults.update(kwargs)
    return SimpleNamespace(**defaults)


@pytest.fixture
def app_dir(tmp_path):
    app = tmp_path / "app"
    app.mkdir()
    exe = app / "m3u-proxy"
    exe.write_text("#!/bin/sh\nexit 0\n")
    exe.chmod(0o755)
    return app


class TestDriProbe:

    def test_absent_directory(self, tmp_path):
        findings = dri_probe.collect_dri_findings(str(tmp_path / "dri"))
        assert [f.level for f in findings] == ["info"]

    def test_empty_directory_warns(self, tmp_path):
        dri = tmp_path / "dri"
        dri.mkdir()
        findings = dri_probe.collect_dri_findings(str(dri))
        assert [f.level for f in findings] == ["info", "warn"]
        assert "--device=" in findings[1].details["hint"]

    def test_nodes_listed(self, tmp_path, monkeypatch):
        dri = tmp_path / "dri"
        dri.mkdir()
        (dri / "card0").touch()
        (dri / "renderD128").touch()
        monkeypatch.setattr(
            dri_probe, "node_access", lambda p: {"path": p, "readable": True, "writable": True}
        )

        findings = dri_probe.collect_dri_findings(str(dri))

        assert [f.level for f in findings] == ["info"]
        assert findings[0].details["render_nodes"] == [str(dri / "renderD128")]
        assert findings[0].details["card_nodes"] == [str(dri / "card0")]

    def test_inaccessible_render_node(self, tmp_path, monkeypatch):
        dri = tmp_path / "dri"
        dri.mkdir()
        (dri / "card0").touch()
        (dri / "renderD128").touch()
        monkeypatch.setattr(
            dri_probe, "node_access", lambda p: {"path": p, "readable": True, "writable": False}
        )

        findings = dri_probe.collect_dri_findings(str(dri))
        assert findings[-1].level == "warn"
        assert findings[-1].details["nodes"][0]["path"] == str(dri / "renderD128")

    def test_group_membership(self, monkeypatch):
        gids = {"render": 993, "video": 44}
        monkeypatch.setattr(dri_probe, "lookup_group_id", lambda name: gids.get(name))
        monkeypatch.setattr(dri_probe.os, "getegid", lambda: 1000)

        findings = dri_probe.collect_group_findings(process_gids=[1000, 44])
        assert [f.level for f in findings] == ["info", "warn"]
        groups = findings[0].details["groups"]
        assert groups["video"] == {"gid": 44, "member": True}
        assert groups["render"] == {"gid": 993, "member": False}

        findings = dri_probe.collect_group_findings(process_gids=[993])
        assert [f.level for f in findings] == ["info"]

    def test_no_render_group_on_host(self, monkeypatch):
        monkeypatch.setattr(dri_probe, "lookup_group_id", lambda name: None)
        findings = dri_probe.collect_group_findings(process_gids=[])
        assert [f.level for f in findings] == ["info"]


def test_binary_found_on_prefixed_path(app_dir):
    config = LauncherConfig.from_env({"PATH": "/nonexistent"}, path_prefix=str(app_dir))
    findings = collect_binary_findings(config)
    assert findings[0].level == "info"
    assert findings[0].details["executable"] == str(app_dir / "m3u-proxy")


def test_binary_missing_is_fail(tmp_path):
    config = LauncherConfig.from_env({"PATH": ""}, path_prefix=str(tmp_path))
    assert collect_binary_findings(config)[0].level == "fail"


@pytest.mark.parametrize("fail,warn,status", [(0, 0, "OK"), (0, 2, "WARN"), (1, 2, "FAIL")])
def test_status_from_counts(fail, warn, status):
    assert status_from_counts(fail, warn) == status


def test_write_report():
    findings = [
        Finding("info", "Service binary", {"executable": "/app/m3u-proxy"}),
        Finding("warn", "ffmpeg not found on PATH (transcoding unavailable)", {}),
    ]
    buf = io.StringIO()

    assert write_report(buf, findings) == "WARN"

    text = buf.getvalue()
    assert "**Status:** WARN (fail=0, warn=1)" in text
    assert "| WARN | ffmpeg not found on PATH (transcoding unavailable) |" in text
    assert '"executable": "/app/m3u-proxy"' in text


class TestRunPreflight:

    @pytest.fixture(autouse=True)
    def _no_gpu_probes(self, monkeypatch):
        self.gpu_findings = []
        monkeypatch.setattr(
            preflight_check,
            "run_gpu_checks",
            lambda dri_path, path=None, timeout_s=None: list(self.gpu_findings),
        )

    def test_ok_to_stdout(self, app_dir, capsys):
        config = LauncherConfig.from_env({}, path_prefix=str(app_dir))
        assert run_preflight(_args(), config=config) == 0
        assert "**Status:** OK" in capsys.readouterr().out

    def test_missing_binary_fails(self, tmp_path):
        config = LauncherConfig.from_env({}, path_prefix=str(tmp_path))
        assert run_preflight(_args(), config=config) == 1

    def test_strict_fails_on_warning(self, app_dir):
        self.gpu_findings = [Finding("warn", "GPU devices found but render/card nodes are missing", {})]
        config = LauncherConfig.from_env({}, path_prefix=str(app_dir))
        assert run_preflight(_args(), config=config) == 0
        assert run_preflight(_args(strict=True), config=config) == 1

    def test_report_file(self, app_dir, tmp_path):
        report = tmp_path / "preflight.md"
        config = LauncherConfig.from_env({}, path_prefix=str(app_dir))

        assert run_preflight(_args(report_file=str(report)), config=config) == 0
        assert report.read_text(encoding="utf-8").startswith("# m3u-proxy Preflight")
