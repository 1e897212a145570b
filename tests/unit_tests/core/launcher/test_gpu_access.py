###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

import pytest

from m3u_entrypoint.core.launcher import gpu_access
from m3u_entrypoint.core.launcher.gpu_access import (
    GETENT_RENDER_HINT,
    access_hint,
    detect_gpu_access,
)


@pytest.fixture
def warnings(monkeypatch):
    captured = []
    monkeypatch.setattr(gpu_access.logger, "warning", lambda msg, *a, **k: captured.append(msg))
    return captured


def test_absent_dri_directory_is_silent(tmp_path, warnings):
    assert detect_gpu_access(str(tmp_path / "dri")) == []
    assert warnings == []


def test_empty_dri_directory_warns(tmp_path, warnings):
    dri = tmp_path / "dri"
    dri.mkdir()

    lines = detect_gpu_access(str(dri))

    assert len(lines) == 2
    assert lines[0].startswith("Warning: GPU devices found")
    assert f"--device={dri}:{dri}" in lines[1]
    assert warnings == lines


def test_missing_card_node_warns(tmp_path, warnings):
    dri = tmp_path / "dri"
    dri.mkdir()
    (dri / "renderD128").touch()

    assert detect_gpu_access(str(dri))


def test_render_and_card_nodes_present(tmp_path, warnings):
    dri = tmp_path / "dri"
    dri.mkdir()
    (dri / "renderD128").touch()
    (dri / "card0").touch()

    assert detect_gpu_access(str(dri)) == []
    assert warnings == []


def test_hint_uses_render_gid_from_group_database(monkeypatch):
    monkeypatch.setattr(gpu_access, "lookup_group_id", lambda name: 993)
    assert access_hint("/dev/dri") == "--device=/dev/dri:/dev/dri --group-add 993"


def test_hint_falls_back_to_getent(monkeypatch):
    monkeypatch.setattr(gpu_access, "lookup_group_id", lambda name: None)
    assert access_hint("/dev/dri").endswith(f"--group-add {GETENT_RENDER_HINT}")


def test_lookup_unknown_group():
    assert gpu_access.lookup_group_id("no-such-group-m3u-proxy") is None
