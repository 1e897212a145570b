###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
Launcher configuration for the m3u-proxy container entrypoint.

The process environment is read exactly once, in `LauncherConfig.from_env`,
and the resulting frozen object is handed to the argument builder and the
launcher. Nothing downstream looks at `os.environ` on its own.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Tuple

DEFAULT_EXECUTABLE = "m3u-proxy"
DEFAULT_PATH_PREFIX = "/app"
DEFAULT_DRI_PATH = "/dev/dri"

ENTRYPOINT_LOG_LEVEL_ENV = "M3U_PROXY_ENTRYPOINT_LOG_LEVEL"
DEFAULT_ENTRYPOINT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class ServiceSetting:
    """One service flag the entrypoint can fill in from the environment."""

    name: str
    env_var: str
    default: str
    long_flag: str
    short_flag: str


# Order matters: defaults are synthesized in this order.
SERVICE_SETTINGS: Tuple[ServiceSetting, ...] = (
    ServiceSetting("host", "M3U_PROXY_HOST", "0.0.0.0", "--host", "-H"),
    ServiceSetting("port", "M3U_PROXY_PORT", "8080", "--port", "-p"),
    ServiceSetting("config", "M3U_PROXY_CONFIG", "/app/config/config.toml", "--config", "-c"),
    ServiceSetting("log_level", "M3U_PROXY_LOG_LEVEL", "info", "--log-level", "-l"),
    ServiceSetting(
        "database_url",
        "M3U_PROXY_DATABASE__URL",
        f"sqlite:///app/data/{DEFAULT_EXECUTABLE}.db",
        "--database-url",
        "-d",
    ),
)


def env_or_default(environ: Mapping[str, str], name: str, default: str) -> str:
    """Shell `${NAME:-default}`: unset and empty both fall back to `default`."""
    value = environ.get(name)
    if value is None or value == "":
        return default
    return value


def prefix_path(path_value: Optional[str], prefix: str) -> str:
    if not path_value:
        return prefix
    return f"{prefix}{os.pathsep}{path_value}"


@dataclass(frozen=True)
class LauncherConfig:
    # (setting, resolved value) pairs in SERVICE_SETTINGS order
    defaults: Tuple[Tuple[ServiceSetting, str], ...]
    executable: str = DEFAULT_EXECUTABLE
    path_prefix: str = DEFAULT_PATH_PREFIX
    dri_path: str = DEFAULT_DRI_PATH
    log_level: str = DEFAULT_ENTRYPOINT_LOG_LEVEL
    environ: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        *,
        executable: str = DEFAULT_EXECUTABLE,
        path_prefix: str = DEFAULT_PATH_PREFIX,
        dri_path: str = DEFAULT_DRI_PATH,
    ) -> "LauncherConfig":
        """
        Snapshot the environment into a config.

        Args:
            environ: Mapping to read from. Defaults to a copy of `os.environ`.
            executable: Service binary to exec.
            path_prefix: Directory prepended to PATH for the exec lookup.
            dri_path: GPU device directory to inspect.
        """
        source: Dict[str, str] = dict(os.environ if environ is None else environ)

        defaults = tuple(
            (setting, env_or_default(source, setting.env_var, setting.default))
            for setting in SERVICE_SETTINGS
        )

        exec_env = dict(source)
        exec_env["PATH"] = prefix_path(source.get("PATH"), path_prefix)

        return cls(
            defaults=defaults,
            executable=executable,
            path_prefix=path_prefix,
            dri_path=dri_path,
            log_level=env_or_default(source, ENTRYPOINT_LOG_LEVEL_ENV, DEFAULT_ENTRYPOINT_LOG_LEVEL),
            environ=exec_env,
        )

    def value_of(self, name: str) -> str:
        for setting, value in self.defaults:
            if setting.name == name:
                return value
        raise KeyError(name)

    def as_dict(self) -> Dict[str, str]:
        return {setting.name: value for setting, value in self.defaults}
