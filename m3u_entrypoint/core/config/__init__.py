###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from .launcher_config import (
    SERVICE_SETTINGS,
    LauncherConfig,
    ServiceSetting,
    env_or_default,
)

__all__ = [
    "SERVICE_SETTINGS",
    "LauncherConfig",
    "ServiceSetting",
    "env_or_default",
]
