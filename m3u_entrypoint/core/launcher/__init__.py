###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

from .arg_builder import build_args, has_arg
from .entrypoint import LaunchError, launch, run_entrypoint
from .gpu_access import detect_gpu_access
from .signals import install_exit_traps

__all__ = [
    "LaunchError",
    "build_args",
    "detect_gpu_access",
    "has_arg",
    "install_exit_traps",
    "launch",
    "run_entrypoint",
]
