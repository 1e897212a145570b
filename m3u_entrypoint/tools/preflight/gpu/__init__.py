###############################################################################
# Copyright (c) 2025, Advanced Micro Devices, Inc. All rights reserved.
#
# See LICENSE for license information.
###############################################################################

"""
GPU / hardware-acceleration preflight checks.
"""

from .check import run_gpu_checks
from .utils import Finding

__all__ = [
    "Finding",
    "run_gpu_checks",
]
