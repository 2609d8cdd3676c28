"""
Shared compute infrastructure for pycholesky.

IMPORTANT: This is NOT where backends live. Those go in ldlt/backends/.
This module contains shared NUMERIC infrastructure.

Submodules:
    device: Hardware detection and device selection
    timing: Execution timing utilities
    precision: Supported precisions and pivot tolerance
    tolerances: Tolerance tiers per compute path
    linalg: LDL' kernels
"""

from pycholesky.core.compute.device import (
    DeviceInfo,
    detect_gpu,
    get_cpu_info,
    select_device,
)
from pycholesky.core.compute.timing import Timer

__all__ = [
    # Device detection
    "DeviceInfo",
    "detect_gpu",
    "get_cpu_info",
    "select_device",
    # Timing
    "Timer",
]
