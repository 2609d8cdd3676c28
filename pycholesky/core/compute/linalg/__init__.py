"""
Linear algebra kernels for pycholesky.

All functions follow these conventions:
    - CPU functions use NumPy and accept any supported precision
    - GPU functions use PyTorch tensors already on the target device
    - Kernels never validate shapes; callers do

Submodules:
    ldlt: LDL' factorization, substitution, determinant
"""

from pycholesky.core.compute.linalg.ldlt import (
    LDLTFactors,
    ldlt_factor_cpu,
    ldlt_factor_gpu,
    ldlt_substitute_cpu,
    ldlt_unpack,
    ldlt_determinant,
    ldlt_log_determinant,
    find_degenerate_pivot,
)

__all__ = [
    "LDLTFactors",
    "ldlt_factor_cpu",
    "ldlt_factor_gpu",
    "ldlt_substitute_cpu",
    "ldlt_unpack",
    "ldlt_determinant",
    "ldlt_log_determinant",
    "find_degenerate_pivot",
]
