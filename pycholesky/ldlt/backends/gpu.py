"""
GPU backend for LDL' decomposition using PyTorch.

Performance path for large matrices, validated against the CPU
reference. Supports CUDA (Linux/Windows) and MPS (macOS Apple Silicon).
Real matrices only.

FP32 by default; FP64 on request (CUDA only). Returns FP64 numpy arrays
for consistency with the CPU backend.
"""

from __future__ import annotations

import numpy as np

from pycholesky.core.result import Result
from pycholesky.core.exceptions import SingularMatrixError, ValidationError
from pycholesky.core.validation import check_finite
from pycholesky.core.compute.timing import Timer
from pycholesky.core.compute.device import DeviceInfo, detect_gpu
from pycholesky.core.compute.precision import default_pivot_tolerance
from pycholesky.core.compute.linalg.ldlt import (
    ldlt_factor_gpu,
    ldlt_unpack,
    find_degenerate_pivot,
)
from pycholesky.ldlt.design import LDLTDesign
from pycholesky.ldlt._common import (
    LDLTParams,
    build_params,
    pivot_warnings,
    pivot_info,
)


class GPULDLTBackend:
    """
    GPU backend using PyTorch for LDL' decomposition.

    Column updates run as one vectorised operation per column on the
    device; columns are still sequential.
    """

    def __init__(
        self,
        device: DeviceInfo | None = None,
        use_fp64: bool = False,
        strict: bool = False,
        pivot_tol: float | None = None,
    ):
        """
        Initialize GPU backend.

        Args:
            device: Device info from select_device(). If None, auto-selects.
            use_fp64: If True, use FP64 (slow on consumer GPUs, not on MPS).
            strict: Raise on non-finite input or degenerate pivots.
            pivot_tol: Strict-mode pivot tolerance.
        """
        import torch

        if device is None:
            device = detect_gpu()
            if device is None:
                raise RuntimeError(
                    "No GPU available. Use backend='cpu' instead."
                )

        if device.device_type == 'cuda':
            self.device = torch.device(f'cuda:{device.device_index or 0}')
            self.device_name = device.name
        elif device.device_type == 'mps':
            if use_fp64:
                raise RuntimeError(
                    "MPS does not support float64. Use use_fp64=False "
                    "or use backend='cpu' for double precision."
                )
            self.device = torch.device('mps')
            self.device_name = 'Apple Silicon GPU (MPS)'
        else:
            raise ValueError(
                f"GPULDLTBackend requires GPU device, got {device.device_type}"
            )

        self.use_fp64 = use_fp64
        self.dtype = torch.float64 if use_fp64 else torch.float32
        self.strict = strict
        self.pivot_tol = pivot_tol

    @property
    def name(self) -> str:
        precision = "fp64" if self.use_fp64 else "fp32"
        return f'gpu_ldlt_{precision}'

    def solve(self, design: LDLTDesign) -> Result[LDLTParams]:
        """
        Decompose the design's matrix on the GPU.

        Raises
        ------
        ValidationError
            Complex input, or non-finite input in strict mode.
        SingularMatrixError
            Strict mode, degenerate pivot.
        """
        import torch

        if np.iscomplexobj(design.matrix):
            raise ValidationError(
                "matrix: GPU backend supports real matrices only; use backend='cpu'"
            )
        if self.strict:
            check_finite(design.matrix, "matrix")

        timer = Timer(sync_cuda=self.device.type == 'cuda')
        timer.start()

        with timer.section('data_transfer_to_gpu'):
            matrix_gpu = torch.from_numpy(design.matrix).to(
                device=self.device, dtype=self.dtype
            )

        with timer.section('factorize'):
            buf_gpu = ldlt_factor_gpu(matrix_gpu)

        with timer.section('data_transfer_to_cpu'):
            buf = buf_gpu.cpu().numpy().astype(np.float64)

        with timer.section('unpack'):
            factors = ldlt_unpack(buf)

        if self.strict:
            tol = self.pivot_tol
            if tol is None:
                tol = default_pivot_tolerance(
                    design.matrix, np.dtype(np.float64 if self.use_fp64 else np.float32)
                )
            idx = find_degenerate_pivot(factors.D, tol)
            if idx is not None:
                raise SingularMatrixError(
                    f"matrix: degenerate pivot D[{idx}] = {factors.D[idx]} "
                    f"(tolerance {tol:.3g})",
                    matrix_name="matrix",
                    pivot_index=idx,
                    pivot_value=float(factors.D[idx]),
                    tolerance=tol,
                )

        params = build_params(factors)
        warnings_list = [] if self.strict else pivot_warnings(params.D)

        timer.stop()

        info = {
            'method': 'ldlt',
            'n': design.n,
            'dtype': 'float64' if self.use_fp64 else 'float32',
            'strict': self.strict,
            'symmetric_input': design.is_symmetric,
            'device': self.device_name,
        }
        info.update(pivot_info(params.D))

        return Result(
            params=params,
            info=info,
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
