"""
Tolerance tiers for numerical validation.

Defines precision expectations for the different compute paths:
- CPU FP64 (reference)
- CPU FP32 / GPU FP32: relaxed for single-precision arithmetic
- GPU FP64: same as CPU reference

Used by the test suite only, to compare results across compute paths.
CPU_FP32 applies to a Cholesky engine running in float32.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# CPU reference in double precision
CPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='cpu_fp64',
    description='CPU double precision reference',
)

# Double precision on an ill-conditioned matrix (cond > 1e6)
CPU_FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='cpu_fp64_ill_conditioned',
    description='CPU double precision, ill-conditioned (cond > 1e6)',
)

# Engine running with dtype=float32
CPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='cpu_fp32',
    description='CPU single precision',
)

# GPU with FP64 (CUDA only)
GPU_FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='gpu_fp64',
    description='GPU double precision, matches CPU reference',
)

# GPU with FP32 (default; the only option on MPS)
GPU_FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='gpu_fp32',
    description='GPU single precision',
)


def select_tolerance(
    backend_name: str,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select the tolerance tier for a backend name (see LDLTSolution.backend_name)."""
    if 'gpu' in backend_name:
        if 'fp64' in backend_name:
            return GPU_FP64
        return GPU_FP32
    if is_ill_conditioned:
        return CPU_FP64_ILL_CONDITIONED
    return CPU_FP64
