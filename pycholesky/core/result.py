"""
Generic result container for pycholesky computations.

Every backend returns its factors inside the same envelope, so timing,
diagnostics and warnings are reported uniformly regardless of the
device that produced them.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, size, pivot statistics)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) for reproducibility
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for a decomposition.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Factors and derived quantities
        info: Structured metadata (method, size, pivot statistics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=LDLTParams(L=L, D=D, ...),
        ...     info={'method': 'ldlt', 'n': 3, 'strict': False},
        ...     timing={'total_seconds': 0.001, 'factorize': 0.0008},
        ...     backend_name='cpu_ldlt'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
