"""
Core protocols for pycholesky.

Structural interface every decomposition backend satisfies. Protocol
(structural typing) rather than ABC, so backends need not inherit from
anything to be accepted by the solvers.
"""

from typing import Protocol, TypeVar, runtime_checkable

P = TypeVar('P')  # Parameter payload type
D = TypeVar('D')  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    Each backend takes a validated design and produces a parameter
    payload inside a Result. The backend handles all hardware-specific
    computation (CPU/GPU, precision).

    Backends are stateless between calls; all configuration is passed at
    construction time or carried by the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}[_{precision}]'
        Examples: 'cpu_ldlt', 'gpu_ldlt_fp32'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the decomposition.

        Args:
            design: Validated input container

        Returns:
            Result envelope containing parameter payload and metadata

        Raises:
            NumericalError: If strict checks reject a pivot
            ValidationError: If design is invalid for this backend
        """
        ...
