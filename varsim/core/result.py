"""
Generic result container for varsim computations.

The Result class is the envelope every simulation level returns. Domain
payloads (simulation p-values, sweep points) go in `params`; metadata,
timing and non-fatal warnings travel alongside.

Design decisions:
    - Generic over parameter payload P
    - info dict for flexible metadata (config, seed entropy, counts)
    - timing is optional
    - Immutable (frozen=True); results are never updated in place
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions that produced a result."""
    import numpy
    import scipy

    from varsim import __version__

    return {
        'varsim_version': __version__,
        'numpy_version': numpy.__version__,
        'scipy_version': scipy.__version__,
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (p-value arrays, sweep points, ...)
        info: Structured metadata (distribution, n, R, seed entropy)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Versions of varsim, numpy and scipy

    Examples:
        >>> Result(
        ...     params=SimulationParams(...),
        ...     info={'distribution': 'normal', 'n': (100, 100), 'R': 500},
        ...     timing={'total_seconds': 0.4, 'trials': 0.39},
        ...     backend_name='cpu_sequential'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
