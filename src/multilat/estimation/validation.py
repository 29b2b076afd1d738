from __future__ import annotations

from typing import Optional, Sequence

from multilat.estimation.errors import SolveError, SolveErrorKind
from multilat.estimation.types import Measurement


def validate_measurements(measurements: Sequence[Measurement]) -> Optional[SolveError]:
    """
    Check that all anchors share one dimension D >= 1.

    Returns None when the set is usable, otherwise the validation error.
    An empty set has no dimension and is reported as ZERO_DIMENSION.
    """
    dimensions = {m.anchor.dimension for m in measurements}

    if not dimensions:
        return SolveError(
            SolveErrorKind.ZERO_DIMENSION,
            "At least one measurement is required to derive a dimension",
        )
    if len(dimensions) > 1:
        return SolveError(
            SolveErrorKind.DIMENSION_MISMATCH,
            f"All points must have the same dimensions, got {sorted(dimensions)}",
        )
    if dimensions.pop() < 1:
        return SolveError(
            SolveErrorKind.ZERO_DIMENSION,
            "Points must contain at least one dimension",
        )
    return None
