from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional, Sequence

from multilat.estimation.errors import MultilaterationError, SolveError
from multilat.estimation.levenberg_marquardt import SolverConfig, levenberg_marquardt
from multilat.estimation.model import MultilaterationModel
from multilat.estimation.types import Measurement, Point
from multilat.estimation.validation import validate_measurements

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MultilaterationResult:
    """
    Outcome of one solve. Exactly one of `position` and `error` is set.
    """
    position: Optional[Point]
    error: Optional[SolveError]
    iterations: int = 0
    final_cost: float = float("nan")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Point:
        if self.error is not None:
            raise MultilaterationError(self.error)
        if self.position is None:
            raise RuntimeError("MultilaterationResult has neither position nor error")
        return self.position


def solve(
    measurements: Sequence[Measurement],
    config: Optional[SolverConfig] = None,
) -> MultilaterationResult:
    """
    Estimate the position that best fits all distance measurements.

    Validation runs first; no numeric work is done on invalid input.
    The iteration starts at the anchor centroid.

    The fit is local. A single measurement returns its anchor: the gradient
    vanishes there, so the solver stops at that stationary point with cost
    distance**4 instead of moving onto the circle of radius `distance`.
    """
    measurements = list(measurements)
    error = validate_measurements(measurements)
    if error is not None:
        logger.debug("Rejected measurement set: %s", error.message)
        return MultilaterationResult(position=None, error=error)

    model = MultilaterationModel(measurements)
    lm = levenberg_marquardt(model, model.initial_guess(), config)

    if lm.error is not None:
        logger.debug("Solve failed after %d iterations: %s", lm.iterations, lm.error.message)
        return MultilaterationResult(
            position=None, error=lm.error, iterations=lm.iterations, final_cost=lm.final_cost
        )

    return MultilaterationResult(
        position=Point(tuple(lm.position.tolist())),
        error=None,
        iterations=lm.iterations,
        final_cost=lm.final_cost,
    )


def multilaterate(
    measurements: Sequence[Measurement],
    config: Optional[SolverConfig] = None,
) -> Point:
    """Like solve(), but raises MultilaterationError on failure."""
    return solve(measurements, config).unwrap()
