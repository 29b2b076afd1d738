from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import numpy as np

from multilat.estimation.errors import SolveError, SolveErrorKind
from multilat.estimation.model import LeastSquaresModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    """
    Levenberg-Marquardt settings.

    Damping bounds must be non-negative and ordered:
      0 <= min_damping <= initial_damping <= max_damping, max_damping > 0
    """
    max_iterations: int = 1000
    initial_damping: float = 1e-3
    min_damping: float = 0.0
    max_damping: float = 1e10
    damping_increase: float = 2.0
    damping_decrease: float = 3.0
    tolerance: float = 1e-10

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if self.min_damping < 0.0:
            raise ValueError("min_damping must be >= 0")
        if self.max_damping <= 0.0:
            raise ValueError("max_damping must be > 0")
        if not (self.min_damping <= self.initial_damping <= self.max_damping):
            raise ValueError("damping bounds must satisfy min_damping <= initial_damping <= max_damping")
        if self.damping_increase <= 1.0 or self.damping_decrease <= 1.0:
            raise ValueError("damping_increase and damping_decrease must be > 1")
        if self.tolerance <= 0.0:
            raise ValueError("tolerance must be > 0")


@dataclass(frozen=True)
class LMResult:
    position: Optional[np.ndarray]   # (D,), None on failure
    converged: bool
    iterations: int
    final_cost: float
    error: Optional[SolveError] = None


def _damped_step(JtJ: np.ndarray, Jtr: np.ndarray, damping: float) -> np.ndarray:
    """
    Solve (J^T J + damping * I) dx = -J^T r by Cholesky factorization.

    Raises np.linalg.LinAlgError when the damped matrix is not positive definite.
    """
    A = JtJ + damping * np.eye(JtJ.shape[0])
    if not (np.all(np.isfinite(A)) and np.all(np.isfinite(Jtr))):
        raise np.linalg.LinAlgError("Non-finite normal equations")
    L = np.linalg.cholesky(A)
    y = np.linalg.solve(L, -Jtr)
    return np.linalg.solve(L.T, y)


def _increase(damping: float, config: SolverConfig) -> float:
    if damping <= 0.0:
        return min(max(config.initial_damping, config.tolerance), config.max_damping)
    return min(damping * config.damping_increase, config.max_damping)


def levenberg_marquardt(
    model: LeastSquaresModel,
    x0: np.ndarray,
    config: Optional[SolverConfig] = None,
) -> LMResult:
    """
    Minimize ||r(x)||^2 with damped Gauss-Newton iterations.

    A step is accepted only if it lowers the cost; the damping factor is then
    decreased. Rejected or unfactorizable steps increase the damping and the
    step is retried. Increase and decrease factors should differ so the
    damping does not cycle between the same two values. Terminates as one of:
      - converged: gradient ||J^T r|| below tolerance * (1 + cost), relative
        cost decrease or step norm below tolerance, or no descent step
        exists even at max_damping (stationary point)
      - SINGULAR_SYSTEM: normal matrix not positive definite at max_damping
      - MAX_ITERATIONS_EXCEEDED

    Convergence is local: any stationary point is accepted, including
    one with nonzero cost.
    """
    cfg = config or SolverConfig()

    x = np.array(x0, dtype=float)
    r = model.residuals(x)
    cost = float(r @ r)
    damping = cfg.initial_damping

    logger.debug("LM start: x0=%s cost=%.6g", x, cost)

    if cost == 0.0:
        return LMResult(position=x, converged=True, iterations=0, final_cost=cost)

    for it in range(1, cfg.max_iterations + 1):
        J = model.jacobian(x)
        JtJ = J.T @ J
        Jtr = J.T @ r

        gradient = float(np.max(np.abs(Jtr)))
        if np.isfinite(cost) and gradient <= cfg.tolerance * (1.0 + cost):
            logger.debug("LM gradient below tolerance after %d iterations: cost=%.6g", it - 1, cost)
            return LMResult(position=x, converged=True, iterations=it - 1, final_cost=cost)

        while True:
            try:
                dx = _damped_step(JtJ, Jtr, damping)
            except np.linalg.LinAlgError:
                if damping >= cfg.max_damping:
                    logger.debug("LM singular at iteration %d (damping=%.3g)", it, damping)
                    return LMResult(
                        position=None,
                        converged=False,
                        iterations=it,
                        final_cost=cost,
                        error=SolveError(
                            SolveErrorKind.SINGULAR_SYSTEM,
                            "Normal equations are singular even at maximum damping",
                        ),
                    )
                damping = _increase(damping, cfg)
                logger.debug("LM unfactorizable step, damping -> %.3g", damping)
                continue

            x_new = x + dx
            r_new = model.residuals(x_new)
            cost_new = float(r_new @ r_new)

            if cost_new < cost:
                break

            if damping >= cfg.max_damping:
                # No descent direction left: x is a stationary point.
                logger.debug("LM stationary at iteration %d: cost=%.6g", it, cost)
                return LMResult(position=x, converged=True, iterations=it, final_cost=cost)
            damping = _increase(damping, cfg)
            logger.debug("LM rejected step (cost %.6g >= %.6g), damping -> %.3g", cost_new, cost, damping)

        decrease = cost - cost_new
        step = float(np.linalg.norm(dx))
        x, r, cost = x_new, r_new, cost_new
        damping = max(damping / cfg.damping_decrease, cfg.min_damping)
        logger.debug("LM iteration %d accepted: cost=%.6g, damping -> %.3g", it, cost, damping)

        if (
            cost == 0.0
            or decrease <= cfg.tolerance * (cost + decrease)
            or step <= cfg.tolerance * (float(np.linalg.norm(x)) + cfg.tolerance)
        ):
            logger.debug("LM converged after %d iterations: cost=%.6g", it, cost)
            return LMResult(position=x, converged=True, iterations=it, final_cost=cost)

    logger.debug("LM hit max_iterations=%d: cost=%.6g", cfg.max_iterations, cost)
    return LMResult(
        position=None,
        converged=False,
        iterations=cfg.max_iterations,
        final_cost=cost,
        error=SolveError(
            SolveErrorKind.MAX_ITERATIONS_EXCEEDED,
            f"Failed to converge within {cfg.max_iterations} iterations",
        ),
    )
