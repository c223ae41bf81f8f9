"""
Bounded root-finding shared by every iterative psychrometric calculation.

All of the "solve for a temperature given a target derived quantity" cases
(wet-bulb from Tdb + W, dry-bulb from RH + Twb) reduce to a monotonic
function on a closed interval, so a single bracketing Brent solver covers
them. The iteration budget is fixed: when it runs out, the last iterate is
returned and a warning is logged.
"""

import logging
from typing import Callable

from scipy.optimize import brentq

from psychrocalc.config import MAX_SOLVER_ITERATIONS, TEMPERATURE_TOLERANCE

logger = logging.getLogger(__name__)


def find_root(
    objective: Callable[[float], float],
    lower: float,
    upper: float,
    xtol: float = TEMPERATURE_TOLERANCE,
    max_iter: int = MAX_SOLVER_ITERATIONS,
) -> tuple[float, int]:
    """
    Find x in [lower, upper] such that objective(x) == 0.

    Args:
        objective: Continuous function whose sign differs at the two bounds
        lower: Lower bound of the search interval
        upper: Upper bound of the search interval
        xtol: Absolute tolerance on x
        max_iter: Iteration budget

    Returns:
        (root, iterations); root is the last estimate if the budget ran out

    Raises:
        ValueError: If the objective does not change sign over the interval
    """
    f_lower = objective(lower)
    if f_lower == 0.0:
        return lower, 0
    f_upper = objective(upper)
    if f_upper == 0.0:
        return upper, 0

    if f_lower * f_upper > 0.0:
        raise ValueError(
            f"Root is not bracketed on [{lower:.4f}, {upper:.4f}] "
            f"(f={f_lower:.6g}, {f_upper:.6g})"
        )

    root, info = brentq(
        objective,
        lower,
        upper,
        xtol=xtol,
        maxiter=max_iter,
        full_output=True,
        disp=False,
    )

    if not info.converged:
        logger.warning(
            "Root solver stopped after %d iterations on [%.4f, %.4f]; "
            "returning last estimate %.6f",
            info.iterations,
            lower,
            upper,
            root,
        )

    return root, info.iterations
