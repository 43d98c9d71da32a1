"""Calibration of CUSUM detection thresholds."""

import logging
import warnings
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from ..config import config
from ..exceptions import InvalidParameterError, NonConvergenceWarning
from ..utils.validation.parameters import check_in_interval, check_larger_than
from ._asymptotic import make_asymptotic_cusum_threshold
from ._monte_carlo import simulate_cusum_maxima
from ._utils import ALPHA_INTERVAL

logger = logging.getLogger(__name__)

THRESHOLD_METHODS = ["asymptotic", "monte_carlo"]


@dataclass(frozen=True, kw_only=True, eq=False)
class ThresholdCalibration:
    """Result of calibrating a CUSUM threshold.

    Containing:
    - `threshold`: Threshold on the squared standardised statistic.
    - `method`: ``"asymptotic"`` or ``"monte_carlo"``.
    - `n`: Series length the threshold is calibrated for.
    - `alpha`: False positive level.
    - `replicate_maxima`: Simulated squared maxima. None for the asymptotic method.
    - `converged`: False if the Monte Carlo tail estimate rests on fewer than
      ``config.min_tail_replicates`` expected exceedances.
    """

    threshold: float
    method: str
    n: int
    alpha: float
    replicate_maxima: np.ndarray | None = None
    converged: bool = True

    @property
    def n_replicates(self) -> int:
        """Number of Monte Carlo replicates, 0 for the asymptotic method."""
        return 0 if self.replicate_maxima is None else self.replicate_maxima.size


def calibrate_cusum_threshold(
    n: int,
    alpha: float = 0.05,
    method: str = "asymptotic",
    n_replicates: int = 1000,
    seed: int | None = None,
    n_jobs: int = 1,
    should_stop: Callable[[], bool] | None = None,
) -> ThresholdCalibration:
    """Calibrate a threshold for the squared maximum CUSUM statistic.

    Parameters
    ----------
    n : int
        Length of the series.
    alpha : float, optional (default=0.05)
        False positive level in ``(0, 1)``.
    method : {"asymptotic", "monte_carlo"}, optional (default="asymptotic")
        Calibration strategy.

        * ``"asymptotic"``: Gumbel limit, see `make_asymptotic_cusum_threshold`.
          Conservative for finite `n`.
        * ``"monte_carlo"``: Empirical quantile of simulated null maxima, see
          `simulate_cusum_maxima`.

    n_replicates : int, optional (default=1000)
        Number of Monte Carlo replicates. Ignored for the asymptotic method.
    seed : int or None, optional (default=None)
        Seed of the Monte Carlo simulation.
    n_jobs : int, optional (default=1)
        Number of threads used for the Monte Carlo simulation.
    should_stop : callable, optional (default=None)
        Cooperative cancellation check for the Monte Carlo simulation.

    Returns
    -------
    ThresholdCalibration

    Warns
    -----
    NonConvergenceWarning
        If ``n_replicates * alpha`` is below ``config.min_tail_replicates``.
    """
    check_in_interval(ALPHA_INTERVAL, alpha, "alpha")
    if method not in THRESHOLD_METHODS:
        raise InvalidParameterError(
            f"Invalid threshold method '{method}'. Must be one of {THRESHOLD_METHODS}."
        )

    if method == "asymptotic":
        threshold = make_asymptotic_cusum_threshold(n, alpha)
        logger.debug("Asymptotic CUSUM threshold for n=%d: %.4f", n, threshold)
        return ThresholdCalibration(
            threshold=threshold, method=method, n=n, alpha=alpha
        )

    check_larger_than(1, n_replicates, "n_replicates")
    maxima = simulate_cusum_maxima(
        n, n_replicates, seed=seed, n_jobs=n_jobs, should_stop=should_stop
    )
    threshold = float(np.quantile(maxima, 1.0 - alpha))

    expected_exceedances = n_replicates * alpha
    converged = expected_exceedances >= config.min_tail_replicates
    if not converged:
        warnings.warn(
            f"Only {expected_exceedances:.1f} of {n_replicates} replicates are"
            f" expected above the {1 - alpha} quantile. The Monte Carlo threshold"
            " is unreliable; increase n_replicates.",
            NonConvergenceWarning,
            stacklevel=2,
        )

    logger.debug(
        "Monte Carlo CUSUM threshold for n=%d from %d replicates: %.4f",
        n,
        n_replicates,
        threshold,
    )
    return ThresholdCalibration(
        threshold=threshold,
        method=method,
        n=n,
        alpha=alpha,
        replicate_maxima=maxima,
        converged=converged,
    )
