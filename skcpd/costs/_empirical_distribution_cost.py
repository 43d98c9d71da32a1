"""Nonparametric cost based on the empirical distribution function."""

import numpy as np

from ..base import PreprocessedSeries
from ..config import config
from ..utils.numba import njit
from ..utils.numba.general import clip_probabilities
from ..utils.numba.stats import col_cumsum
from ..utils.validation.parameters import check_larger_than
from .base import BaseCost


def make_edf_quantile_points(
    sorted_values: np.ndarray, n_quantiles: int
) -> tuple[np.ndarray, np.ndarray]:
    """Compute the quantile grid of the empirical distribution cost.

    The grid probabilities are logistically spaced, concentrating points in the
    tails of the distribution [1]_. The quantile points are interpolated from the
    sorted observations.

    Parameters
    ----------
    sorted_values : np.ndarray
        Observations sorted in increasing order, shape (n_samples,).
    n_quantiles : int
        Number of quantile points in the grid.

    Returns
    -------
    quantile_points : np.ndarray
        Quantile points, shape (n_quantiles,).
    quantile_probs : np.ndarray
        Probabilities of the quantile points, shape (n_quantiles,).
    """
    n_samples = sorted_values.shape[0]

    integrated_edf_scaling = -np.log(2 * n_samples - 1)
    quantiles_range = np.arange(1, n_quantiles + 1)
    quantile_probs = 1.0 / (
        1.0
        + np.exp(integrated_edf_scaling * ((2 * quantiles_range - 1) / n_quantiles - 1))
    )
    positions = quantile_probs * (n_samples - 1)
    quantile_points = np.interp(positions, np.arange(n_samples), sorted_values)
    return quantile_points, quantile_probs


def make_cumulative_edf_cache(
    ranks: np.ndarray, sorted_values: np.ndarray, quantile_points: np.ndarray
) -> np.ndarray:
    """Create a cache of cumulative empirical distribution function counts.

    Observation ``i`` contributes 1 to quantile point ``q`` if it is below ``q`` and
    0.5 if it equals ``q``. Comparisons are done on the ranks of the observations.

    Parameters
    ----------
    ranks : np.ndarray
        Zero-based ordinal ranks of the observations, shape (n_samples,).
    sorted_values : np.ndarray
        Observations sorted in increasing order, shape (n_samples,).
    quantile_points : np.ndarray
        Quantile points, shape (n_quantiles,).

    Returns
    -------
    np.ndarray
        Cumulative counts with a row of zeros first, shape (n_samples + 1,
        n_quantiles).
    """
    below = np.searchsorted(sorted_values, quantile_points, side="left")
    below_or_equal = np.searchsorted(sorted_values, quantile_points, side="right")
    ranks = ranks[:, None]
    counts = (ranks < below[None, :]).astype(np.float64)
    counts += 0.5 * ((ranks >= below[None, :]) & (ranks < below_or_equal[None, :]))
    return col_cumsum(counts, init_zero=True)


@njit
def segment_edfs(
    cumulative_edf: np.ndarray, starts: np.ndarray, ends: np.ndarray
) -> np.ndarray:
    """Evaluate the empirical distribution function of each segment on the grid."""
    n_segments = starts.shape[0]
    n_quantiles = cumulative_edf.shape[1]
    edfs = np.zeros((n_segments, n_quantiles))
    for i in range(n_segments):
        edfs[i, :] = (cumulative_edf[ends[i], :] - cumulative_edf[starts[i], :]) / (
            ends[i] - starts[i]
        )
    return edfs


@njit
def empirical_distribution_cost(
    cumulative_edf: np.ndarray,
    starts: np.ndarray,
    ends: np.ndarray,
    probability_floor: float,
) -> np.ndarray:
    """Compute the empirical distribution cost of each segment.

    Parameters
    ----------
    cumulative_edf : np.ndarray
        Cumulative EDF counts, shape (n_samples + 1, n_quantiles).
    starts : np.ndarray
        Start indices of segments, shape (n_segments,).
    ends : np.ndarray
        End indices of segments, shape (n_segments,).
    probability_floor : float
        EDF values are clipped to ``[probability_floor, 1 - probability_floor]``.

    Returns
    -------
    np.ndarray
        Costs ``-n * sum(F * log(F) + (1 - F) * log(1 - F))``, shape (n_segments,).
    """
    edfs = clip_probabilities(
        segment_edfs(cumulative_edf, starts, ends), probability_floor
    )
    costs = np.zeros(starts.shape[0])
    for i in range(starts.shape[0]):
        segment_ll = 0.0
        for edf in edfs[i, :]:
            segment_ll += edf * np.log(edf) + (1.0 - edf) * np.log(1.0 - edf)
        costs[i] = -(ends[i] - starts[i]) * segment_ll
    return costs


class EmpiricalDistributionCost(BaseCost):
    """Empirical distribution cost.

    Nonparametric cost based on the empirical distribution function (EDF) of each
    segment, evaluated on a fixed grid of quantile points of the full series [1]_.
    The cost of a segment of length ``n`` is::

        -n * sum_q [F(q) * log(F(q)) + (1 - F(q)) * log(1 - F(q))]

    where ``F`` is the segment EDF, with ties to a grid point counting one half.
    EDF values are clipped away from 0 and 1 by ``config.probability_floor``.
    Segments where every EDF value is clipped are reported by `is_degenerate`.

    Parameters
    ----------
    n_quantiles : int or None, optional (default=None)
        Number of quantile points in the grid. If None, it is set to
        ``ceil(4 * log(n_samples))`` during fitting.

    References
    ----------
    .. [1] Haynes, K., Fearnhead, P. & Eckley, I.A. A computationally efficient
       nonparametric approach for changepoint detection. Stat Comput 27, 1293-1305
       (2017).
    """

    _tags = {
        "distribution_type": "None",
    }

    def __init__(self, n_quantiles: int | None = None):
        self.n_quantiles = n_quantiles
        super().__init__()

        check_larger_than(3, self.n_quantiles, "n_quantiles", allow_none=True)

    def _fit(self, X: PreprocessedSeries, y=None):
        """Fit the cost.

        Builds the quantile grid and the cumulative EDF cache.

        Parameters
        ----------
        X : PreprocessedSeries
            Data to evaluate.
        y : None, optional
            Ignored. Included for API consistency by convention.

        Returns
        -------
        self : EmpiricalDistributionCost
            Fitted cost instance.
        """
        if self.n_quantiles is None:
            self.n_quantiles_ = int(np.ceil(4 * np.log(X.n_samples)))
        else:
            self.n_quantiles_ = self.n_quantiles

        self.quantile_points_, self.quantile_probs_ = make_edf_quantile_points(
            X.sorted_values, self.n_quantiles_
        )
        self._edf_cache = make_cumulative_edf_cache(
            X.ranks, X.sorted_values, self.quantile_points_
        )
        self._probability_floor = config.probability_floor
        return self

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        return empirical_distribution_cost(
            self._edf_cache, starts, ends, self._probability_floor
        )

    @property
    def param_names(self) -> list[str]:
        """Names of the parameters returned by `evaluate_params`."""
        self.check_is_fitted()
        return [f"edf_{k}" for k in range(self.n_quantiles_)]

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        return segment_edfs(self._edf_cache, starts, ends)

    def _is_degenerate(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        edfs = segment_edfs(self._edf_cache, starts, ends)
        floor = self._probability_floor
        clipped = (edfs <= floor) | (edfs >= 1.0 - floor)
        return np.all(clipped, axis=1)

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator."""
        params = [
            {"n_quantiles": None},
            {"n_quantiles": 5},
        ]
        return params
