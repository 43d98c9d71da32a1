"""Gaussian cost for a change in the variance with a known mean."""

import numpy as np

from ..base import PreprocessedSeries
from ..config import config
from ..utils.numba import njit
from ..utils.numba.general import truncate_below
from ._utils import check_mean
from .base import BaseCost


@njit
def centered_var_from_sums(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    mean: float,
) -> np.ndarray:
    """Calculate the variance around a known mean for each segment."""
    partial_sums = sums[ends] - sums[starts]
    partial_sums2 = sums2[ends] - sums2[starts]
    n = ends - starts
    return (partial_sums2 - 2.0 * mean * partial_sums) / n + mean**2


@njit
def gaussian_var_cost_optim(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    mean: float,
    var_floor: float,
) -> np.ndarray:
    """Calculate the Gaussian cost for an optimal variance for each segment.

    Parameters
    ----------
    starts : np.ndarray
        Start indices of the segments.
    ends : np.ndarray
        End indices of the segments.
    sums : np.ndarray
        Cumulative sum of the input data, with a 0-entry first.
    sums2 : np.ndarray
        Cumulative sum of the squared input data, with a 0-entry first.
    mean : float
        Known mean of the data.
    var_floor : float
        Smallest variance estimate allowed.

    Returns
    -------
    costs : np.ndarray
        A 1D array of costs, ``n * log(var) + n``. One entry for each segment.
    """
    n = ends - starts
    var = centered_var_from_sums(starts, ends, sums, sums2, mean)
    var = truncate_below(var, var_floor)
    return n * np.log(var) + n


class GaussianVarCost(BaseCost):
    """Gaussian cost for a change in the variance around a known mean.

    The cost of a segment of length ``n`` is ``n * log(var) + n``, where ``var`` is
    the maximum likelihood estimate of the variance around the known mean. Variance
    estimates below ``config.variance_floor`` are floored, and the affected segments
    are reported by `is_degenerate`.

    Parameters
    ----------
    mean : float, optional (default=0.0)
        Known mean of the data.
    """

    _tags = {
        "distribution_type": "Gaussian",
    }

    def __init__(self, mean: float = 0.0):
        self.mean = mean
        super().__init__()
        check_mean(self.mean)

    def _fit(self, X: PreprocessedSeries, y=None):
        self._var_floor = config.variance_floor
        return self

    def _segment_vars(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        series = self._series
        centred_mean = float(self.mean) - series.offset
        return centered_var_from_sums(
            starts, ends, series.sums, series.sums2, centred_mean
        )

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        series = self._series
        return gaussian_var_cost_optim(
            starts,
            ends,
            series.sums,
            series.sums2,
            float(self.mean) - series.offset,
            self._var_floor,
        )

    @property
    def param_names(self) -> list[str]:
        """Names of the parameters returned by `evaluate_params`."""
        return ["variance"]

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        var = truncate_below(self._segment_vars(starts, ends), self._var_floor)
        return var.reshape(-1, 1)

    def _is_degenerate(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        return self._segment_vars(starts, ends) <= self._var_floor

    def get_model_size(self, p: int) -> int:
        """Get the number of parameters in the cost function."""
        return p

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator."""
        params = [
            {"mean": 0.0},
            {"mean": 1.0},
        ]
        return params
