"""Gaussian cost for a change in the mean and variance."""

import numpy as np

from ..base import PreprocessedSeries
from ..config import config
from ..exceptions import InvalidParameterError
from ..utils.numba import njit
from ..utils.numba.general import truncate_below
from ._utils import check_mean, check_var
from .base import BaseCost


@njit
def var_from_sums(
    starts: np.ndarray, ends: np.ndarray, sums: np.ndarray, sums2: np.ndarray
) -> np.ndarray:
    """Calculate the maximum likelihood variance estimate of each segment."""
    n = ends - starts
    partial_sums = sums[ends] - sums[starts]
    partial_sums2 = sums2[ends] - sums2[starts]
    return partial_sums2 / n - (partial_sums / n) ** 2


@njit
def gaussian_cost_optim(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    var_floor: float,
) -> np.ndarray:
    """Calculate the Gaussian log likelihood cost for each segment.

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
    var_floor : float
        Smallest variance estimate allowed.

    Returns
    -------
    costs : np.ndarray
        A 1D array of costs. One entry for each segment.
    """
    n = ends - starts
    var = truncate_below(var_from_sums(starts, ends, sums, sums2), var_floor)
    log_likelihood = -n * np.log(2 * np.pi * var) - n
    return -log_likelihood


@njit
def gaussian_cost_fixed(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    mean: float,
    var: float,
) -> np.ndarray:
    """Calculate the Gaussian log likelihood cost for a fixed mean and variance."""
    n = ends - starts
    partial_sums = sums[ends] - sums[starts]
    partial_sums2 = sums2[ends] - sums2[starts]
    squared_residuals = partial_sums2 - 2 * mean * partial_sums + n * mean**2
    log_likelihood = -n * np.log(2 * np.pi * var) - squared_residuals / var
    return -log_likelihood


class GaussianCost(BaseCost):
    """Gaussian log likelihood cost for a change in the mean and variance.

    The cost of a segment of length ``n`` with maximum likelihood variance ``var``
    is ``n * log(2 * pi * var) + n``. Variance estimates below
    ``config.variance_floor`` are floored, and the affected segments are reported by
    `is_degenerate`.

    Parameters
    ----------
    param : 2-tuple of float, optional (default=None)
        Fixed mean and variance for the cost calculation. If ``None``, the maximum
        likelihood estimates are used.
    """

    _tags = {
        "distribution_type": "Gaussian",
        "supports_fixed_param": True,
    }

    def __init__(self, param: tuple[float, float] | None = None):
        super().__init__(param)

    def _check_fixed_param(
        self, param: tuple[float, float], X: PreprocessedSeries
    ) -> tuple[float, float]:
        if not isinstance(param, (tuple, list)) or len(param) != 2:
            raise InvalidParameterError(
                f"Fixed GaussianCost parameters must be a (mean, variance) pair."
                f" Got param={param}."
            )
        mean, var = param
        return check_mean(mean), check_var(var)

    def _fit(self, X: PreprocessedSeries, y=None):
        self._param = self._check_param(self.param, X)
        self._var_floor = config.variance_floor
        return self

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        series = self._series
        return gaussian_cost_optim(
            starts, ends, series.sums, series.sums2, self._var_floor
        )

    def _evaluate_fixed_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        series = self._series
        mean, var = self._param
        return gaussian_cost_fixed(
            starts, ends, series.sums, series.sums2, mean - series.offset, var
        )

    @property
    def min_size(self) -> int:
        """Minimum size of the interval to evaluate."""
        return 2

    def get_model_size(self, p: int) -> int:
        """Get the number of parameters in the cost function.

        Parameters
        ----------
        p : int
            Number of variables in the data.
        """
        return 2 * p

    @property
    def param_names(self) -> list[str]:
        """Names of the parameters returned by `evaluate_params`."""
        return ["mean", "variance"]

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        if self._param is not None:
            return np.tile(np.array(self._param), (starts.size, 1))
        series = self._series
        means = series.segment_means(starts, ends)
        var = var_from_sums(starts, ends, series.sums, series.sums2)
        var = truncate_below(var, self._var_floor)
        return np.column_stack((means, var))

    def _is_degenerate(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        if self._param is not None:
            return np.zeros(starts.size, dtype=bool)
        series = self._series
        var = var_from_sums(starts, ends, series.sums, series.sums2)
        return var <= self._var_floor

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator.

        Parameters
        ----------
        parameter_set : str, default="default"
            Name of the set of test parameters to return, for use in tests. If no
            special parameters are defined for a value, will return `"default"` set.

        Returns
        -------
        params : dict or list of dict, default = {}
            Parameters to create testing instances of the class.
        """
        params = [
            {"param": None},
            {"param": (0.0, 1.0)},
        ]
        return params
