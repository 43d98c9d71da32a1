"""Linear trend cost function.

This module contains the LinearTrendCost class, which is a cost function for
change point detection based on the squared error between data points
and a best fit linear trend line within each interval.
"""

import numpy as np

from ..base import PreprocessedSeries
from ..utils.numba import njit
from ..utils.validation.parameters import check_variance
from .base import BaseCost


@njit
def centered_trend_sums(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    time_sums: np.ndarray,
    time_sums2: np.ndarray,
    time_value_sums: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Calculate centered second moments of time and values for each segment.

    The time index is shifted to start at zero in each segment before centering, so
    that the cumulative time sums stay exact integers for long series.

    Returns
    -------
    tuple
        ``(n, mean_t, t_var, ty_cov, y_var)`` where ``t_var``, ``ty_cov`` and
        ``y_var`` are sums of centered squares and cross-products.
    """
    n = (ends - starts).astype(np.float64)
    shift = starts.astype(np.float64)
    sum_y = sums[ends] - sums[starts]
    sum_y2 = sums2[ends] - sums2[starts]
    sum_t = time_sums[ends] - time_sums[starts] - shift * n
    sum_t2 = (
        time_sums2[ends]
        - time_sums2[starts]
        - 2.0 * shift * (time_sums[ends] - time_sums[starts])
        + shift**2 * n
    )
    sum_ty = time_value_sums[ends] - time_value_sums[starts] - shift * sum_y

    t_var = sum_t2 - sum_t**2 / n
    ty_cov = sum_ty - sum_t * sum_y / n
    y_var = sum_y2 - sum_y**2 / n
    mean_t = shift + sum_t / n
    return n, mean_t, t_var, ty_cov, y_var


@njit
def linear_trend_cost(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    time_sums: np.ndarray,
    time_sums2: np.ndarray,
    time_value_sums: np.ndarray,
) -> np.ndarray:
    """Calculate the residual sum of squares of the best fit line of each segment.

    Returns
    -------
    costs : np.ndarray
        A 1D array of residual sums of squares. One entry for each segment.
    """
    _, _, t_var, ty_cov, y_var = centered_trend_sums(
        starts, ends, sums, sums2, time_sums, time_sums2, time_value_sums
    )
    rss = y_var - ty_cov**2 / t_var
    return np.where(rss < 0.0, 0.0, rss)


class LinearTrendCost(BaseCost):
    """Linear trend cost function.

    This cost function calculates the sum of squared errors between data points
    and a best fit linear trend line within each interval, scaled by the known noise
    variance. The trend is fitted in the global time index ``0, ..., n - 1`` from
    cumulative sums, so each evaluation costs the same regardless of the interval
    length.

    Parameters
    ----------
    variance : float, optional (default=None)
        Known noise variance. If ``None``, the variance attached to the fitted
        `PreprocessedSeries` is used, or 1.0 if the series has none.
    """

    _tags = {
        "distribution_type": "Gaussian",
    }

    def __init__(self, variance: float | None = None):
        self.variance = variance
        super().__init__()
        check_variance(self.variance)

    def _fit(self, X: PreprocessedSeries, y=None):
        if self.variance is not None:
            self.variance_ = self.variance
        elif X.variance is not None:
            self.variance_ = X.variance
        else:
            self.variance_ = 1.0
        return self

    def _trend_sums(self, starts: np.ndarray, ends: np.ndarray):
        series = self._series
        return (
            starts,
            ends,
            series.sums,
            series.sums2,
            series.time_sums,
            series.time_sums2,
            series.time_value_sums,
        )

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        rss = linear_trend_cost(*self._trend_sums(starts, ends))
        return rss / self.variance_

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
        return ["intercept", "slope"]

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        n, mean_t, t_var, ty_cov, _ = centered_trend_sums(
            *self._trend_sums(starts, ends)
        )
        mean_y = self._series.segment_means(starts, ends)
        slopes = ty_cov / t_var
        intercepts = mean_y - slopes * mean_t
        return np.column_stack((intercepts, slopes))

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator."""
        params = [
            {"variance": None},
            {"variance": 0.5},
        ]
        return params
