"""L2 cost for a change in the mean."""

import numpy as np

from ..base import PreprocessedSeries
from ..utils.numba import njit
from ..utils.validation.parameters import check_variance
from ._utils import check_mean
from .base import BaseCost


@njit
def residual_sum_of_squares(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
) -> np.ndarray:
    """``Q - S**2 / len`` on each segment, from prefix sums with a leading 0."""
    segment_sums = sums[ends] - sums[starts]
    segment_sums2 = sums2[ends] - sums2[starts]
    return segment_sums2 - segment_sums**2 / (ends - starts)


@njit
def sum_of_squares_around(
    starts: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
    sums2: np.ndarray,
    mean: float,
) -> np.ndarray:
    """``sum((x - mean)**2)`` on each segment, for a fixed `mean`."""
    segment_sums = sums[ends] - sums[starts]
    segment_sums2 = sums2[ends] - sums2[starts]
    return segment_sums2 - 2.0 * mean * segment_sums + (ends - starts) * mean**2


class L2Cost(BaseCost):
    """L2 cost of a constant mean with known noise variance.

    The cost of a segment is the residual sum of squares around the segment mean,
    scaled by the noise variance, ``sum((x - mean(x))**2) / variance``. This equals
    twice the negative Gaussian log-likelihood up to a constant that does not depend
    on the segmentation.

    Parameters
    ----------
    param : float, optional (default=None)
        Fixed mean. If ``None``, the mean of each segment is used.
    variance : float, optional (default=None)
        Known noise variance. If ``None``, the variance attached to the fitted
        `PreprocessedSeries` is used, or 1.0 if the series has none.

    Examples
    --------
    >>> import numpy as np
    >>> from skcpd.costs import L2Cost
    >>> cost = L2Cost().fit(np.array([0.5, -0.1, 12.1, 12.4]))
    >>> np.round(cost.evaluate(np.array([[0, 2], [2, 4]])), 3)
    array([0.18 , 0.045])
    """

    _tags = {
        "distribution_type": "Gaussian",
        "supports_fixed_param": True,
    }

    def __init__(self, param: float | None = None, variance: float | None = None):
        self.variance = variance
        super().__init__(param)
        check_variance(self.variance)

    def _check_fixed_param(self, param: float, X: PreprocessedSeries) -> float:
        return check_mean(param)

    def _fit(self, X: PreprocessedSeries, y=None):
        self._mean = self._check_param(self.param, X)
        if self.variance is not None:
            self.variance_ = self.variance
        elif X.variance is not None:
            self.variance_ = X.variance
        else:
            self.variance_ = 1.0
        return self

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        rss = residual_sum_of_squares(
            starts, ends, self._series.sums, self._series.sums2
        )
        return rss / self.variance_

    def _evaluate_fixed_param(self, starts, ends):
        ss = sum_of_squares_around(
            starts,
            ends,
            self._series.sums,
            self._series.sums2,
            self._mean - self._series.offset,
        )
        return ss / self.variance_

    @property
    def param_names(self) -> list[str]:
        return ["mean"]

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        if self._mean is not None:
            return np.full((starts.size, 1), self._mean)
        return self._series.segment_means(starts, ends).reshape(-1, 1)

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator.

        Parameters
        ----------
        parameter_set : str, default="default"
            Name of the set of test parameters to return, for use in tests.

        Returns
        -------
        params : list of dict
            Parameters to create testing instances of the class.
        """
        return [
            {"param": None},
            {"param": 0.0, "variance": 2.0},
        ]
