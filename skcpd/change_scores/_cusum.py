"""The CUSUM statistic for a change in the mean on arbitrary intervals."""

import numpy as np

from ..base import BaseIntervalScorer, PreprocessedSeries
from ..utils.numba import njit
from ..utils.validation.parameters import check_variance


@njit
def cusum_score(
    starts: np.ndarray,
    splits: np.ndarray,
    ends: np.ndarray,
    sums: np.ndarray,
) -> np.ndarray:
    """Unstandardised CUSUM of ``X[start:split]`` against ``X[split:end]``.

    ``sqrt(n1 * n2 / (n1 + n2)) * |mean1 - mean2|`` for each interval, computed
    from the prefix sums `sums` of the series (leading 0 included).
    """
    n_before = splits - starts
    n_after = ends - splits
    mean_before = (sums[splits] - sums[starts]) / n_before
    mean_after = (sums[ends] - sums[splits]) / n_after
    weight = np.sqrt(n_before * n_after / (n_before + n_after))
    return weight * np.abs(mean_before - mean_after)


class CUSUM(BaseIntervalScorer):
    """CUSUM change score for a change in the mean.

    For a cut ``[start, split, end]``, the score is the weighted absolute
    difference between the means of ``X[start:split]`` and ``X[split:end]``,
    divided by the noise standard deviation [1]_ [2]_. Over all splits of the
    whole series, the maximum of this score is the CUSUM test statistic.

    Parameters
    ----------
    variance : float, optional (default=None)
        Known noise variance. If ``None``, the variance attached to the fitted
        `PreprocessedSeries` is used, or 1.0 if the series has none.

    References
    ----------
    .. [1] Page, E. S. (1954). Continuous inspection schemes. Biometrika, 41(1/2),
      100-115.

    .. [2] Wang, D., Yu, Y., & Rinaldo, A. (2020). Univariate mean change point
      detection: Penalization, cusum and optimality. Electronic Journal of Statistics,
      14(1) 1917-1961.
    """

    _tags = {
        "task": "change_score",
        "distribution_type": "Gaussian",
    }

    def __init__(self, variance: float | None = None):
        self.variance = variance
        super().__init__()
        check_variance(self.variance)

    @property
    def min_size(self) -> int:
        """Both sides of a split need at least one sample."""
        return 1

    def _fit(self, X: PreprocessedSeries, y=None):
        if self.variance is not None:
            self.variance_ = self.variance
        elif X.variance is not None:
            self.variance_ = X.variance
        else:
            self.variance_ = 1.0
        return self

    def _evaluate(self, cuts: np.ndarray) -> np.ndarray:
        """Standardised CUSUM for each ``[start, split, end]`` row of `cuts`."""
        scores = cusum_score(cuts[:, 0], cuts[:, 1], cuts[:, 2], self._series.sums)
        return scores / np.sqrt(self.variance_)

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
        return [{}, {"variance": 4.0}]
