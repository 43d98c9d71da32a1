"""Immutable cache of sufficient statistics for a univariate series."""

__all__ = ["PreprocessedSeries"]

from dataclasses import dataclass

import numpy as np
import pandas as pd
import scipy.stats
from numpy.typing import ArrayLike

from ..utils.numba.stats import cumsum
from ..utils.validation.data import check_data
from ..utils.validation.parameters import check_variance


def _read_only(x: np.ndarray) -> np.ndarray:
    x = np.ascontiguousarray(x)
    x.setflags(write=False)
    return x


@dataclass(frozen=True, kw_only=True, eq=False)
class PreprocessedSeries:
    """Series of observations with cached cumulative statistics.

    Built once per series with `from_data` and shared by all costs, scores and
    detectors that operate on it. All cumulative arrays have ``n + 1`` entries
    with a leading zero, so that the statistic of the half-open interval
    ``[start, end)`` is ``sums[end] - sums[start]``. The time index of observation
    ``i`` is ``i``. All arrays are read-only.

    The cumulative sums involving the observations are taken over the centred
    observations ``values - offset``, where `offset` is the mean of the series.
    Costs that take a fixed mean must subtract `offset` from it.

    Attributes
    ----------
    values : np.ndarray
        The observations, shape ``(n,)``.
    sums : np.ndarray
        Cumulative sums of the centred observations.
    sums2 : np.ndarray
        Cumulative sums of the squared centred observations.
    time_sums : np.ndarray
        Cumulative sums of the time index.
    time_sums2 : np.ndarray
        Cumulative sums of the squared time index.
    time_value_sums : np.ndarray
        Cumulative sums of the time index times the centred observations.
    sorted_values : np.ndarray
        The observations sorted in increasing order.
    ranks : np.ndarray
        Zero-based ordinal ranks, ``sorted_values[ranks[i]] == values[i]``.
    offset : float
        Mean of the observations, subtracted before accumulating.
    variance : float or None
        Known noise variance of the series, if any.
    index : pd.Index
        Index of the input data.
    """

    values: np.ndarray
    sums: np.ndarray
    sums2: np.ndarray
    time_sums: np.ndarray
    time_sums2: np.ndarray
    time_value_sums: np.ndarray
    sorted_values: np.ndarray
    ranks: np.ndarray
    offset: float = 0.0
    variance: float | None = None
    index: pd.Index | None = None

    @classmethod
    def from_data(
        cls,
        X: pd.DataFrame | pd.Series | ArrayLike,
        variance: float | None = None,
    ) -> "PreprocessedSeries":
        """Validate a series and compute its cached statistics.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame, np.ndarray or list
            Univariate series with at least two finite observations.
        variance : float, optional (default=None)
            Known noise variance. Must be positive if given.

        Returns
        -------
        PreprocessedSeries
        """
        X = check_data(X, min_length=2, min_length_name="2")
        variance = check_variance(variance)

        values = X.iloc[:, 0].to_numpy(dtype=np.float64, copy=True)
        offset = float(np.mean(values))
        centred = values - offset
        times = np.arange(values.size, dtype=np.float64)
        order = np.argsort(values, kind="stable")
        ranks = scipy.stats.rankdata(values, method="ordinal").astype(np.int64) - 1

        return cls(
            values=_read_only(values),
            sums=_read_only(cumsum(centred, init_zero=True)),
            sums2=_read_only(cumsum(centred**2, init_zero=True)),
            time_sums=_read_only(cumsum(times, init_zero=True)),
            time_sums2=_read_only(cumsum(times**2, init_zero=True)),
            time_value_sums=_read_only(cumsum(times * centred, init_zero=True)),
            sorted_values=_read_only(values[order]),
            ranks=_read_only(ranks),
            offset=offset,
            variance=variance,
            index=X.index,
        )

    @property
    def n_samples(self) -> int:
        """Number of observations in the series."""
        return self.values.shape[0]

    def __len__(self) -> int:
        return self.n_samples

    def segment_means(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        """Means of the half-open intervals ``[starts[i], ends[i])``."""
        centred_means = (self.sums[ends] - self.sums[starts]) / (ends - starts)
        return centred_means + self.offset
