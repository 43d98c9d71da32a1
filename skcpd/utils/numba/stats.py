"""Numba-optimized functions for calculating various statistics."""

import numpy as np

from . import njit


@njit
def cumsum(x: np.ndarray, init_zero: bool = False) -> np.ndarray:
    """Calculate the cumulative sum of a 1D array.

    Parameters
    ----------
    x : np.ndarray
        1D array.
    init_zero : bool
        Whether to let the first entry be a zero before the summing is started or
        not.

    Returns
    -------
    np.ndarray : Cumulative sums. If init_zero, the output contains one more
        entry compared to the input x.

    """
    n = x.shape[0]
    if init_zero:
        sums = np.zeros(n + 1)
        sums[1:] = np.cumsum(x)
    else:
        sums = np.cumsum(x).astype(np.float64)
    return sums


@njit
def col_cumsum(x: np.ndarray, init_zero: bool = False) -> np.ndarray:
    """Calculate the cumulative sum of each column in a 2D array.

    Parameters
    ----------
    x : np.ndarray
        2D array.
    init_zero : bool
        Whether to let the first row be a row of zeros before the summing is
        started or not.

    Returns
    -------
    np.ndarray : Cumulative sums. If init_zero, the output contains one more
        row compared to the input x.

    """
    n = x.shape[0]
    p = x.shape[1]
    if init_zero:
        sums = np.zeros((n + 1, p))
        start = 1
    else:
        sums = np.zeros((n, p))
        start = 0

    for j in range(p):
        sums[start:, j] = np.cumsum(x[:, j])

    return sums


@njit
def cusum_trace(sums: np.ndarray) -> np.ndarray:
    """Calculate the CUSUM statistic at every split of a full series.

    Single forward sweep over the cumulative sums. Entry ``k`` of the output is the
    statistic for the split after the first ``k + 1`` observations,
    ``sqrt(tau * (n - tau) / n) * |mean(x[:tau]) - mean(x[tau:])|`` with
    ``tau = k + 1``.

    Parameters
    ----------
    sums : np.ndarray
        Cumulative sum of the data, with a zero as the first entry.

    Returns
    -------
    np.ndarray : CUSUM statistics of length ``n - 1``.
    """
    n = sums.shape[0] - 1
    total = sums[n]
    trace = np.zeros(n - 1)
    for tau in range(1, n):
        before_mean = sums[tau] / tau
        after_mean = (total - sums[tau]) / (n - tau)
        trace[tau - 1] = np.sqrt(tau * (n - tau) / n) * np.abs(before_mean - after_mean)
    return trace


@njit(nogil=True)
def cusum_squared_maxima(x: np.ndarray) -> np.ndarray:
    """Calculate the squared maximum CUSUM statistic of each row in a 2D array.

    Parameters
    ----------
    x : np.ndarray
        2D array with one series per row.

    Returns
    -------
    np.ndarray : Squared maximum CUSUM statistic per row.
    """
    n_rows = x.shape[0]
    n = x.shape[1]
    maxima = np.zeros(n_rows)
    for i in range(n_rows):
        total = 0.0
        for j in range(n):
            total += x[i, j]
        partial_sum = 0.0
        max_stat = 0.0
        for tau in range(1, n):
            partial_sum += x[i, tau - 1]
            diff = partial_sum / tau - (total - partial_sum) / (n - tau)
            stat = tau * (n - tau) / n * diff * diff
            if stat > max_stat:
                max_stat = stat
        maxima[i] = max_stat
    return maxima
