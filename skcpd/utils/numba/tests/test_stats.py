import numpy as np

from skcpd.utils.numba.stats import (
    col_cumsum,
    cumsum,
    cusum_squared_maxima,
    cusum_trace,
)


def test_cumsum():
    x = np.array([1.0, 2.0, 3.0])
    np.testing.assert_allclose(cumsum(x), [1.0, 3.0, 6.0])
    np.testing.assert_allclose(cumsum(x, init_zero=True), [0.0, 1.0, 3.0, 6.0])


def test_col_cumsum():
    x = np.array([[1.0, 2.0], [3.0, 4.0]])
    np.testing.assert_allclose(col_cumsum(x), [[1.0, 2.0], [4.0, 6.0]])
    np.testing.assert_allclose(
        col_cumsum(x, init_zero=True), [[0.0, 0.0], [1.0, 2.0], [4.0, 6.0]]
    )


def test_cusum_trace():
    x = np.random.default_rng(1).normal(size=12)
    n = x.size
    trace = cusum_trace(cumsum(x, init_zero=True))
    expected = [
        np.sqrt(tau * (n - tau) / n) * abs(x[:tau].mean() - x[tau:].mean())
        for tau in range(1, n)
    ]
    np.testing.assert_allclose(trace, expected)


def test_cusum_squared_maxima_matches_trace():
    x = np.random.default_rng(2).normal(size=(4, 15))
    maxima = cusum_squared_maxima(x)
    expected = [np.max(cusum_trace(cumsum(row, init_zero=True))) ** 2 for row in x]
    np.testing.assert_allclose(maxima, expected)
