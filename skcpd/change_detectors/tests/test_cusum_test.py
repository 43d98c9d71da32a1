"""Tests for the CUSUM test."""

import numpy as np
import pytest

from skcpd.base import PreprocessedSeries
from skcpd.change_detectors import (
    CUSUMTest,
    estimate_noise_variance,
    run_cusum_test,
)
from skcpd.datasets import generate_piecewise_normal_data
from skcpd.exceptions import InvalidInputError, InvalidParameterError
from skcpd.thresholds import make_monte_carlo_cusum_threshold


def test_run_cusum_test_worked_example():
    result = run_cusum_test([0.5, -0.1, 12.1, 12.4], threshold=10.0)
    np.testing.assert_allclose(result.trace, [6.6106, 12.05, 7.1304], atol=1e-3)
    assert result.changepoint == 2
    assert result.max_cusum == pytest.approx(12.05)
    assert result.statistic == pytest.approx(12.05**2)
    assert result.mean_change == pytest.approx(12.05)
    assert result.changed
    assert result.variance == 1.0


def test_run_cusum_test_matches_direct_formula():
    x = generate_piecewise_normal_data(
        means=[0, 1.5], lengths=[30, 20], seed=3
    ).iloc[:, 0].to_numpy()
    n = x.size
    expected = np.array(
        [
            np.sqrt(tau * (n - tau) / n) * abs(x[:tau].mean() - x[tau:].mean())
            for tau in range(1, n)
        ]
    )
    result = run_cusum_test(x, threshold=1.0, variance=2.0)
    np.testing.assert_allclose(result.trace, expected / np.sqrt(2.0))
    assert result.changepoint == np.argmax(expected) + 1
    assert result.statistic == pytest.approx(np.max(expected) ** 2 / 2.0)


def test_run_cusum_test_no_change():
    x = [1.0, 1.0, 1.0, 1.0, 1.0]
    result = run_cusum_test(x, threshold=1.0)
    assert not result.changed
    assert result.statistic == pytest.approx(0.0)
    assert result.mean_change == pytest.approx(0.0)


def test_run_cusum_test_threshold_is_strict():
    x = [0.0, 2.0]
    statistic = run_cusum_test(x, threshold=1.0).statistic
    assert statistic == pytest.approx(2.0)
    assert not run_cusum_test(x, threshold=statistic).changed


def test_run_cusum_test_uses_series_variance():
    x = [0.5, -0.1, 12.1, 12.4]
    series = PreprocessedSeries.from_data(x, variance=4.0)
    result = run_cusum_test(series, threshold=10.0)
    assert result.variance == 4.0
    assert result.max_cusum == pytest.approx(12.05 / 2.0)


def test_run_cusum_test_trace_is_read_only():
    result = run_cusum_test([0.0, 1.0, 2.0], threshold=1.0)
    with pytest.raises(ValueError):
        result.trace[0] = 1.0


@pytest.mark.parametrize("x", [[], [1.0], [1.0, np.nan, 2.0]])
def test_run_cusum_test_invalid_input(x):
    with pytest.raises(InvalidInputError):
        run_cusum_test(x, threshold=1.0)


@pytest.mark.parametrize("threshold", [-1.0, 0.0, np.inf, None])
def test_run_cusum_test_invalid_threshold(threshold):
    with pytest.raises(InvalidParameterError):
        run_cusum_test([0.0, 1.0, 2.0], threshold=threshold)


def test_estimate_noise_variance():
    x = generate_piecewise_normal_data(
        means=[0, 20, -5], variances=4.0, lengths=[700, 600, 700], seed=8
    )
    assert estimate_noise_variance(x.iloc[:, 0]) == pytest.approx(4.0, rel=0.15)


def test_estimate_noise_variance_constant_series():
    assert estimate_noise_variance(np.ones(10)) > 0.0


def test_null_rejection_rate():
    alpha = 0.1
    n = 100
    threshold = make_monte_carlo_cusum_threshold(
        n, alpha=alpha, n_replicates=2000, seed=10
    )
    rng = np.random.default_rng(11)
    n_rejections = sum(
        run_cusum_test(rng.standard_normal(n), threshold).changed for _ in range(400)
    )
    assert 0.05 <= n_rejections / 400 <= 0.15


def test_cusum_test_detector_calibrates_per_length():
    detector = CUSUMTest(variance=1.0)
    x = generate_piecewise_normal_data(means=[0, 5], lengths=[40, 40], seed=5)
    detector.fit(x)
    assert detector.predict(x)["ilocs"].to_list() == [40]
    assert detector.calibration_.n == 80
    assert detector.calibration_.method == "asymptotic"
    assert detector.result_.threshold == detector.calibration_.threshold

    first_calibration = detector.calibration_
    detector.predict(x)
    assert detector.calibration_ is first_calibration

    detector.predict(x.iloc[:60])
    assert detector.calibration_.n == 60


def test_cusum_test_detector_fixed_threshold():
    detector = CUSUMTest(threshold=1e6)
    x = generate_piecewise_normal_data(means=[0, 5], lengths=[40, 40], seed=5)
    assert detector.fit_predict(x).empty
    assert detector.calibration_ is None
    assert detector.result_.threshold == 1e6


def test_cusum_test_detector_estimates_variance():
    detector = CUSUMTest()
    x = generate_piecewise_normal_data(
        means=[0, 10], variances=9.0, lengths=[300, 300], seed=6
    )
    assert detector.fit_predict(x)["ilocs"].to_list() == [300]
    assert detector.fitted_variance == pytest.approx(9.0, rel=0.25)


def test_cusum_test_detector_monte_carlo():
    detector = CUSUMTest(
        variance=1.0, threshold_method="monte_carlo", n_replicates=500, seed=4
    )
    x = generate_piecewise_normal_data(means=[0, 3], lengths=[50, 50], seed=7)
    assert detector.fit_predict(x)["ilocs"].to_list() == [50]
    assert detector.calibration_.n_replicates == 500


@pytest.mark.parametrize(
    "params",
    [
        {"variance": 0.0},
        {"threshold": -1.0},
        {"threshold": 0.0},
        {"threshold_method": "bootstrap"},
        {"alpha": 0.0},
        {"alpha": 1.0},
        {"n_replicates": 0},
    ],
)
def test_cusum_test_invalid_params(params):
    with pytest.raises(InvalidParameterError):
        CUSUMTest(**params)


def test_cusum_test_detector_short_series():
    x = np.array([0.0, 4.0])
    with pytest.raises(InvalidInputError, match="at least min_length=3 samples"):
        CUSUMTest(variance=1.0).fit_predict(x)

    detector = CUSUMTest(variance=1.0, threshold=1.0)
    assert detector.fit_predict(x)["ilocs"].to_list() == [1]
    assert detector.result_.statistic == pytest.approx(8.0)
