"""Tests of the cost values against direct likelihood formulas."""

import numpy as np
import pytest

from skcpd.base import PreprocessedSeries
from skcpd.config import config
from skcpd.costs import (
    COST_FAMILIES,
    EmpiricalDistributionCost,
    GaussianCost,
    GaussianVarCost,
    L2Cost,
    LinearTrendCost,
    make_cost,
)
from skcpd.datasets import (
    generate_piecewise_linear_data,
    generate_piecewise_normal_data,
)
from skcpd.exceptions import InvalidParameterError

CUTS = np.array([[0, 10], [3, 17], [10, 40], [0, 40], [38, 40]])


@pytest.fixture
def x() -> np.ndarray:
    df = generate_piecewise_normal_data(
        means=[1.0, -2.0], variances=[1.0, 4.0], lengths=[20, 20], seed=11
    )
    return df.iloc[:, 0].to_numpy()


def test_l2_cost(x):
    cost = L2Cost().fit(x)
    expected = [np.sum((x[s:e] - x[s:e].mean()) ** 2) for s, e in CUTS]
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)
    np.testing.assert_allclose(
        cost.evaluate_params(CUTS)[:, 0], [x[s:e].mean() for s, e in CUTS]
    )


def test_l2_cost_known_variance(x):
    cost = L2Cost(variance=2.5).fit(x)
    expected = [np.sum((x[s:e] - x[s:e].mean()) ** 2) / 2.5 for s, e in CUTS]
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)


def test_l2_cost_uses_series_variance(x):
    series = PreprocessedSeries.from_data(x, variance=4.0)
    cost = L2Cost().fit(series)
    assert cost.variance_ == 4.0
    np.testing.assert_allclose(
        cost.evaluate(CUTS), L2Cost(variance=4.0).fit(x).evaluate(CUTS)
    )


def test_l2_cost_fixed_mean(x):
    cost = L2Cost(param=0.5).fit(x)
    expected = [np.sum((x[s:e] - 0.5) ** 2) for s, e in CUTS]
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)
    np.testing.assert_allclose(cost.evaluate_params(CUTS)[:, 0], 0.5)


def test_gaussian_var_cost(x):
    cost = GaussianVarCost(mean=0.5).fit(x)
    expected = []
    for s, e in CUTS:
        n = e - s
        var = np.mean((x[s:e] - 0.5) ** 2)
        expected.append(n * np.log(var) + n)
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)
    np.testing.assert_allclose(
        cost.evaluate_params(CUTS)[:, 0],
        [np.mean((x[s:e] - 0.5) ** 2) for s, e in CUTS],
    )


def test_gaussian_cost(x):
    cost = GaussianCost().fit(x)
    expected = []
    for s, e in CUTS:
        n = e - s
        expected.append(n * np.log(2 * np.pi * np.var(x[s:e])) + n)
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)

    params = cost.evaluate_params(CUTS)
    np.testing.assert_allclose(params[:, 0], [x[s:e].mean() for s, e in CUTS])
    np.testing.assert_allclose(params[:, 1], [np.var(x[s:e]) for s, e in CUTS])


def test_gaussian_cost_fixed_param(x):
    mean, var = 0.5, 2.0
    cost = GaussianCost(param=(mean, var)).fit(x)
    expected = []
    for s, e in CUTS:
        n = e - s
        expected.append(
            n * np.log(2 * np.pi * var) + np.sum((x[s:e] - mean) ** 2) / var
        )
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)


@pytest.mark.parametrize("param", [(0.0, 0.0), (0.0, -1.0), (np.nan, 1.0)])
def test_gaussian_cost_invalid_fixed_param(x, param):
    with pytest.raises(InvalidParameterError):
        GaussianCost(param=param).fit(x)


@pytest.mark.parametrize(
    "build_cost",
    [
        lambda shift: L2Cost(),
        lambda shift: L2Cost(param=0.5 + shift),
        lambda shift: GaussianCost(),
        lambda shift: GaussianCost(param=(0.5 + shift, 2.0)),
        lambda shift: GaussianVarCost(mean=0.5 + shift),
        lambda shift: LinearTrendCost(),
    ],
)
def test_costs_of_shifted_series(x, build_cost):
    shift = 1e8
    original = build_cost(0.0).fit(x)
    shifted = build_cost(shift).fit(x + shift)
    np.testing.assert_allclose(
        shifted.evaluate(CUTS), original.evaluate(CUTS), rtol=1e-6, atol=1e-5
    )
    assert not shifted.is_degenerate(CUTS).any()


def test_linear_trend_cost():
    df = generate_piecewise_linear_data(
        slopes=[0.5, -1.0], lengths=[25, 25], intercept=3.0, seed=12
    )
    x = df.iloc[:, 0].to_numpy()
    cuts = np.array([[0, 25], [25, 50], [10, 40], [47, 50]])
    cost = LinearTrendCost().fit(df)

    expected_costs = []
    expected_params = []
    for s, e in cuts:
        t = np.arange(s, e)
        slope, intercept = np.polyfit(t, x[s:e], 1)
        expected_costs.append(np.sum((x[s:e] - intercept - slope * t) ** 2))
        expected_params.append([intercept, slope])

    np.testing.assert_allclose(cost.evaluate(cuts), expected_costs, atol=1e-8)
    np.testing.assert_allclose(
        cost.evaluate_params(cuts), expected_params, rtol=1e-6, atol=1e-8
    )


def test_linear_trend_cost_exact_line():
    x = 2.0 + 0.25 * np.arange(1000, dtype=float)
    cost = LinearTrendCost().fit(x)
    costs = cost.evaluate(np.array([[0, 1000], [900, 1000], [998, 1000]]))
    np.testing.assert_allclose(costs, 0.0, atol=1e-6)


def test_empirical_distribution_cost(x):
    cost = EmpiricalDistributionCost(n_quantiles=7).fit(x)
    floor = config.probability_floor
    expected = []
    for s, e in CUTS:
        segment = x[s:e]
        edf = np.array(
            [
                (np.sum(segment < q) + 0.5 * np.sum(segment == q)) / (e - s)
                for q in cost.quantile_points_
            ]
        )
        edf = np.clip(edf, floor, 1.0 - floor)
        ll = np.sum(edf * np.log(edf) + (1.0 - edf) * np.log(1.0 - edf))
        expected.append(-(e - s) * ll)
    np.testing.assert_allclose(cost.evaluate(CUTS), expected)
    assert cost.param_names == [f"edf_{k}" for k in range(7)]


def test_empirical_distribution_default_n_quantiles(x):
    cost = EmpiricalDistributionCost().fit(x)
    assert cost.n_quantiles_ == int(np.ceil(4 * np.log(x.size)))
    assert np.all(np.diff(cost.quantile_points_) >= 0)


def test_empirical_distribution_invalid_n_quantiles():
    with pytest.raises(InvalidParameterError):
        EmpiricalDistributionCost(n_quantiles=2)


def test_degenerate_variance_segments():
    x = np.array([0, 0, 0, 0, 1, 3, 2, 5, 7, 7, 7, 7], dtype=float)
    cuts = np.array([[0, 4], [4, 8], [8, 12], [0, 12]])

    var_cost = GaussianVarCost(mean=0.0).fit(x)
    np.testing.assert_array_equal(
        var_cost.is_degenerate(cuts), [True, False, False, False]
    )
    assert np.all(np.isfinite(var_cost.evaluate(cuts)))

    meanvar_cost = GaussianCost().fit(x)
    np.testing.assert_array_equal(
        meanvar_cost.is_degenerate(cuts), [True, False, True, False]
    )
    costs = meanvar_cost.evaluate(cuts)
    assert np.all(np.isfinite(costs))
    np.testing.assert_allclose(
        costs[0], 4 * np.log(2 * np.pi * config.variance_floor) + 4
    )


def test_degenerate_empirical_distribution_segment():
    x = np.concatenate((np.zeros(5), np.arange(1.0, 31.0)))
    cost = EmpiricalDistributionCost(n_quantiles=5).fit(x)
    cuts = np.array([[0, 5], [33, 35], [0, 35]])
    assert np.all(np.isfinite(cost.evaluate(cuts)))
    # The last two observations lie above every quantile point.
    np.testing.assert_array_equal(cost.is_degenerate(cuts), [False, True, False])


@pytest.mark.parametrize("family", list(COST_FAMILIES))
def test_make_cost(family):
    cost = make_cost(family)
    assert isinstance(cost, COST_FAMILIES[family])


def test_make_cost_kwargs():
    cost = make_cost("mean", variance=3.0)
    assert isinstance(cost, L2Cost)
    assert cost.variance == 3.0


def test_make_cost_unknown_family():
    with pytest.raises(InvalidParameterError):
        make_cost("poisson")


def test_cost_invalid_variance():
    with pytest.raises(InvalidParameterError):
        L2Cost(variance=0.0)
    with pytest.raises(InvalidParameterError):
        LinearTrendCost(variance=-1.0)


def test_fixed_param_not_supported():
    with pytest.raises(InvalidParameterError):
        LinearTrendCost().set_params(param=1.0)
