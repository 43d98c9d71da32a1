import numpy as np
import pytest

from skcpd.datasets import generate_piecewise_linear_data
from skcpd.exceptions import InvalidParameterError


def test_generate_piecewise_linear_data_shape():
    df = generate_piecewise_linear_data(lengths=20, n_segments=4, seed=1)
    assert df.shape == (80, 1)


def test_generate_piecewise_linear_data_noiseless_is_continuous():
    df, params = generate_piecewise_linear_data(
        slopes=[1.0, -2.0, 0.5],
        lengths=[5, 5, 5],
        intercept=3.0,
        noise_std=0.0,
        return_params=True,
    )
    x = df.iloc[:, 0].to_numpy()
    slopes = np.diff(x)
    np.testing.assert_allclose(slopes[:5], 1.0)
    np.testing.assert_allclose(slopes[5:10], -2.0)
    np.testing.assert_allclose(slopes[10:], 0.5)
    assert x[0] == 3.0
    np.testing.assert_array_equal(params["change_points"], [5, 10])
    assert params["slopes"] == [1.0, -2.0, 0.5]


def test_default_slopes_alternate():
    _, params = generate_piecewise_linear_data(n_segments=3, return_params=True)
    assert params["slopes"] == [1.0, -1.0, 1.0]


def test_generate_piecewise_linear_data_reproducible():
    first = generate_piecewise_linear_data(seed=5)
    second = generate_piecewise_linear_data(seed=5)
    assert first.equals(second)


def test_generate_piecewise_linear_data_invalid():
    with pytest.raises(InvalidParameterError):
        generate_piecewise_linear_data(noise_std=-1.0)
    with pytest.raises(InvalidParameterError):
        generate_piecewise_linear_data(lengths=[10, -1])
