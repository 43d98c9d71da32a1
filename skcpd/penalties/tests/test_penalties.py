import numpy as np
import pytest

from skcpd.exceptions import InvalidParameterError
from skcpd.penalties import make_bic_penalty


def test_make_bic_penalty():
    assert make_bic_penalty(1, 100) == pytest.approx(2 * np.log(100))
    assert make_bic_penalty(2, 100) == pytest.approx(3 * np.log(100))
    assert make_bic_penalty(2, 100, additional_cpts=0) == pytest.approx(
        2 * np.log(100)
    )
    assert isinstance(make_bic_penalty(1, 10), float)


def test_make_bic_penalty_increases_with_n():
    assert make_bic_penalty(1, 1000) > make_bic_penalty(1, 100)


@pytest.mark.parametrize(
    "n_params, n, additional_cpts", [(0, 100, 1), (1, 0, 1), (1, 100, -1)]
)
def test_make_bic_penalty_invalid(n_params, n, additional_cpts):
    with pytest.raises(InvalidParameterError):
        make_bic_penalty(n_params, n, additional_cpts)
