import numpy as np
import pytest

from skcpd.exceptions import InvalidInputError
from skcpd.utils.validation.cuts import check_cuts_array


def test_check_cuts_array_valid():
    cuts = np.array([[0, 2], [2, 5]])
    assert check_cuts_array(cuts, n_samples=5) is cuts
    cuts = np.array([[0, 2, 5]])
    assert check_cuts_array(cuts, n_samples=5, last_dim_size=3) is cuts


@pytest.mark.parametrize(
    "cuts, min_size",
    [
        (np.array([0, 2]), 1),
        (np.array([[0.0, 2.0]]), 1),
        (np.array([[0, 2, 4]]), 1),
        (np.array([[-1, 2]]), 1),
        (np.array([[0, 6]]), 1),
        (np.array([[2, 2]]), 1),
        (np.array([[3, 1]]), 1),
        (np.array([[0, 2]]), 3),
    ],
)
def test_check_cuts_array_invalid(cuts, min_size):
    with pytest.raises(InvalidInputError):
        check_cuts_array(cuts, n_samples=5, min_size=min_size)
