"""Data generators for piecewise normal data."""

from numbers import Number

import numpy as np
import pandas as pd
import scipy.stats

from ..exceptions import InvalidParameterError
from ..utils.validation.generation import check_random_generator, check_segment_lengths
from ._utils import recycle_list


def _as_list(value: float | list[float] | np.ndarray, name: str) -> list[float]:
    if isinstance(value, Number):
        return [float(value)]
    values = [float(v) for v in np.asarray(value).reshape(-1)]
    if len(values) == 0:
        raise InvalidParameterError(f"{name} cannot be an empty list or np.ndarray.")
    return values


def generate_piecewise_normal_data(
    means: float | list[float] | np.ndarray = 0.0,
    variances: float | list[float] | np.ndarray = 1.0,
    lengths: int | list[int] | np.ndarray = 100,
    *,
    seed: int | np.random.Generator | None = None,
    return_params: bool = False,
) -> pd.DataFrame | tuple[pd.DataFrame, dict]:
    """Generate univariate piecewise normal data.

    Parameters
    ----------
    means : float, list of float or np.ndarray, optional (default=0.0)
        Means of the segments. Recycled to match the number of segments.
    variances : float, list of float or np.ndarray, optional (default=1.0)
        Variances of the segments. Recycled to match the number of segments.
    lengths : int, list of int or np.ndarray, optional (default=100)
        The segment lengths. If an integer, all segments have this length, and the
        number of segments is the longest of `means` and `variances`.
    seed : np.random.Generator | int | None, optional
        Seed for the random number generator or a numpy random generator instance.
        If specified, this ensures reproducible output across multiple calls.
    return_params : bool, optional (default=False)
        If True, the function returns a tuple of the generated DataFrame and a
        dictionary with the parameters used to generate the data.

    Returns
    -------
    pd.DataFrame
        DataFrame with a single column of generated data.

    dict
        Dictionary with the keys `"n_segments"`, `"n_samples"`, `"means"`,
        `"variances"`, `"lengths"` and `"change_points"` (the start indices of each
        segment except the first). Returned only if `return_params` is True.

    Examples
    --------
    >>> from skcpd.datasets import generate_piecewise_normal_data
    >>> df, params = generate_piecewise_normal_data(
    ...     means=[0, 5], lengths=[5, 5], seed=0, return_params=True
    ... )
    >>> df.shape
    (10, 1)
    >>> params["change_points"]
    array([5])
    """
    random_generator = check_random_generator(seed)
    means = _as_list(means, "means")
    variances = _as_list(variances, "variances")
    if any(var <= 0.0 for var in variances):
        raise InvalidParameterError(f"All variances must be positive. Got {variances}.")

    if isinstance(lengths, Number):
        n_segments = max(len(means), len(variances))
        lengths = [int(lengths)] * n_segments
    lengths = check_segment_lengths(lengths)
    n_segments = len(lengths)

    means = recycle_list(means, n_segments)
    variances = recycle_list(variances, n_segments)

    values = np.concatenate(
        [
            scipy.stats.norm(mean, np.sqrt(var)).rvs(
                size=length, random_state=random_generator
            )
            for mean, var, length in zip(means, variances, lengths)
        ]
    )
    df = pd.DataFrame(values)

    if return_params:
        params = {
            "n_segments": n_segments,
            "n_samples": int(np.sum(lengths)),
            "means": means,
            "variances": variances,
            "lengths": lengths,
            "change_points": np.cumsum(lengths)[:-1],
        }
        return df, params
    return df
