"""Data generators for piecewise linear trends."""

import numbers

import numpy as np
import pandas as pd
import scipy.stats

from ..exceptions import InvalidParameterError
from ..utils.validation.generation import check_random_generator, check_segment_lengths
from ._utils import recycle_list


def generate_piecewise_linear_data(
    slopes: float | list[float] | None = None,
    lengths: int | list[int] | np.ndarray = 50,
    *,
    n_segments: int = 3,
    intercept: float = 0.0,
    noise_std: float = 1.0,
    seed: int | np.random.Generator | None = None,
    return_params: bool = False,
) -> pd.DataFrame | tuple[pd.DataFrame, dict]:
    """Generate a noisy continuous signal with a piecewise constant slope.

    The mean of segment ``k`` is a line with slope ``slopes[k]``. Each line starts
    where the previous one would have continued, so the mean has kinks but no
    jumps at the change points. I.i.d. Gaussian noise is added on top.

    Parameters
    ----------
    slopes : float or list of float, optional (default=None)
        Slope of each segment, recycled to the number of segments. ``None`` gives
        alternating slopes of 1.0 and -1.0.
    lengths : int, list of int or np.ndarray, optional (default=50)
        Segment lengths. An integer is repeated `n_segments` times.
    n_segments : int, optional (default=3)
        Number of segments when `lengths` is an integer.
    intercept : float, optional (default=0.0)
        Mean of the first observation.
    noise_std : float, optional (default=1.0)
        Standard deviation of the noise. Zero gives the noiseless signal.
    seed : int, np.random.Generator or None, optional (default=None)
        Seed or generator for the noise.
    return_params : bool, optional (default=False)
        Whether to also return the generating parameters.

    Returns
    -------
    df : pd.DataFrame
        Single-column frame with the generated series.
    params : dict
        Only if `return_params` is True. Contains the keys ``"n_segments"``,
        ``"n_samples"``, ``"lengths"``, ``"slopes"``, ``"intercept"``,
        ``"noise_std"`` and ``"change_points"``, the first index of each segment
        after the first.
    """
    if noise_std < 0:
        raise InvalidParameterError(f"noise_std must be non-negative. Got {noise_std}.")

    random_generator = check_random_generator(seed)
    if isinstance(lengths, numbers.Integral):
        lengths = [int(lengths)] * n_segments
    lengths = check_segment_lengths(lengths)
    n_segments = len(lengths)
    n_samples = int(np.sum(lengths))

    if slopes is None:
        slopes = [1.0, -1.0]
    if isinstance(slopes, numbers.Number):
        slopes = [slopes]
    slopes = recycle_list(list(slopes), n_segments)

    # Each segment continues from the last value of the previous segment.
    starts = np.concatenate(([0], np.cumsum(lengths)[:-1]))
    signal = np.zeros(n_samples)
    current_value = intercept
    for start, length, slope in zip(starts, lengths, slopes):
        signal[start : start + length] = current_value + slope * np.arange(length)
        current_value = signal[start + length - 1] + slope

    signal += scipy.stats.norm.rvs(
        loc=0, scale=noise_std, size=n_samples, random_state=random_generator
    )
    df = pd.DataFrame(signal)

    if return_params:
        params = {
            "n_segments": n_segments,
            "n_samples": n_samples,
            "lengths": lengths,
            "slopes": slopes,
            "intercept": intercept,
            "noise_std": noise_std,
            "change_points": starts[1:],
        }
        return df, params
    return df
