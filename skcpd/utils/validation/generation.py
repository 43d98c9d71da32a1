"""Validation of inputs to the data generators."""

import numbers

import numpy as np

from ...exceptions import InvalidParameterError


def check_random_generator(
    seed: np.random.Generator | int | None,
) -> np.random.Generator:
    """Return `seed` if it is a generator, otherwise ``np.random.default_rng(seed)``.

    Raises
    ------
    TypeError
        If `seed` is neither None, an integer nor a `np.random.Generator`.
    """
    if isinstance(seed, np.random.Generator):
        return seed
    if seed is not None and not isinstance(seed, numbers.Integral):
        raise TypeError(
            f"seed must be None, an int or a numpy.random.Generator. Got {type(seed)}."
        )
    return np.random.default_rng(None if seed is None else int(seed))


def check_segment_lengths(lengths: int | list[int] | np.ndarray) -> np.ndarray:
    """Return segment lengths as a non-empty 1D array of positive integers.

    A single integer is treated as the length of a single segment.
    """
    if isinstance(lengths, numbers.Integral):
        lengths = [lengths]
    if not isinstance(lengths, (list, tuple, np.ndarray)):
        raise TypeError(
            f"lengths must be an int or a sequence of ints. Got {type(lengths)}."
        )

    lengths = np.asarray(lengths, dtype=int)
    if lengths.ndim != 1 or lengths.size == 0:
        raise InvalidParameterError(
            f"lengths must be a non-empty 1d sequence. Got shape {lengths.shape}."
        )
    if np.any(lengths <= 0):
        raise InvalidParameterError(
            f"Segment lengths must be positive. Got {lengths.tolist()}."
        )
    return lengths
