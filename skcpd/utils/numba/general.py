"""Flooring kernels for degenerate segment estimates."""

import numpy as np

from . import njit


@njit
def truncate_below(x: np.ndarray, lower_bound: float) -> np.ndarray:
    """Replace entries of `x` below `lower_bound` by `lower_bound`.

    Used to floor variance estimates of constant segments.
    """
    return np.maximum(x, lower_bound)


@njit
def clip_probabilities(p: np.ndarray, floor: float) -> np.ndarray:
    """Clip probabilities to ``[floor, 1 - floor]`` so that their logs are finite."""
    return np.minimum(np.maximum(p, floor), 1.0 - floor)
