"""Utility functions for costs."""

from numbers import Number

import numpy as np

from ..exceptions import InvalidParameterError


def check_mean(mean: float, name: str = "mean") -> float:
    """Check that a fixed mean is a finite number."""
    if isinstance(mean, bool) or not isinstance(mean, Number) or not np.isfinite(mean):
        raise InvalidParameterError(f"{name} must be a finite number ({name}={mean}).")
    return float(mean)


def check_var(var: float, name: str = "variance") -> float:
    """Check that a fixed variance is a positive finite number."""
    if isinstance(var, bool) or not isinstance(var, Number) or not 0.0 < var < np.inf:
        raise InvalidParameterError(
            f"{name} must be a positive finite number ({name}={var})."
        )
    return float(var)
