"""Common validation functions for input parameters."""

from numbers import Number

import pandas as pd

from ...exceptions import InvalidParameterError


def check_none(value: Number, name: str, allow_none: bool = False) -> Number:
    """Check if value is None.

    Parameters
    ----------
    value : int, float
        Value to check.
    name : str
        Name of the parameter to be shown in the error message.
    allow_none : bool, optional (default=False)
        Whether to allow None values.

    Returns
    -------
    value : int, float
        Input value.

    Raises
    ------
    InvalidParameterError
        If value is None and allow_none is False.
    """
    if not allow_none and value is None:
        raise InvalidParameterError(f"{name} cannot be None.")
    return value


def check_larger_than(
    min_value: Number, value: Number, name: str, allow_none: bool = False
) -> Number:
    """Check if `value` is larger than or equal to `min_value`.

    Parameters
    ----------
    min_value : int, float
        Minimum allowed value.
    value : int, float
        Value to check.
    name : str
        Name of the parameter to be shown in the error message.
    allow_none : bool, optional (default=False)
        Whether to allow None values.

    Returns
    -------
    value : int, float
        Input value.

    Raises
    ------
    InvalidParameterError
        If value is `not None` and smaller than `min_value`.
    """
    check_none(value, name, allow_none)
    if value is not None and value < min_value:
        raise InvalidParameterError(
            f"{name} must be at least {min_value} ({name}={value})."
        )
    return value


def check_in_interval(
    interval: pd.Interval,
    value: Number,
    name: str,
    allow_none: bool = False,
) -> Number:
    """Check if value is inside an interval.

    Parameters
    ----------
    interval : pd.Interval
        Interval to check.
    value : int, float
        Value to check.
    name : str
        Name of the parameter to be shown in the error message.
    allow_none : bool, optional (default=False)
        Whether to allow None values.

    Returns
    -------
    value : int, float
        Input value.

    Raises
    ------
    InvalidParameterError
        If value is outside the interval.
    """
    check_none(value, name, allow_none)
    if value is not None and value not in interval:
        raise InvalidParameterError(f"{name} must be in {interval} ({name}={value}).")
    return value


def check_variance(variance: float | None, name: str = "variance") -> float | None:
    """Check that a known variance is a positive finite number, or None."""
    if variance is None:
        return None
    if not isinstance(variance, Number) or not 0.0 < variance < float("inf"):
        raise InvalidParameterError(
            f"{name} must be a positive finite number ({name}={variance})."
        )
    return float(variance)
