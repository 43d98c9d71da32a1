"""Validation functions for penalties."""

from numbers import Number

import numpy as np

from ...exceptions import InvalidParameterError


def check_penalty(
    penalty: float | None,
    arg_name: str,
    caller_name: str,
    allow_none: bool = True,
) -> float | None:
    """Check if the given penalty is valid.

    Parameters
    ----------
    penalty : float | None
        The penalty to check.
    arg_name : str
        The name of the argument. Used for error messages.
    caller_name : str
        The name of the caller. Used for error messages.
    allow_none : bool, default = True
        If True, the penalty can be None. If False, the penalty cannot be None.

    Returns
    -------
    float or None
        The penalty as a float.
    """
    if not allow_none and penalty is None:
        raise InvalidParameterError(f"`{arg_name}` cannot be None in {caller_name}")
    if penalty is None:
        return None

    if isinstance(penalty, bool) or not isinstance(penalty, Number):
        raise InvalidParameterError(
            f"`{arg_name}` must be a single number in {caller_name}."
            f" Got {type(penalty)}."
        )
    if not np.isfinite(penalty):
        raise InvalidParameterError(f"`{arg_name}` must be finite in {caller_name}")
    if penalty < 0.0:
        raise InvalidParameterError(
            f"`{arg_name}` must be non-negative in {caller_name}"
        )
    return float(penalty)


def check_threshold(
    threshold: float | None,
    arg_name: str,
    caller_name: str,
    allow_none: bool = True,
) -> float | None:
    """Check that a test threshold is a positive finite number.

    Accepts the same inputs as `check_penalty`, except zero.
    """
    threshold = check_penalty(threshold, arg_name, caller_name, allow_none)
    if threshold is not None and threshold <= 0.0:
        raise InvalidParameterError(f"`{arg_name}` must be positive in {caller_name}")
    return threshold
