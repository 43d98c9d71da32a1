"""Utility functions for dataset generation."""

from itertools import cycle, islice

from ..exceptions import InvalidParameterError


def recycle_list(lst: list, n: int) -> list:
    """Repeat or truncate `lst` to exactly `n` elements, keeping the order."""
    if len(lst) == 0:
        raise InvalidParameterError("Cannot recycle an empty list of parameters.")
    return list(islice(cycle(lst), n))
