"""Validation of cuts passed to interval scorers."""

import numpy as np

from ...exceptions import InvalidInputError


def check_cuts_array(
    cuts: np.ndarray,
    n_samples: int,
    min_size: int | None = None,
    last_dim_size: int = 2,
) -> np.ndarray:
    """Check that `cuts` describes valid segments of a series of length `n_samples`.

    Each row holds ``last_dim_size`` increasing integer positions in
    ``[0, n_samples]``. Consecutive positions delimit half-open segments, which
    must have at least `min_size` samples (default 1).

    Returns
    -------
    cuts : np.ndarray
        The input, unmodified.

    Raises
    ------
    InvalidInputError
        If any requirement is violated.
    """
    min_size = 1 if min_size is None else min_size

    if cuts.ndim != 2 or cuts.shape[1] != last_dim_size:
        raise InvalidInputError(
            f"cuts must be a 2D array with {last_dim_size} columns."
            f" Got shape {cuts.shape}."
        )
    if not np.issubdtype(cuts.dtype, np.integer):
        raise InvalidInputError(f"cuts must be integers. Got dtype {cuts.dtype}.")
    if cuts.size == 0:
        return cuts

    if cuts.min() < 0 or cuts.max() > n_samples:
        raise InvalidInputError(
            f"cuts must lie in [0, {n_samples}]."
            f" Got values in [{cuts.min()}, {cuts.max()}]."
        )

    shortest = np.diff(cuts, axis=1).min()
    if shortest < min_size:
        raise InvalidInputError(
            f"Every segment defined by cuts must contain at least {min_size}"
            f" samples. Found a segment of size {shortest}."
        )
    return cuts
