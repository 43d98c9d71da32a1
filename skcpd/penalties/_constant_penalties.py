"""Constant penalties for change detection."""

import numpy as np

from ..utils.validation.parameters import check_larger_than


def make_bic_penalty(n_params: int, n: int, additional_cpts: int = 1) -> float:
    """Penalty per changepoint from the Bayesian Information Criterion.

    Every new segment adds `n_params` segment parameters and `additional_cpts`
    changepoint locations to the model, each costing ``log(n)``.

    Parameters
    ----------
    n_params : int
        Number of parameters of the cost per segment, see
        `BaseIntervalScorer.get_model_size`.
    n : int
        Length of the series.
    additional_cpts : int, optional (default=1)
        Number of location parameters per changepoint.

    Returns
    -------
    float
        ``(n_params + additional_cpts) * log(n)``.
    """
    check_larger_than(1, n_params, "n_params")
    check_larger_than(1, n, "n")
    check_larger_than(0, additional_cpts, "additional_cpts")
    return float((n_params + additional_cpts) * np.log(n))
