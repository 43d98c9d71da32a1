"""Asymptotic threshold for the maximum CUSUM statistic."""

import numpy as np
import scipy.stats

from ..exceptions import InvalidInputError
from ..utils.validation.parameters import check_in_interval
from ._utils import ALPHA_INTERVAL


def make_asymptotic_cusum_threshold(n: int, alpha: float = 0.05) -> float:
    """Create a threshold for the squared maximum CUSUM statistic from its limit law.

    Under the no-change hypothesis with Gaussian noise, the normalised maximum of the
    standardised CUSUM statistic converges to a Gumbel distribution [1]_. With
    ``a_n = (2 log log n)^(-1/2)`` and ``b_n = 1 / a_n + a_n log log log n / 2``,
    the threshold is ``(a_n * u + b_n)^2``, where ``u`` is the ``1 - alpha``
    quantile of a Gumbel distribution with location ``-log(2 pi) / 2``.

    The convergence is of order ``log log n``, so the threshold is conservative for
    series of practical length: the realised false positive rate is typically below
    `alpha`.

    Parameters
    ----------
    n : int
        Length of the series. Must be at least 3, so that ``log log log n`` is
        defined.
    alpha : float, optional (default=0.05)
        False positive level in ``(0, 1)``.

    Returns
    -------
    float
        Threshold on the scale of the squared standardised statistic,
        ``max_tau C_tau^2 / sigma^2``.

    References
    ----------
    .. [1] Csörgő, M., & Horváth, L. (1997). Limit theorems in change-point analysis.
       Wiley.

    Examples
    --------
    >>> from skcpd.thresholds import make_asymptotic_cusum_threshold
    >>> round(make_asymptotic_cusum_threshold(100, 0.05), 2)
    9.26
    """
    check_in_interval(ALPHA_INTERVAL, alpha, "alpha")
    if n < 3:
        raise InvalidInputError(
            f"The asymptotic threshold requires a series length of at least 3 (n={n})."
        )

    log_log_n = np.log(np.log(n))
    a_n = 1.0 / np.sqrt(2.0 * log_log_n)
    b_n = 1.0 / a_n + 0.5 * a_n * np.log(log_log_n)
    gumbel_quantile = scipy.stats.gumbel_r.ppf(
        1.0 - alpha, loc=-0.5 * np.log(2.0 * np.pi)
    )
    return float((a_n * gumbel_quantile + b_n) ** 2)
