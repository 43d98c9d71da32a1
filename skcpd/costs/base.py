"""Base class for segment costs.

    class name: BaseCost

Needs to be implemented for a concrete cost:
    _evaluate_optim_param(self, starts, ends)
    _evaluate_params(self, starts, ends)
    param_names

Optional to implement:
    _fit(self, X, y=None)
    _evaluate_fixed_param(self, starts, ends), if "supports_fixed_param" is True
    _check_fixed_param(self, param, X)
    _is_degenerate(self, starts, ends)
    min_size, get_model_size(self, p)
"""

import numpy as np
from numpy.typing import ArrayLike

from ..base import BaseIntervalScorer
from ..exceptions import InvalidParameterError


class BaseCost(BaseIntervalScorer):
    """Base class for segment costs.

    A cost is twice the negative log-likelihood of the data in a segment
    ``X[start:end]`` under one model family. Without a fixed `param`, the
    family's parameters are estimated by maximum likelihood on each segment. All
    costs are computed from the cached statistics of the fitted
    `PreprocessedSeries`, without scanning the data of a segment.

    Parameters
    ----------
    param : optional (default=None)
        Fixed parameter to evaluate the cost at, only for costs with the
        ``"supports_fixed_param"`` tag. The type depends on the cost.
    """

    _tags = {
        "task": "cost",
        "supports_fixed_param": False,
    }

    def __init__(self, param=None):
        self.param = param
        super().__init__()
        if self.param is not None and not self.get_tag("supports_fixed_param"):
            raise InvalidParameterError(
                f"{type(self).__name__} does not support a fixed param."
                f" Got param={self.param}."
            )

    def _check_param(self, param, X):
        """Validate `param` against the data, passing ``None`` through."""
        if param is None:
            return None
        return self._check_fixed_param(param, X)

    def _check_fixed_param(self, param, X):
        return param

    def _evaluate(self, cuts: np.ndarray) -> np.ndarray:
        starts, ends = cuts[:, 0], cuts[:, 1]
        if self.param is None:
            return self._evaluate_optim_param(starts, ends)
        return self._evaluate_fixed_param(starts, ends)

    def _evaluate_optim_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        """Costs of ``X[starts[i]:ends[i]]`` at the estimated parameters."""
        raise NotImplementedError("abstract method")

    def _evaluate_fixed_param(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        """Costs of ``X[starts[i]:ends[i]]`` at the fixed `param`."""
        raise NotImplementedError("abstract method")

    @property
    def param_names(self) -> list[str]:
        """Names of the columns returned by `evaluate_params`."""
        raise NotImplementedError("abstract method")

    def evaluate_params(self, cuts: ArrayLike) -> np.ndarray:
        """Estimate the model parameters on a set of segments.

        Parameters
        ----------
        cuts : ArrayLike
            A 2D array with two columns, ``[start, end]``, per segment.

        Returns
        -------
        params : np.ndarray
            A 2D array with one row per segment and one column per entry of
            `param_names`. A fixed `param` is repeated on every row.
        """
        self.check_is_fitted()
        cuts = self._prepare_cuts(cuts)
        return self._evaluate_params(cuts[:, 0], cuts[:, 1])

    def _evaluate_params(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        raise NotImplementedError("abstract method")

    def is_degenerate(self, cuts: ArrayLike) -> np.ndarray:
        """Flag segments whose cost was computed from a floored estimate.

        A constant segment has a zero variance estimate, and a segment may have
        empirical probabilities of exactly 0 or 1. These are floored using
        `skcpd.config.config`, so the cost stays finite but reflects the floor
        rather than the data.

        Parameters
        ----------
        cuts : ArrayLike
            A 2D array with two columns, ``[start, end]``, per segment.

        Returns
        -------
        np.ndarray
            A 1D boolean array with one entry per segment.
        """
        self.check_is_fitted()
        cuts = self._prepare_cuts(cuts)
        return self._is_degenerate(cuts[:, 0], cuts[:, 1])

    def _is_degenerate(self, starts: np.ndarray, ends: np.ndarray) -> np.ndarray:
        return np.zeros(starts.shape[0], dtype=bool)
