"""Interval scorer base class.

    class name: BaseIntervalScorer

Scitype defining methods:
    fitting                         - fit(self, X, y=None)
    evaluating                      - evaluate(self, cuts)

Needs to be implemented for a concrete interval scorer:
    _evaluate(self, cuts)

Optional to implement:
    _fit(self, X, y=None)
    min_size
    get_model_size(self, p)
"""

__all__ = ["BaseIntervalScorer"]

import numpy as np
from numpy.typing import ArrayLike
from sktime.base import BaseEstimator

from ..utils.validation.cuts import check_cuts_array
from ..utils.validation.data import as_2d_array
from ._preprocessed_series import PreprocessedSeries

_CUT_SIZES = {"cost": 2, "change_score": 3}


class BaseIntervalScorer(BaseEstimator):
    """Base class for functions scored on intervals of a single series.

    Costs score segments ``X[start:end]`` given as ``[start, end]`` rows of a cuts
    array. Change scores score a split of ``X[start:end]`` at ``split``, given as
    ``[start, split, end]`` rows. The ``"task"`` tag tells which of the two a
    scorer is.

    Scorers are fitted to a `PreprocessedSeries`, which detectors build once and
    share between all scorers they use.
    """

    _tags = {
        "object_type": "interval_scorer",
        "task": None,  # "cost" or "change_score"
        "distribution_type": "None",  # "None" or "Gaussian"
        # Penalties are applied by the detectors, never by the scorers.
        "is_penalised": False,
        "capability:multivariate": False,
        "capability:missing_values": False,
    }

    def __init__(self):
        self._is_fitted = False
        self._series = None
        self._required_cut_size = None

        super().__init__()

    def fit(self, X, y=None):
        """Fit the interval scorer to a series.

        Parameters
        ----------
        X : PreprocessedSeries, pd.Series, pd.DataFrame, np.ndarray or list
            Series to score. A `PreprocessedSeries` is used as is. Other inputs are
            converted with `PreprocessedSeries.from_data`.
        y : None
            Ignored. Included for API consistency by convention.

        Returns
        -------
        self :
            Reference to self.
        """
        # The task tag is only final on the concrete subclass.
        self._required_cut_size = self._get_required_cut_size()

        if not isinstance(X, PreprocessedSeries):
            X = PreprocessedSeries.from_data(X)
        self._series = X

        self._fit(X=self._series, y=y)
        self._is_fitted = True
        return self

    def _fit(self, X: PreprocessedSeries, y=None):
        return self

    def evaluate(self, cuts: ArrayLike) -> np.ndarray:
        """Evaluate the scorer on each row of `cuts`.

        Parameters
        ----------
        cuts : ArrayLike
            Integer cuts, one row per evaluation. A 1D array is a single row.

        Returns
        -------
        scores : np.ndarray
            A 1D array with one value per row of `cuts`.

        Raises
        ------
        InvalidInputError
            If the cuts are not integer, out of range, not increasing or delimit an
            interval shorter than `min_size`.
        """
        self.check_is_fitted()
        return self._evaluate(self._prepare_cuts(cuts))

    def _prepare_cuts(self, cuts: ArrayLike) -> np.ndarray:
        cuts = as_2d_array(cuts, vector_as_column=False)
        return check_cuts_array(
            cuts,
            n_samples=self._series.n_samples,
            min_size=self.min_size,
            last_dim_size=self._required_cut_size,
        )

    def _evaluate(self, cuts: np.ndarray) -> np.ndarray:
        """Evaluate validated cuts. Each row is increasing and within the series."""
        raise NotImplementedError("abstract method")

    @property
    def min_size(self) -> int:
        """Minimum number of samples between two consecutive cut positions."""
        return 1

    def get_model_size(self, p: int) -> int:
        """Number of parameters estimated per interval for `p` variables.

        Used for default penalties such as the BIC penalty.
        """
        return p

    def _get_required_cut_size(self) -> int:
        task = self.get_tag("task")
        if task not in _CUT_SIZES:
            raise RuntimeError(
                f"The task tag of {type(self).__name__} must be one of"
                f" {list(_CUT_SIZES)}. Got {task}."
            )
        return _CUT_SIZES[task]

    @property
    def n_samples(self) -> int:
        """Length of the fitted series."""
        self.check_is_fitted()
        return self._series.n_samples

    @property
    def series(self) -> PreprocessedSeries:
        """The fitted series with its cached statistics."""
        self.check_is_fitted()
        return self._series
