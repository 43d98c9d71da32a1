"""Detector base class.

    class name: BaseDetector

Scitype defining methods:
    fitting                         - fit(self, X, y=None)
    detecting, sparse format        - predict(self, X)
    detecting, dense format         - transform(self, X)
    detecting, segment format       - predict_segments(self, X)

Each detector type is defined by the content and format of the output of the predict
method. Each detector type therefore has the following methods for converting between
sparse and dense output formats:
    converting sparse output to dense - sparse_to_dense(y_sparse, index, columns)
    converting dense output to sparse - dense_to_sparse(y_dense)

Convenience methods:
    fit&detect      - fit_predict(self, X, y=None)
    fit&transform   - fit_transform(self, X, y=None)

Inspection methods:
    hyper-parameter inspection  - get_params()
    fitted parameter inspection - get_fitted_params()

State:
    fitted model/strategy   - by convention, any attributes ending in "_"
    fitted state flag       - check_is_fitted()

Needs to be implemented for a concrete detector:
    _fit(self, X, y=None)
    _predict(self, X)
    sparse_to_dense(y_sparse, index)
"""

__all__ = ["BaseDetector"]

import numpy as np
import pandas as pd
from sktime.base import BaseEstimator
from sktime.utils.validation.series import check_series


class BaseDetector(BaseEstimator):
    """Base class for all detectors in skcpd.

    A detector is a model that detects events in time series data. The `predict`
    method returns the detections in a sparse format, where each element corresponds
    to a detected event. The `transform` method returns the detections in a dense
    format, where each element in the input data is annotated according to the
    detection results.
    """

    _tags = {
        "object_type": "detector",
        "task": None,
        "learning_type": "unsupervised",
        "distribution_type": None,
        "fit_is_empty": False,
    }

    def __init__(self):
        self._is_fitted = False

        self._X = None
        self._y = None

        super().__init__()

    def fit(self, X, y=None):
        """Fit detector to training data.

        Fit trains the detector on the input data, for example by tuning a detection
        threshold. Detection of events does not happen here, but in the `predict` or
        `transform` methods, after the detector has been fit.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Training data to fit model to (time series).
        y : None
            Ignored. Included for API consistency by convention.

        Returns
        -------
        self :
            Reference to self.
        """
        X = check_series(X, allow_index_names=True)

        self._X = X
        self._y = y

        if not self.get_tag("fit_is_empty"):
            self._fit(X=X, y=y)

        # this should happen last
        self._is_fitted = True

        return self

    def _fit(self, X, y=None):
        """Fit detector to training data.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Training data to fit model to (time series).
        y : None
            Ignored.

        Returns
        -------
        self :
            Reference to self.
        """
        raise NotImplementedError("abstract method")

    def predict(self, X):
        """Detect events and return the result in a sparse format.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Data to detect events in (time series).

        Returns
        -------
        y : pd.DataFrame
            Each row corresponds to a detected event. Exact format depends on
            the detector type.
        """
        self.check_is_fitted()

        X = check_series(X, allow_index_names=True)

        y = self._predict(X=X)
        return y

    def _predict(self, X):
        """Detect events and return the result in a sparse format.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Data to detect events in (time series).

        Returns
        -------
        y : pd.DataFrame with RangeIndex
            Detected events, with the column ``"ilocs"`` holding ``iloc`` references
            to indices of ``X``.
        """
        raise NotImplementedError("abstract method")

    def transform(self, X):
        """Detect events and return the result in a dense format.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Data to detect events in (time series).

        Returns
        -------
        y : pd.DataFrame
            A `pd.DataFrame` with the same index as X and one column:

            * `"labels"`: Integer labels starting from 0.
        """
        y = self.predict(X)
        X_inner = pd.DataFrame(X)
        y_dense = self.sparse_to_dense(y, X_inner.index, X_inner.columns)
        return y_dense

    def predict_segments(self, X):
        """Detect events and return the segments between them.

        Parameters
        ----------
        X : pd.Series, pd.DataFrame or np.ndarray
            Data to detect events in (time series).

        Returns
        -------
        pd.DataFrame with RangeIndex
            Segments with the following columns:

            * ``"ilocs"`` - left-closed intervals of iloc based segments.
            * ``"labels"`` - integer label of each segment.
        """
        y = self.predict(X)
        return self.change_points_to_segments(y, 0, len(X))

    @staticmethod
    def sparse_to_dense(y_sparse, index, columns=None):
        """Convert the sparse output from a detector to a dense format.

        Parameters
        ----------
        y_sparse : pd.DataFrame
            The sparse output from a detector's `predict` method.
        index : array-like
            Indices that are to be annotated according to `y_sparse`.
        columns : array-like, optional
            Columns that are to be annotated according to `y_sparse`.

        Returns
        -------
        pd.DataFrame of detection labels.
        """
        raise NotImplementedError("abstract method")

    @staticmethod
    def dense_to_sparse(y_dense):
        """Convert the dense output from a detector to a sparse format.

        Parameters
        ----------
        y_dense : pd.DataFrame
            The dense output from a detector's `transform` method.

        Returns
        -------
        pd.DataFrame
        """
        raise NotImplementedError("abstract method")

    @staticmethod
    def change_points_to_segments(y_sparse, start, end) -> pd.DataFrame:
        """Convert a series of change point indexes to segments.

        Parameters
        ----------
        y_sparse : pd.DataFrame with RangeIndex
            Detected change points. Must have the column ``"ilocs"`` with the iloc
            indices at which the change points take place, sorted in ascending order.
        start : int
            Starting point of the first segment (inclusive).
        end : int
            End point of the last segment (exclusive).

        Returns
        -------
        pd.DataFrame with RangeIndex
            Segments with the columns ``"ilocs"`` (left-closed intervals) and
            ``"labels"``.

        Examples
        --------
        >>> import pandas as pd
        >>> from skcpd.base import BaseDetector
        >>> change_points = pd.DataFrame({"ilocs": [1, 2, 5]})
        >>> BaseDetector.change_points_to_segments(change_points, 0, 7)
            ilocs  labels
        0  [0, 1)       0
        1  [1, 2)       1
        2  [2, 5)       2
        3  [5, 7)       3
        """
        changepoints = np.asarray(y_sparse["ilocs"], dtype=np.int64)
        breaks = np.concatenate(([start], changepoints, [end])).astype(np.int64)
        segments = pd.IntervalIndex.from_breaks(breaks, closed="left")
        return pd.DataFrame(
            {"ilocs": segments, "labels": np.arange(len(segments), dtype=np.int64)}
        )

    def fit_predict(self, X, y=None):
        """Fit to data, then predict it.

        Parameters
        ----------
        X : pd.DataFrame, pd.Series or np.ndarray
            Training data to fit model with and detect events in (time series).
        y : None
            Ignored.

        Returns
        -------
        y : pd.DataFrame
            Each row corresponds to a detected event.
        """
        return self.fit(X, y).predict(X)

    def fit_transform(self, X, y=None):
        """Fit to data, then transform it.

        Parameters
        ----------
        X : pd.DataFrame, pd.Series or np.ndarray
            Training data to fit model with and detect events in (time series).
        y : None
            Ignored.

        Returns
        -------
        y : pd.DataFrame
            Detections for sequence `X` in the dense format.
        """
        return self.fit(X, y).transform(X)
