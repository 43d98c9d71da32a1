"""Base class for change point detectors.

Subclasses implement ``_predict(self, X)`` returning the sparse changepoint frame,
usually through `_format_sparse_output`, and ``_fit`` unless the ``fit_is_empty``
tag is set.
"""

import numpy as np
import pandas as pd

from ..base import BaseDetector


class BaseChangeDetector(BaseDetector):
    """Base class for change detectors.

    A change detector splits a series into segments of homogeneous data. The
    changepoints are the integer locations of the first element of every segment
    but the first, so they lie in ``1, ..., n - 1``. In one-based notation this
    is the index of the last element of the previous segment.
    """

    _tags = {
        "task": "change_point_detection",
    }

    @staticmethod
    def sparse_to_dense(
        y_sparse: pd.DataFrame, index: pd.Index, columns: pd.Index = None
    ) -> pd.DataFrame:
        """Label each sample by the segment it belongs to.

        Parameters
        ----------
        y_sparse : pd.DataFrame
            Output of `predict`, with an ``"ilocs"`` column of changepoints.
        index : pd.Index
            Index of the labelled series.
        columns : pd.Index, optional
            Ignored.

        Returns
        -------
        pd.DataFrame
            One ``"labels"`` column on `index`, with label ``k`` for samples in the
            ``k``-th segment.
        """
        changepoints = np.asarray(y_sparse["ilocs"], dtype=np.int64)
        labels = np.searchsorted(changepoints, np.arange(len(index)), side="right")
        return pd.DataFrame({"labels": labels.astype(np.int64)}, index=index)

    @staticmethod
    def dense_to_sparse(y_dense: pd.DataFrame) -> pd.DataFrame:
        """Recover the changepoints from segment labels, see `sparse_to_dense`."""
        labels = y_dense["labels"].to_numpy()
        changepoints = np.flatnonzero(np.diff(labels) != 0) + 1
        return BaseChangeDetector._format_sparse_output(changepoints)

    @staticmethod
    def _format_sparse_output(changepoints) -> pd.DataFrame:
        """Wrap changepoint locations in a frame with one ``"ilocs"`` column."""
        return pd.DataFrame({"ilocs": np.asarray(changepoints, dtype=np.int64)})
