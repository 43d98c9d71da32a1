import numpy as np
import pandas as pd
import pytest
from skbase._exceptions import NotFittedError

from skcpd.base import BaseDetector
from skcpd.datasets import generate_piecewise_normal_data


class FittingDetector(BaseDetector):
    _tags = {"task": "change_point_detection"}

    def _fit(self, X, y=None):
        self.fit_calls_ = getattr(self, "fit_calls_", 0) + 1
        return self

    def _predict(self, X):
        return pd.DataFrame({"ilocs": pd.Series([], dtype="int64")})


class EmptyFitDetector(FittingDetector):
    _tags = {"fit_is_empty": True}


def test_fit_calls_inner_fit():
    detector = FittingDetector().fit(generate_piecewise_normal_data(lengths=10))
    assert detector.fit_calls_ == 1
    assert detector.is_fitted


def test_fit_is_empty_skips_inner_fit():
    detector = EmptyFitDetector().fit(generate_piecewise_normal_data(lengths=10))
    assert not hasattr(detector, "fit_calls_")
    assert detector.is_fitted


def test_predict_before_fit_raises():
    with pytest.raises(NotFittedError):
        FittingDetector().predict(generate_piecewise_normal_data(lengths=10))


def test_detector_not_implemented_methods():
    detector = BaseDetector()
    x = generate_piecewise_normal_data(lengths=10)
    with pytest.raises(NotImplementedError):
        detector.fit(x)

    detector._is_fitted = True
    with pytest.raises(NotImplementedError):
        detector.predict(x)
    with pytest.raises(NotImplementedError):
        detector.transform(x)
    with pytest.raises(NotImplementedError):
        BaseDetector.sparse_to_dense(pd.DataFrame({"ilocs": [1]}), pd.RangeIndex(3))
    with pytest.raises(NotImplementedError):
        BaseDetector.dense_to_sparse(pd.DataFrame({"labels": [0, 1]}))


def test_change_points_to_segments():
    change_points = pd.DataFrame({"ilocs": pd.Series([2, 5, 8], dtype="int64")})
    segments = BaseDetector.change_points_to_segments(change_points, 0, 9)
    assert segments.equals(
        pd.DataFrame(
            {
                "ilocs": pd.IntervalIndex.from_breaks([0, 2, 5, 8, 9], closed="left"),
                "labels": np.arange(4, dtype=np.int64),
            }
        )
    )


def test_change_points_to_segments_no_change_points():
    change_points = pd.DataFrame({"ilocs": pd.Series([], dtype="int64")})
    segments = BaseDetector.change_points_to_segments(change_points, 0, 4)
    assert segments.shape[0] == 1
    assert segments["ilocs"].iloc[0] == pd.Interval(0, 4, closed="left")
