"""Tests for segmentation results and their helpers."""

import dataclasses

import numpy as np
import pandas as pd
import pytest

from skcpd.change_detectors import (
    SegmentationResult,
    changepoints_to_cuts,
    evaluate_segmentation,
)
from skcpd.costs import GaussianCost, L2Cost
from skcpd.exceptions import InvalidInputError


def test_changepoints_to_cuts():
    cuts = changepoints_to_cuts(np.array([2, 5]), 8)
    np.testing.assert_array_equal(cuts, [[0, 2], [2, 5], [5, 8]])
    assert cuts.dtype == np.int64

    cuts = changepoints_to_cuts(np.array([], dtype=np.int64), 4)
    np.testing.assert_array_equal(cuts, [[0, 4]])


@pytest.mark.parametrize("changepoints", [[0, 3], [3, 3], [5, 2], [2, 8]])
def test_changepoints_to_cuts_invalid(changepoints):
    with pytest.raises(InvalidInputError):
        changepoints_to_cuts(np.array(changepoints), 8)


def test_evaluate_segmentation():
    x = np.array([1.0, 2.0, 3.0, 10.0, 11.0, 12.0])
    cost = L2Cost().fit(x)
    assert evaluate_segmentation(cost, [3]) == pytest.approx(4.0)
    assert evaluate_segmentation(cost, pd.Series([3])) == pytest.approx(4.0)
    assert evaluate_segmentation(cost, []) == pytest.approx(
        np.sum((x - x.mean()) ** 2)
    )


def test_segmentation_result_from_changepoints():
    x = np.array([1.0, 2.0, 3.0, 10.0, 11.0, 12.0])
    cost = L2Cost().fit(x)
    result = SegmentationResult.from_changepoints(cost, [3], penalty=1.5)

    assert result.n_changepoints == 1
    assert result.total_cost == pytest.approx(4.0 + 1.5)
    assert not result.has_degenerate_segments
    segments = result.segments
    assert list(segments.columns) == ["ilocs", "cost", "mean", "degenerate"]
    assert segments["ilocs"].iloc[1] == pd.Interval(3, 6, closed="left")
    np.testing.assert_allclose(segments["mean"], [2.0, 11.0])
    np.testing.assert_allclose(segments["cost"], [2.0, 2.0])


def test_segmentation_result_degenerate():
    x = np.concatenate((np.zeros(10), np.arange(10.0)))
    cost = GaussianCost().fit(x)
    result = SegmentationResult.from_changepoints(cost, [10], penalty=1.0)
    assert result.has_degenerate_segments
    assert result.segments["degenerate"].to_list() == [True, False]
    assert np.isfinite(result.total_cost)


def test_segmentation_result_is_frozen():
    cost = L2Cost().fit(np.arange(4.0))
    result = SegmentationResult.from_changepoints(cost, [], penalty=1.0)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.penalty = 2.0
