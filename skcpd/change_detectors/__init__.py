"""Change detection algorithms."""

from ._binary_segmentation import BinarySegmentation, run_binary_segmentation
from ._cusum_test import (
    CUSUMTest,
    CUSUMTestResult,
    estimate_noise_variance,
    run_cusum_test,
)
from ._optimal_partitioning import OptimalPartitioning, run_optimal_partitioning
from ._pruning import BasePruning, NoPruning, PELTPruning
from ._results import SegmentationResult, changepoints_to_cuts, evaluate_segmentation
from .base import BaseChangeDetector

BASE_CHANGE_DETECTORS = [BaseChangeDetector]
CHANGE_DETECTORS = [BinarySegmentation, CUSUMTest, OptimalPartitioning]

__all__ = [
    "BASE_CHANGE_DETECTORS",
    "CHANGE_DETECTORS",
    "BaseChangeDetector",
    "BasePruning",
    "BinarySegmentation",
    "CUSUMTest",
    "CUSUMTestResult",
    "NoPruning",
    "OptimalPartitioning",
    "PELTPruning",
    "SegmentationResult",
    "changepoints_to_cuts",
    "estimate_noise_variance",
    "evaluate_segmentation",
    "run_binary_segmentation",
    "run_cusum_test",
    "run_optimal_partitioning",
]
