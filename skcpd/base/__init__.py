"""Base classes for detectors and other objects in skcpd."""

from ._base_detector import BaseDetector
from ._base_interval_scorer import BaseIntervalScorer
from ._preprocessed_series import PreprocessedSeries

__all__ = ["BaseDetector", "BaseIntervalScorer", "PreprocessedSeries"]
