"""Detection thresholds for the CUSUM test."""

from ._asymptotic import make_asymptotic_cusum_threshold
from ._calibration import (
    THRESHOLD_METHODS,
    ThresholdCalibration,
    calibrate_cusum_threshold,
)
from ._monte_carlo import make_monte_carlo_cusum_threshold, simulate_cusum_maxima

__all__ = [
    "THRESHOLD_METHODS",
    "ThresholdCalibration",
    "calibrate_cusum_threshold",
    "make_asymptotic_cusum_threshold",
    "make_monte_carlo_cusum_threshold",
    "simulate_cusum_maxima",
]
