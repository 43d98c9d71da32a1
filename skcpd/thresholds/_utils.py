"""Shared validation for threshold calibration."""

import pandas as pd

ALPHA_INTERVAL = pd.Interval(0.0, 1.0, closed="neither")
