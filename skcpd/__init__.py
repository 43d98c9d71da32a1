"""Offline changepoint detection for univariate time series."""

__version__ = "0.1.0"
