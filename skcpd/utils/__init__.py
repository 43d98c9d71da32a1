"""Utility functions for skcpd."""
