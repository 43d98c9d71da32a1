"""Validation functions for skcpd."""
