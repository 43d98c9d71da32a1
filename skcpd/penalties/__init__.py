"""Penalties for change detection."""

from ._constant_penalties import make_bic_penalty

__all__ = ["make_bic_penalty"]
