"""Dataset generators for skcpd."""

from ._generate_linear_trend import generate_piecewise_linear_data
from ._generate_normal import generate_piecewise_normal_data

GENERATORS = [
    generate_piecewise_linear_data,
    generate_piecewise_normal_data,
]

__all__ = [
    "GENERATORS",
    "generate_piecewise_linear_data",
    "generate_piecewise_normal_data",
]
