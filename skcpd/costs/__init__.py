"""Cost functions for cost-based change detection."""

from ._cost_factory import COST_FAMILIES, make_cost
from ._empirical_distribution_cost import EmpiricalDistributionCost
from ._gaussian_cost import GaussianCost
from ._gaussian_var_cost import GaussianVarCost
from ._l2_cost import L2Cost
from ._linear_trend_cost import LinearTrendCost
from .base import BaseCost

COSTS = [
    EmpiricalDistributionCost,
    GaussianCost,
    GaussianVarCost,
    L2Cost,
    LinearTrendCost,
]

__all__ = ["BaseCost", "COST_FAMILIES", "COSTS", "make_cost"] + [
    cost.__name__ for cost in COSTS
]
