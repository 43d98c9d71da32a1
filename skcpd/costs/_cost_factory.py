"""Factory for getting cost functions from model family names."""

from ..exceptions import InvalidParameterError
from ._empirical_distribution_cost import EmpiricalDistributionCost
from ._gaussian_cost import GaussianCost
from ._gaussian_var_cost import GaussianVarCost
from ._l2_cost import L2Cost
from ._linear_trend_cost import LinearTrendCost
from .base import BaseCost

COST_FAMILIES = {
    "mean": L2Cost,
    "variance": GaussianVarCost,
    "meanvar": GaussianCost,
    "slope": LinearTrendCost,
    "nonparametric": EmpiricalDistributionCost,
}


def make_cost(family: str, **kwargs) -> BaseCost:
    """Create a cost for a model family.

    Parameters
    ----------
    family : {"mean", "variance", "meanvar", "slope", "nonparametric"}
        Model family of the segments.

        * ``"mean"``: `L2Cost`, change in mean with known variance.
        * ``"variance"``: `GaussianVarCost`, change in variance with known mean.
        * ``"meanvar"``: `GaussianCost`, change in mean and variance.
        * ``"slope"``: `LinearTrendCost`, change in intercept and slope.
        * ``"nonparametric"``: `EmpiricalDistributionCost`, change in distribution.

    **kwargs
        Configuration passed to the cost constructor, e.g. ``variance`` for
        ``"mean"`` or ``n_quantiles`` for ``"nonparametric"``.

    Returns
    -------
    BaseCost
        Unfitted cost.

    Raises
    ------
    InvalidParameterError
        If `family` is unknown.
    """
    if family not in COST_FAMILIES:
        raise InvalidParameterError(
            f"Unknown model family '{family}'."
            f" Must be one of {list(COST_FAMILIES)}."
        )
    return COST_FAMILIES[family](**kwargs)
