"""Change scores built from segment costs."""

import numpy as np

from ..base import BaseIntervalScorer, PreprocessedSeries
from ..costs.base import BaseCost
from ..exceptions import InvalidParameterError


def to_change_score(scorer: BaseIntervalScorer) -> BaseIntervalScorer:
    """Return `scorer` as a change score.

    Costs are wrapped in `ChangeScore`. Change scores are returned unchanged.
    """
    if not isinstance(scorer, BaseIntervalScorer):
        raise InvalidParameterError(
            f"scorer must be a BaseIntervalScorer. Got {type(scorer)}."
        )
    task = scorer.get_tag("task")
    if task == "change_score":
        return scorer
    if task == "cost":
        return ChangeScore(scorer)
    raise InvalidParameterError(
        f'scorer must be a cost or a change score. Got task "{task}".'
    )


class ChangeScore(BaseIntervalScorer):
    """Likelihood ratio change score derived from a cost.

    For a cut ``[start, split, end]`` the score is the decrease in cost from
    splitting the interval, ``cost(start, end) - cost(start, split) -
    cost(split, end)``. With `L2Cost`, this is the squared `CUSUM` score.

    Parameters
    ----------
    cost : BaseCost
        Cost of a single segment. It is cloned on fit.
    """

    _tags = {
        "task": "change_score",
    }

    def __init__(self, cost: BaseCost):
        self.cost = cost
        super().__init__()

        if not isinstance(cost, BaseCost):
            raise InvalidParameterError(f"cost must be a BaseCost. Got {type(cost)}.")
        self.clone_tags(cost, ["distribution_type"])

    @property
    def _active_cost(self) -> BaseCost:
        return self.cost_ if self.is_fitted else self.cost

    @property
    def min_size(self) -> int:
        """Minimum size of each side of a split, inherited from the cost."""
        return self._active_cost.min_size

    def get_model_size(self, p: int) -> int:
        """Number of parameters of the cost per segment."""
        return self._active_cost.get_model_size(p)

    def _fit(self, X: PreprocessedSeries, y=None):
        self.cost_: BaseCost = self.cost.clone().fit(X)
        return self

    def _evaluate(self, cuts: np.ndarray) -> np.ndarray:
        whole = self.cost_.evaluate(cuts[:, [0, 2]])
        before = self.cost_.evaluate(cuts[:, [0, 1]])
        after = self.cost_.evaluate(cuts[:, [1, 2]])
        scores = whole - before - after
        # Round-off in the prefix sums can give tiny negative scores.
        scores[(scores < 0.0) & (scores > -1e-8)] = 0.0
        return scores

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator."""
        from skcpd.costs import GaussianCost, L2Cost

        return [{"cost": L2Cost()}, {"cost": GaussianCost()}]
