"""Pruning strategies for the optimal partitioning dynamic program."""

__all__ = ["BasePruning", "NoPruning", "PELTPruning"]

import numpy as np
from sktime.base import BaseObject

from ..utils.validation.parameters import check_larger_than


class BasePruning(BaseObject):
    """Base class for pruning of candidate segment starts.

    After the optimal cost of the prefix ending at ``t`` is computed, a pruning
    strategy marks candidate starts that can never be the optimal last changepoint
    for a later end. Marked starts are removed from the candidate set
    `min_segment_length` steps later, when ``t`` itself becomes a valid changepoint.
    """

    _tags = {
        "object_type": "pruning",
    }

    def prune(
        self, candidate_costs: np.ndarray, optimal_cost: float, penalty: float
    ) -> np.ndarray:
        """Mark candidate starts to prune.

        Parameters
        ----------
        candidate_costs : np.ndarray
            Penalised cost of each candidate start as the last changepoint before the
            current end.
        optimal_cost : float
            The minimum of `candidate_costs`.
        penalty : float
            Penalty per changepoint.

        Returns
        -------
        np.ndarray
            Boolean mask, True for the candidates to prune.
        """
        raise NotImplementedError("abstract method")


class NoPruning(BasePruning):
    """Keep every candidate start. Gives plain optimal partitioning."""

    def prune(
        self, candidate_costs: np.ndarray, optimal_cost: float, penalty: float
    ) -> np.ndarray:
        return np.zeros(candidate_costs.shape[0], dtype=bool)


class PELTPruning(BasePruning):
    """Pruning of the pruned exact linear time (PELT) algorithm.

    A candidate start ``s`` is pruned at end ``t`` if
    ``F(s) + cost(s, t) + penalty > F(t) + |F(t)| * margin + penalty - split_cost``,
    where ``F`` is the optimal penalised cost of a prefix [1]_. The pruning is exact
    when ``cost(s, u) + cost(u, t) + split_cost <= cost(s, t)`` for all splits ``u``,
    which holds with ``split_cost=0`` for all costs in skcpd.

    Parameters
    ----------
    margin : float, optional (default=0.0)
        Relative margin added to the pruning threshold. A positive margin prunes
        less, which protects against imprecise costs.
    split_cost : float, optional (default=0.0)
        Lower bound on the cost decrease from splitting a segment.

    References
    ----------
    .. [1] Killick, R., Fearnhead, P., & Eckley, I. A. (2012). Optimal detection of
    changepoints with a linear computational cost. Journal of the American Statistical
    Association, 107(500), 1590-1598.
    """

    def __init__(self, margin: float = 0.0, split_cost: float = 0.0):
        self.margin = margin
        self.split_cost = split_cost
        super().__init__()
        check_larger_than(0.0, margin, "margin")

    def prune(
        self, candidate_costs: np.ndarray, optimal_cost: float, penalty: float
    ) -> np.ndarray:
        threshold = (
            optimal_cost
            + np.abs(optimal_cost) * self.margin
            + penalty
            - self.split_cost
        )
        return candidate_costs > threshold

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the pruning strategy."""
        return [{}, {"margin": 0.1}]
