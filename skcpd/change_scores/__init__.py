"""Change scores as interval evaluators."""

from ._cusum import CUSUM
from ._from_cost import ChangeScore, to_change_score

CHANGE_SCORES = [ChangeScore, CUSUM]

__all__ = ["CHANGE_SCORES", "ChangeScore", "CUSUM", "to_change_score"]
