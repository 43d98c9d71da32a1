"""Results of segmentation algorithms."""

__all__ = ["SegmentationResult", "evaluate_segmentation", "changepoints_to_cuts"]

from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..costs.base import BaseCost
from ..exceptions import InvalidInputError


def changepoints_to_cuts(changepoints: np.ndarray, n_samples: int) -> np.ndarray:
    """Convert changepoints to the ``[start, end)`` cuts of the segments they define.

    Parameters
    ----------
    changepoints : np.ndarray
        Strictly increasing changepoints in ``1, ..., n_samples - 1``. Each
        changepoint is the first index of a new segment.
    n_samples : int
        Length of the series.

    Returns
    -------
    np.ndarray
        Cuts of shape ``(len(changepoints) + 1, 2)`` partitioning ``[0, n_samples)``.
    """
    changepoints = np.asarray(changepoints, dtype=np.int64).reshape(-1)
    if np.any(np.diff(changepoints) <= 0):
        raise InvalidInputError(
            "The changepoints must contain strictly increasing entries."
        )
    if changepoints.size > 0 and (
        changepoints[0] < 1 or changepoints[-1] > n_samples - 1
    ):
        raise InvalidInputError(
            f"The changepoints must be in [1, {n_samples - 1}]. Got {changepoints}."
        )
    breaks = np.concatenate(([0], changepoints, [n_samples])).astype(np.int64)
    return np.column_stack((breaks[:-1], breaks[1:]))


def evaluate_segmentation(
    cost: BaseCost, changepoints: np.ndarray | pd.Series | list
) -> float:
    """Evaluate the unpenalised cost of a segmentation.

    Parameters
    ----------
    cost : BaseCost
        Fitted cost.
    changepoints : np.ndarray, pd.Series or list
        A 1D array with the indices of the change points in the input data.
        Each change point signifies the first index of a new segment.

    Returns
    -------
    float
        The sum of the costs of the segments.
    """
    cost.check_is_fitted()
    if isinstance(changepoints, pd.Series):
        changepoints = changepoints.to_numpy()
    cuts = changepoints_to_cuts(np.asarray(changepoints), cost.n_samples)
    return float(np.sum(cost.evaluate(cuts)))


@dataclass(frozen=True, kw_only=True, eq=False)
class SegmentationResult:
    """Result of a segmentation algorithm.

    Containing:
    - `changepoints`: Sorted changepoints, each the first index of a new segment.
    - `segments`: One row per segment with the columns ``"ilocs"`` (left-closed
      intervals), ``"cost"`` and one column per fitted parameter of the cost.
    - `penalty`: Penalty per changepoint.
    - `total_cost`: Sum of segment costs plus ``penalty * len(changepoints)``.
    - `has_degenerate_segments`: Whether any segment cost was floored.
    - `optimal_costs`: Optimal penalised cost of each prefix ``X[:t]``,
      ``t = 1, ..., n``. Optimal Partitioning only.
    - `previous_changepoints`: Optimal last changepoint before each ``t``, 0 for no
      changepoint. Optimal Partitioning only.
    - `pruning_fraction`: Fraction of cost evaluations saved by pruning. Optimal
      Partitioning only.
    - `splits`: One row per evaluated split candidate. Binary Segmentation only.
    """

    changepoints: np.ndarray
    segments: pd.DataFrame
    penalty: float
    total_cost: float
    has_degenerate_segments: bool
    optimal_costs: np.ndarray | None = None
    previous_changepoints: np.ndarray | None = None
    pruning_fraction: float | None = None
    splits: pd.DataFrame | None = None

    @classmethod
    def from_changepoints(
        cls, cost: BaseCost, changepoints: np.ndarray, penalty: float, **kwargs
    ) -> "SegmentationResult":
        """Create a result by evaluating a fitted cost on the segments.

        Parameters
        ----------
        cost : BaseCost
            Fitted cost used by the algorithm.
        changepoints : np.ndarray
            Sorted changepoints.
        penalty : float
            Penalty per changepoint.
        **kwargs
            Algorithm specific fields of the result.
        """
        changepoints = np.asarray(changepoints, dtype=np.int64).reshape(-1)
        cuts = changepoints_to_cuts(changepoints, cost.n_samples)
        segment_costs = cost.evaluate(cuts)
        params = cost.evaluate_params(cuts)
        degenerate = cost.is_degenerate(cuts)

        segments = pd.DataFrame(params, columns=cost.param_names)
        segments.insert(0, "cost", segment_costs)
        segments.insert(
            0, "ilocs", pd.IntervalIndex.from_arrays(cuts[:, 0], cuts[:, 1], "left")
        )
        segments["degenerate"] = degenerate

        total_cost = float(np.sum(segment_costs) + penalty * changepoints.size)
        return cls(
            changepoints=changepoints,
            segments=segments,
            penalty=penalty,
            total_cost=total_cost,
            has_degenerate_segments=bool(np.any(degenerate)),
            **kwargs,
        )

    @property
    def n_changepoints(self) -> int:
        """Number of changepoints."""
        return self.changepoints.size
