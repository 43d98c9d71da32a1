"""Binary segmentation algorithm for multiple changepoint detection."""

__all__ = ["BinarySegmentation", "run_binary_segmentation"]

import logging

import numpy as np
import pandas as pd

from ..change_scores import ChangeScore
from ..costs import L2Cost, make_cost
from ..costs.base import BaseCost
from ..penalties import make_bic_penalty
from ..utils.validation.data import check_data
from ..utils.validation.interval_scorer import check_interval_scorer
from ..utils.validation.parameters import check_larger_than
from ..utils.validation.penalties import check_penalty
from ._results import SegmentationResult
from .base import BaseChangeDetector

logger = logging.getLogger(__name__)


def run_binary_segmentation(
    cost: BaseCost,
    penalty: float,
    min_segment_length: int = 1,
) -> SegmentationResult:
    """Run the binary segmentation algorithm.

    Starting from the whole series, each segment ``[start, end)`` on a worklist is
    split at the ``split`` minimising the gain
    ``cost(start, split) + cost(split, end) - cost(start, end) + penalty``.
    The split is accepted if the gain is strictly negative, and both halves are
    pushed back on the worklist. Ties are broken by the smallest split.

    The algorithm is greedy. A change can be masked if the best single split of a
    segment with several changes shows no gain, even though the best pair of splits
    would.

    Parameters
    ----------
    cost : BaseCost
        Fitted cost.
    penalty : float
        Penalty per changepoint.
    min_segment_length : int, optional (default=1)
        Minimum segment length. The effective minimum is
        ``max(min_segment_length, cost.min_size)``.

    Returns
    -------
    SegmentationResult
        The segmentation. Every evaluated segment is recorded in
        `SegmentationResult.splits` with the columns ``"start"``, ``"end"``,
        ``"argmin"``, ``"gain"`` and ``"accepted"``.
    """
    cost.check_is_fitted()
    penalty = check_penalty(penalty, "penalty", "run_binary_segmentation", False)
    check_larger_than(1, min_segment_length, "min_segment_length")
    n_samples = cost.n_samples
    min_size = max(min_segment_length, cost.min_size)

    change_score = ChangeScore(cost).fit(cost.series)

    changepoints = []
    starts, ends, argmins, gains, accepted = [], [], [], [], []
    stack = [(0, n_samples)]
    while stack:
        start, end = stack.pop()
        if end - start < 2 * min_size:
            continue

        splits = np.arange(start + min_size, end - min_size + 1)
        cuts = np.column_stack(
            (np.repeat(start, splits.size), splits, np.repeat(end, splits.size))
        )
        split_gains = penalty - change_score.evaluate(cuts)
        argmin = np.argmin(split_gains)
        split = int(splits[argmin])
        gain = float(split_gains[argmin])

        starts.append(start)
        ends.append(end)
        argmins.append(split)
        gains.append(gain)
        accepted.append(gain < 0.0)

        if gain < 0.0:
            changepoints.append(split)
            # Right half first so the left half is processed next.
            stack.append((split, end))
            stack.append((start, split))

    changepoints = np.sort(np.array(changepoints, dtype=np.int64))
    splits_table = pd.DataFrame(
        {
            "start": np.array(starts, dtype=np.int64),
            "end": np.array(ends, dtype=np.int64),
            "argmin": np.array(argmins, dtype=np.int64),
            "gain": np.array(gains, dtype=np.float64),
            "accepted": np.array(accepted, dtype=bool),
        }
    )
    logger.debug(
        "Binary segmentation on n=%d with penalty=%.4f: %d changepoints from %d"
        " evaluated segments.",
        n_samples,
        penalty,
        changepoints.size,
        len(splits_table),
    )
    return SegmentationResult.from_changepoints(
        cost, changepoints, penalty, splits=splits_table
    )


class BinarySegmentation(BaseChangeDetector):
    """Binary segmentation algorithm for multiple changepoint detection.

    Binary segmentation [1]_ recursively splits the data at the single changepoint
    that decreases the penalised cost the most, until no split decreases it. It is a
    greedy approximation to the penalised optimal partitioning problem solved by
    `OptimalPartitioning`, and its penalised cost is never lower.

    Parameters
    ----------
    cost : BaseCost or str, optional, default=`L2Cost`
        The cost to use. A string is passed to `make_cost`, i.e., one of ``"mean"``,
        ``"variance"``, ``"meanvar"``, ``"slope"`` or ``"nonparametric"``.
    penalty : float, optional
        The penalty per changepoint. It must be non-negative. If `None`, the penalty
        is set to `make_bic_penalty(n=X.shape[0], n_params=cost.get_model_size(1))`,
        where ``X`` is the input data to `predict` changepoints in.
    min_segment_length : int, optional, default=1
        Minimum length of a segment. The effective minimum is
        ``max(min_segment_length, cost.min_size)``.

    References
    ----------
    .. [1] Scott, A. J., & Knott, M. (1974). A cluster analysis method for grouping
       means in the analysis of variance. Biometrics, 30(3), 507-512.

    Examples
    --------
    >>> from skcpd.change_detectors import BinarySegmentation
    >>> from skcpd.datasets import generate_piecewise_normal_data
    >>> df = generate_piecewise_normal_data(
    ...     means=[0, 10, 0], lengths=[100, 100, 100], seed=4
    ... )
    >>> detector = BinarySegmentation(penalty=25.0)
    >>> detector.fit_predict(df)
       ilocs
    0    100
    1    200
    """

    _tags = {
        "fit_is_empty": True,
    }

    def __init__(
        self,
        cost: BaseCost | str | None = None,
        penalty: float | None = None,
        min_segment_length: int = 1,
    ):
        self.cost = cost
        self.penalty = penalty
        self.min_segment_length = min_segment_length
        super().__init__()

        _cost = L2Cost() if cost is None else cost
        if isinstance(_cost, str):
            _cost = make_cost(_cost)
        check_interval_scorer(
            _cost, "cost", "BinarySegmentation", required_tasks=["cost"]
        )
        self._cost = _cost.clone()

        check_penalty(penalty, "penalty", "BinarySegmentation")
        check_larger_than(1, min_segment_length, "min_segment_length")

        self.clone_tags(self._cost, ["distribution_type"])

    def _predict(self, X: pd.DataFrame | pd.Series) -> pd.DataFrame:
        """Detect events in test/deployment data.

        Parameters
        ----------
        X : pd.DataFrame
            Time series to detect change points in.

        Returns
        -------
        y_sparse : pd.DataFrame
            A `pd.DataFrame` with a range index and one column:
            * ``"ilocs"`` - integer locations of the changepoints.

        Attributes
        ----------
        fitted_cost : BaseCost
            The fitted cost function.
        fitted_penalty : float
            The user-specified penalty or the fitted BIC penalty.
        result_ : SegmentationResult
            The segmentation, including the per-split diagnostics in
            ``result_.splits``.
        """
        X = check_data(X, min_length=2, min_length_name="2")
        self.fitted_cost: BaseCost = self._cost.clone()
        self.fitted_cost.fit(X)

        if self.penalty is None:
            self.fitted_penalty = make_bic_penalty(
                n_params=self.fitted_cost.get_model_size(1), n=X.shape[0]
            )
        else:
            self.fitted_penalty = float(self.penalty)

        self.result_ = run_binary_segmentation(
            self.fitted_cost, self.fitted_penalty, self.min_segment_length
        )
        return self._format_sparse_output(self.result_.changepoints)

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator.

        Parameters
        ----------
        parameter_set : str, default="default"
            Name of the set of test parameters to return, for use in tests. If no
            special parameters are defined for a value, will return `"default"` set.

        Returns
        -------
        params : dict or list of dict, default = {}
            Parameters to create testing instances of the class
            Each dict are parameters to construct an "interesting" test instance, i.e.,
            `MyClass(**params)` or `MyClass(**params[i])` creates a valid test instance.
            `create_test_instance` uses the first (or only) dictionary in `params`
        """
        from skcpd.costs import GaussianCost, L2Cost

        params = [
            {"cost": L2Cost(), "penalty": 20.0},
            {"cost": GaussianCost(), "min_segment_length": 5},
            {"cost": "nonparametric", "penalty": 30.0},
        ]
        return params
