"""Optimal partitioning for penalised multiple changepoint detection."""

__all__ = ["OptimalPartitioning", "run_optimal_partitioning"]

import logging
from collections.abc import Callable

import numpy as np
import pandas as pd

from ..costs import L2Cost, make_cost
from ..costs.base import BaseCost
from ..exceptions import InvalidParameterError, OperationCancelledError
from ..penalties import make_bic_penalty
from ..utils.numba import njit
from ..utils.validation.data import check_data
from ..utils.validation.interval_scorer import check_interval_scorer
from ..utils.validation.parameters import check_larger_than
from ..utils.validation.penalties import check_penalty
from ._pruning import BasePruning, NoPruning
from ._results import SegmentationResult
from .base import BaseChangeDetector

logger = logging.getLogger(__name__)


@njit
def get_changepoints(prev_cpts: np.ndarray) -> np.ndarray:
    changepoints = []
    i = len(prev_cpts) - 1
    while i >= 0:
        cpt_i = prev_cpts[i]
        changepoints.append(cpt_i)
        i = cpt_i - 1
    return np.array(changepoints[-2::-1])  # Remove the artificial changepoint at 0.


def run_optimal_partitioning(
    cost: BaseCost,
    penalty: float,
    min_segment_length: int = 1,
    pruning: BasePruning | None = None,
    should_stop: Callable[[], bool] | None = None,
) -> SegmentationResult:
    """Run the optimal partitioning algorithm.

    Solves the penalised segmentation problem exactly by the recursion
    ``F(0) = -penalty`` and ``F(t) = min_s F(s) + cost(s, t) + penalty``, where
    ``s`` ranges over the admissible last changepoints before ``t``. The minimiser,
    with ties broken by the smallest ``s``, is stored as back-pointer, and the
    changepoints are recovered by following the back-pointers from ``n``.

    Contract:
    - The `cost` is never evaluated on intervals shorter than
      ``max(min_segment_length, cost.min_size)``.

    Parameters
    ----------
    cost : BaseCost
        Fitted cost.
    penalty : float
        Penalty per changepoint.
    min_segment_length : int, optional (default=1)
        Minimum segment length. The effective minimum is
        ``max(min_segment_length, cost.min_size)``.
    pruning : BasePruning, optional (default=None)
        Pruning strategy for the candidate starts. `None` means `NoPruning`.
    should_stop : callable, optional (default=None)
        Called without arguments before each end ``t`` is processed. If it returns
        True, the run is aborted with `OperationCancelledError`.

    Returns
    -------
    SegmentationResult
        The segmentation, including `optimal_costs` ``F(1), ..., F(n)``,
        `previous_changepoints` and `pruning_fraction`.

    Raises
    ------
    InvalidParameterError
        If the effective minimum segment length exceeds the number of samples.
    OperationCancelledError
        If `should_stop` returns True.
    """
    cost.check_is_fitted()
    penalty = check_penalty(penalty, "penalty", "run_optimal_partitioning", False)
    check_larger_than(1, min_segment_length, "min_segment_length")
    pruning = NoPruning() if pruning is None else pruning
    if not isinstance(pruning, BasePruning):
        raise InvalidParameterError(
            f"pruning must be a BasePruning. Got {type(pruning)}."
        )

    n_samples = cost.n_samples
    min_size = max(min_segment_length, cost.min_size)
    if min_size > n_samples:
        raise InvalidParameterError(
            f"The minimum segment length ({min_size}) cannot be larger than the"
            f" number of samples ({n_samples})."
        )

    opt_cost = np.concatenate((np.array([-penalty]), np.full(n_samples, np.inf)))
    # prev_cpts[t - 1] is the optimal last changepoint before end t.
    prev_cpts = np.zeros(n_samples, dtype=np.int64)

    # Evolving set of admissible segment starts.
    cost_eval_starts = np.array([], dtype=np.int64)
    # Starts marked for pruning at end t are removed at end t + min_size.
    pruning_indices = [np.array([], dtype=np.int64) for _ in range(min_size)]

    n_cost_evals = 0
    n_unpruned_cost_evals = 0
    n_admissible_starts = 0
    for end in range(min_size, n_samples + 1):
        if should_stop is not None and should_stop():
            raise OperationCancelledError(
                f"Optimal partitioning was cancelled at t={end}."
            )

        starts_to_prune = pruning_indices[end % min_size]
        if starts_to_prune.size > 0:
            cost_eval_starts = cost_eval_starts[
                ~np.isin(cost_eval_starts, starts_to_prune)
            ]

        # Starts in (0, min_size) would leave a first segment that is too short.
        latest_start = end - min_size
        if latest_start == 0 or latest_start >= min_size:
            cost_eval_starts = np.append(cost_eval_starts, latest_start)
            n_admissible_starts += 1

        cost_eval_ends = np.repeat(end, cost_eval_starts.size)
        interval_costs = cost.evaluate(
            np.column_stack((cost_eval_starts, cost_eval_ends))
        )
        n_cost_evals += cost_eval_starts.size
        n_unpruned_cost_evals += n_admissible_starts

        candidate_opt_costs = opt_cost[cost_eval_starts] + interval_costs + penalty
        argmin = np.argmin(candidate_opt_costs)
        opt_cost[end] = candidate_opt_costs[argmin]
        prev_cpts[end - 1] = cost_eval_starts[argmin]

        pruned = pruning.prune(candidate_opt_costs, opt_cost[end], penalty)
        pruning_indices[end % min_size] = cost_eval_starts[pruned]

    pruning_fraction = (
        1.0 - n_cost_evals / n_unpruned_cost_evals
        if n_unpruned_cost_evals > 0
        else 0.0
    )
    changepoints = get_changepoints(prev_cpts).astype(np.int64)

    logger.debug(
        "Optimal partitioning on n=%d with penalty=%.4f: %d changepoints,"
        " pruning fraction %.3f.",
        n_samples,
        penalty,
        changepoints.size,
        pruning_fraction,
    )
    return SegmentationResult.from_changepoints(
        cost,
        changepoints,
        penalty,
        optimal_costs=opt_cost[1:],
        previous_changepoints=prev_cpts,
        pruning_fraction=pruning_fraction,
    )


class OptimalPartitioning(BaseChangeDetector):
    """Optimal partitioning for penalised multiple changepoint detection.

    Implements the optimal partitioning algorithm [1]_, which finds the segmentation
    minimising the sum of segment costs plus a penalty per changepoint exactly with
    a dynamic program over the series. The candidate starts can optionally be
    pruned by `PELTPruning` [2]_, which gives the same solution with fewer cost
    evaluations. With a minimum segment length above one, the pruning is deferred to
    remain exact [3]_.

    Parameters
    ----------
    cost : BaseCost or str, optional, default=`L2Cost`
        The cost to use. A string is passed to `make_cost`, i.e., one of ``"mean"``,
        ``"variance"``, ``"meanvar"``, ``"slope"`` or ``"nonparametric"``.
    penalty : float, optional
        The penalty per changepoint. It must be non-negative. If `None`, the penalty
        is set to `make_bic_penalty(n=X.shape[0], n_params=cost.get_model_size(1))`,
        where ``X`` is the input data to `predict` changepoints in. With a zero
        penalty and the L2 cost, every observation of a series without ties becomes
        its own segment.
    min_segment_length : int, optional, default=1
        Minimum length of a segment. The effective minimum is
        ``max(min_segment_length, cost.min_size)``.
    pruning : BasePruning, optional, default=`NoPruning`
        Pruning strategy for the candidate starts, `NoPruning` or `PELTPruning`.

    References
    ----------
    .. [1] Jackson, B., Scargle, J. D., Barnes, D., Arabhi, S., Alt, A., Gioumousis,
    P., ... & Tsai, T. T. (2005). An algorithm for optimal partitioning of data on an
    interval. IEEE Signal Processing Letters, 12(2), 105-108.

    .. [2] Killick, R., Fearnhead, P., & Eckley, I. A. (2012). Optimal detection of
    changepoints with a linear computational cost. Journal of the American Statistical
    Association, 107(500), 1590-1598.

    .. [3] Bakka, Kristin Benedicte (2018). Changepoint model selection in Gaussian data
    by maximization of approximate Bayes Factors with the Pruned Exact Linear Time
    algorithm. Master's thesis, Norwegian University of Science and Technology (NTNU).

    Examples
    --------
    >>> from skcpd.change_detectors import OptimalPartitioning, PELTPruning
    >>> from skcpd.datasets import generate_piecewise_normal_data
    >>> df = generate_piecewise_normal_data(
    ...     means=[0, 10, 0], lengths=[100, 100, 100], seed=4
    ... )
    >>> detector = OptimalPartitioning(penalty=25.0, pruning=PELTPruning())
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
        pruning: BasePruning | None = None,
    ):
        self.cost = cost
        self.penalty = penalty
        self.min_segment_length = min_segment_length
        self.pruning = pruning
        super().__init__()

        _cost = L2Cost() if cost is None else cost
        if isinstance(_cost, str):
            _cost = make_cost(_cost)
        check_interval_scorer(
            _cost, "cost", "OptimalPartitioning", required_tasks=["cost"]
        )
        self._cost = _cost.clone()

        check_penalty(penalty, "penalty", "OptimalPartitioning")
        check_larger_than(1, min_segment_length, "min_segment_length")
        if pruning is not None and not isinstance(pruning, BasePruning):
            raise InvalidParameterError(
                f"pruning must be a BasePruning. Got {type(pruning)}."
            )
        self._pruning = NoPruning() if pruning is None else pruning.clone()

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
            The segmentation, including the optimal costs and back-pointers.
        scores : pd.Series
            The optimal penalised cost of each prefix of `X`, indexed as `X`.
        """
        X = check_data(
            X,
            min_length=max(2, self.min_segment_length),
            min_length_name="max(2, min_segment_length)",
        )
        self.fitted_cost: BaseCost = self._cost.clone()
        self.fitted_cost.fit(X)

        if self.penalty is None:
            self.fitted_penalty = make_bic_penalty(
                n_params=self.fitted_cost.get_model_size(1), n=X.shape[0]
            )
        else:
            self.fitted_penalty = float(self.penalty)

        self.result_ = run_optimal_partitioning(
            self.fitted_cost,
            self.fitted_penalty,
            min_segment_length=self.min_segment_length,
            pruning=self._pruning,
        )
        self.scores = pd.Series(
            self.result_.optimal_costs, index=X.index, name="score"
        )
        return self._format_sparse_output(self.result_.changepoints)

    @classmethod
    def get_test_params(cls, parameter_set="default"):
        """Return testing parameter settings for the estimator.

        Parameters
        ----------
        parameter_set : str, default="default"
            Name of the set of test parameters to return, for use in tests. If no
            special parameters are defined for a value, will return ``"default"`` set.

        Returns
        -------
        params : dict or list of dict, default = {}
            Parameters to create testing instances of the class
            Each dict are parameters to construct an "interesting" test instance, i.e.,
            `MyClass(**params)` or `MyClass(**params[i])` creates a valid test instance.
            `create_test_instance` uses the first (or only) dictionary in `params`
        """
        from skcpd.change_detectors import PELTPruning
        from skcpd.costs import L2Cost

        params = [
            {"cost": L2Cost(), "penalty": 20.0, "min_segment_length": 5},
            {"cost": L2Cost(), "penalty": 10.0, "pruning": PELTPruning()},
            {"cost": "meanvar", "min_segment_length": 3, "pruning": PELTPruning()},
        ]
        return params
