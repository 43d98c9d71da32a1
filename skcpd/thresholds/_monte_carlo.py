"""Monte Carlo threshold for the maximum CUSUM statistic."""

import logging
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..config import config
from ..exceptions import InvalidInputError, OperationCancelledError, ReplicateError
from ..utils.numba.stats import cusum_squared_maxima
from ..utils.validation.parameters import check_in_interval, check_larger_than
from ._utils import ALPHA_INTERVAL

logger = logging.getLogger(__name__)


def _simulate_chunk(
    seed_sequence: np.random.SeedSequence, n_replicates: int, n: int, first_index: int
) -> np.ndarray:
    """Simulate squared CUSUM maxima of i.i.d. standard normal series."""
    rng = np.random.default_rng(seed_sequence)
    null_series = rng.standard_normal((n_replicates, n))
    maxima = cusum_squared_maxima(null_series)
    failed = np.flatnonzero(~np.isfinite(maxima))
    if failed.size > 0:
        raise ReplicateError(
            first_index + int(failed[0]),
            f"Monte Carlo replicate {first_index + int(failed[0])} produced a"
            f" non-finite statistic ({maxima[failed[0]]}).",
        )
    return maxima


def simulate_cusum_maxima(
    n: int,
    n_replicates: int = 1000,
    seed: int | None = None,
    n_jobs: int = 1,
    should_stop: Callable[[], bool] | None = None,
) -> np.ndarray:
    """Simulate the null distribution of the squared maximum CUSUM statistic.

    Replicates are i.i.d. standard normal series of length `n`. They are generated
    in chunks of ``config.monte_carlo_chunk_size`` replicates, each chunk with its
    own child seed spawned from `seed`. The result is therefore identical for any
    `n_jobs`.

    Parameters
    ----------
    n : int
        Length of the simulated series. Must be at least 2.
    n_replicates : int, optional (default=1000)
        Number of replicates. Must be at least 1.
    seed : int or None, optional (default=None)
        Seed of the root `np.random.SeedSequence`.
    n_jobs : int, optional (default=1)
        Number of threads simulating chunks concurrently.
    should_stop : callable, optional (default=None)
        Called without arguments before each chunk is collected. If it returns True,
        all results are discarded and `OperationCancelledError` is raised.

    Returns
    -------
    np.ndarray
        Squared maximum CUSUM statistic of each replicate, shape (n_replicates,).

    Raises
    ------
    InvalidInputError
        If `n` is smaller than 2.
    InvalidParameterError
        If `n_replicates` or `n_jobs` is smaller than 1.
    ReplicateError
        If a replicate produces a non-finite statistic.
    OperationCancelledError
        If `should_stop` returns True.
    """
    if n < 2:
        raise InvalidInputError(f"The series length must be at least 2 (n={n}).")
    check_larger_than(1, n_replicates, "n_replicates")
    check_larger_than(1, n_jobs, "n_jobs")

    chunk_size = config.monte_carlo_chunk_size
    n_chunks = int(np.ceil(n_replicates / chunk_size))
    seed_sequences = np.random.SeedSequence(seed).spawn(n_chunks)
    first_indices = [i * chunk_size for i in range(n_chunks)]
    chunk_sizes = [min(chunk_size, n_replicates - start) for start in first_indices]

    logger.debug(
        "Simulating %d CUSUM replicates of length %d in %d chunks on %d threads.",
        n_replicates,
        n,
        n_chunks,
        n_jobs,
    )

    def check_stop():
        if should_stop is not None and should_stop():
            raise OperationCancelledError("Monte Carlo simulation was cancelled.")

    maxima = []
    if n_jobs == 1:
        for seed_sequence, size, start in zip(
            seed_sequences, chunk_sizes, first_indices
        ):
            check_stop()
            maxima.append(_simulate_chunk(seed_sequence, size, n, start))
    else:
        with ThreadPoolExecutor(max_workers=n_jobs) as executor:
            futures = [
                executor.submit(_simulate_chunk, seed_sequence, size, n, start)
                for seed_sequence, size, start in zip(
                    seed_sequences, chunk_sizes, first_indices
                )
            ]
            try:
                for future in futures:
                    check_stop()
                    maxima.append(future.result())
            except Exception:
                for future in futures:
                    future.cancel()
                raise

    return np.concatenate(maxima)


def make_monte_carlo_cusum_threshold(
    n: int,
    alpha: float = 0.05,
    n_replicates: int = 1000,
    seed: int | None = None,
    n_jobs: int = 1,
) -> float:
    """Create a threshold for the squared maximum CUSUM statistic by simulation.

    The threshold is the empirical ``1 - alpha`` quantile of the squared maximum
    CUSUM statistic over `n_replicates` simulated series without changes.

    Parameters
    ----------
    n : int
        Length of the series. Must be at least 2.
    alpha : float, optional (default=0.05)
        False positive level in ``(0, 1)``.
    n_replicates : int, optional (default=1000)
        Number of replicates. Must be at least 1.
    seed : int or None, optional (default=None)
        Seed of the simulation.
    n_jobs : int, optional (default=1)
        Number of threads used for the simulation.

    Returns
    -------
    float
        Threshold on the scale of the squared standardised statistic.
    """
    check_in_interval(ALPHA_INTERVAL, alpha, "alpha")
    maxima = simulate_cusum_maxima(n, n_replicates, seed=seed, n_jobs=n_jobs)
    return float(np.quantile(maxima, 1.0 - alpha))
