"""Validation functions for input data series."""

import numpy as np
import pandas as pd
from numpy.typing import ArrayLike

from ...exceptions import InvalidInputError


def check_data(
    X: pd.DataFrame | pd.Series | ArrayLike,
    min_length: int,
    min_length_name: str = "min_length",
    allow_missing_values: bool = False,
) -> pd.DataFrame:
    """Check if input data is a valid univariate series.

    Parameters
    ----------
    X : pd.DataFrame, pd.Series, np.ndarray or list
        Input data to check.
    min_length : int
        Minimum number of samples in X.
    min_length_name : str, optional (default="min_length")
        Name of min_length parameter to be shown in the error message.
    allow_missing_values : bool, optional (default=False)
        Whether to allow missing values in X.

    Returns
    -------
    X : pd.DataFrame
        Input data in pd.DataFrame format with a single column.

    Raises
    ------
    InvalidInputError
        If X is multivariate, too short, non-numeric or contains missing or
        infinite values.
    """
    if isinstance(X, np.ndarray) and X.ndim > 2:
        raise InvalidInputError("X must be at most 2-dimensional.")
    X = pd.DataFrame(X)

    if X.shape[1] != 1:
        raise InvalidInputError(
            f"X must be univariate with a single column (X.shape[1]={X.shape[1]})."
        )

    if not all(pd.api.types.is_numeric_dtype(dtype) for dtype in X.dtypes):
        raise InvalidInputError(f"X must be numeric. Got dtypes {list(X.dtypes)}.")

    if not allow_missing_values and X.isna().any(axis=None):
        raise InvalidInputError(
            f"X cannot contain missing values: X.isna().sum()={X.isna().sum().sum()}."
        )

    if not allow_missing_values and np.isinf(X.to_numpy(dtype=float)).any():
        raise InvalidInputError("X cannot contain infinite values.")

    n = X.shape[0]
    if n < min_length:
        raise InvalidInputError(
            f"X must have at least {min_length_name}={min_length} samples"
            + f" (X.shape[0]={n})"
        )

    return X


def as_2d_array(X: ArrayLike, vector_as_column=True, dtype=None) -> np.ndarray:
    """Convert an array-like object to a 2D numpy array.

    Parameters
    ----------
    X : `ArrayLike`
        Array-like object.

    Returns
    -------
    X : `np.ndarray`
        2D numpy array.
    """
    X = np.asarray(X, dtype=dtype)
    if X.ndim == 1:
        X = X.reshape(-1, 1) if vector_as_column else X.reshape(1, -1)
    elif X.ndim > 2:
        raise InvalidInputError("X must be at most 2-dimensional.")
    return X
