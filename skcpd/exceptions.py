"""Exceptions and warnings raised by skcpd."""

__all__ = [
    "InvalidInputError",
    "InvalidParameterError",
    "NonConvergenceWarning",
    "OperationCancelledError",
    "ReplicateError",
]


class InvalidInputError(ValueError):
    """Raised when input data or cuts are invalid.

    Examples are too short series, missing values, multivariate input and segments
    that are empty, reversed or out of range.
    """


class InvalidParameterError(ValueError):
    """Raised when a parameter is outside its valid domain."""


class NonConvergenceWarning(UserWarning):
    """Warning issued when a simulated threshold rests on too few tail samples."""


class ReplicateError(RuntimeError):
    """Raised when a Monte Carlo replicate fails.

    Parameters
    ----------
    replicate_index : int
        Index of the first failed replicate.
    message : str, optional
        Description of the failure.
    """

    def __init__(self, replicate_index: int, message: str | None = None):
        self.replicate_index = replicate_index
        if message is None:
            message = f"Monte Carlo replicate {replicate_index} failed."
        super().__init__(message)


class OperationCancelledError(RuntimeError):
    """Raised when a long-running operation is cancelled by the caller."""
