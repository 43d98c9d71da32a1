"""Validation functions for interval scorers."""

from ...base import BaseIntervalScorer
from ...exceptions import InvalidParameterError


def check_interval_scorer(
    scorer: BaseIntervalScorer,
    arg_name: str,
    caller_name: str,
    required_tasks: list | None = None,
) -> None:
    """Check that `scorer` is an interval scorer with one of `required_tasks`."""
    if not isinstance(scorer, BaseIntervalScorer):
        raise InvalidParameterError(
            f"`{arg_name}` of {caller_name} must be a BaseIntervalScorer."
            f" Got {type(scorer)}."
        )
    task = scorer.get_tag("task")
    if required_tasks and task not in required_tasks:
        allowed = " or ".join(f'"{required}"' for required in required_tasks)
        raise InvalidParameterError(
            f"{caller_name} requires `{arg_name}` to have task {allowed}."
            f' Got {type(scorer).__name__} with task "{task}".'
        )
