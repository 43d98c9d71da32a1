"""Dispatch njit decorator used to isolate numba.

Default arguments to numba's decorators are read from the ``NUMBA_CACHE``,
``NUMBA_FASTMATH`` and ``NUMBA_PARALLEL`` environment variables.
"""

from os import environ

from numba import njit as numba_njit

__all__ = ["njit", "read_boolean_env_var"]


def read_boolean_env_var(name, default_value):
    """Read a boolean environment variable."""
    truthy_strings = ["", "1", "true", "True", "TRUE"]
    falsy_strings = ["0", "false", "False", "FALSE"]

    env_value = environ.get(name)
    if env_value is None:
        return default_value

    if env_value in truthy_strings:
        return True
    elif env_value in falsy_strings:
        return False
    else:
        raise ValueError(
            f"Invalid value for boolean environment variable '{name}': {env_value}"
        )


numba_cache = read_boolean_env_var("NUMBA_CACHE", default_value=True)
numba_parallel = read_boolean_env_var("NUMBA_PARALLEL", default_value=False)
numba_fastmath = read_boolean_env_var("NUMBA_FASTMATH", default_value=False)


def njit(*args, **kwargs):
    """Dispatch njit decorator based on environment variables.

    Can be used both bare, ``@njit``, and with arguments, ``@njit(nogil=True)``.
    """
    kwargs.setdefault("cache", numba_cache)
    kwargs.setdefault("fastmath", numba_fastmath)
    kwargs.setdefault("parallel", numba_parallel)
    return numba_njit(*args, **kwargs)
