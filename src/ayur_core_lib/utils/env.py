"""Environment variable parsing shared by the settings classes."""

import logging
import os
from typing import Callable, TypeVar

logger = logging.getLogger(__name__)

N = TypeVar("N", int, float)


def env_number(name: str, default: N, cast: Callable[[str], N]) -> N:
    """Read a non-negative number from the environment.

    Unset or empty variables give the default. Unparseable or negative values
    also give the default, with a warning naming the variable.
    """
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        logger.warning(f"Invalid {name}: {raw}, using default {default}")
        return default
    if value < 0:
        logger.warning(f"Negative {name}: {raw}, using default {default}")
        return default
    return value
