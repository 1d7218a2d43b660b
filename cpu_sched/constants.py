"""
Algorithm identifiers and run defaults shared by the core and the CLI.
"""

from __future__ import annotations

from enum import Enum


class Algorithm(str, Enum):
    NPP = "NPP"  # non-preemptive priority, lower value runs first
    RR = "RR"  # round robin


ALGORITHM_NAMES = tuple(a.value for a in Algorithm)

DEFAULT_ALGORITHM = Algorithm.NPP

# limit == 0 imports every input record.
NO_LIMIT = 0
