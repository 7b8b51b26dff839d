from __future__ import annotations

from enum import StrEnum


class Outcome(StrEnum):
    """Terminal classification of a finished operation.

    `canceled_by_system` means the host environment was torn down mid-wait;
    callers should stop everything and not trust environment state.
    """

    COMPLETED = "completed"
    CANCELED = "canceled"
    CANCELED_BY_SYSTEM = "canceled_by_system"
