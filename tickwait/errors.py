from __future__ import annotations

DISPLAY_NAME = "[tickwait]"


class TickwaitError(Exception):
    pass


class OperationArgumentError(TickwaitError, ValueError):
    """Invalid arguments for a wait operation.

    Raised at the call site, before any operation is created or registered.
    """

    def __init__(self, message: str) -> None:
        super().__init__(f"{DISPLAY_NAME} Assertion failed: {message}")


class OperationTerminatedError(TickwaitError, RuntimeError):
    """An operation was resumed after it already produced its outcome."""
