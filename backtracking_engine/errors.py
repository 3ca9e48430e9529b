class BacktrackingError(Exception):
    """Base class for errors raised by backtracking_engine."""


class InvalidInput(BacktrackingError, ValueError):
    """A public entry point received an argument it cannot search with."""


class ExecutionError(BacktrackingError, RuntimeError):
    """A search operation raised or broke its contract; the search was aborted."""

    def __init__(self, operation: str, candidate: tuple, message: str) -> None:
        super().__init__(f"{operation} failed on candidate {candidate!r}: {message}")
        self.operation = operation
        self.candidate = candidate
