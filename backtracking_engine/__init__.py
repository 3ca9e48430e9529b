"""Backtracking engine package exports."""

import logging

from .candidate import ROOT, Candidate
from .errors import BacktrackingError, ExecutionError, InvalidInput
from .metrics import SearchStats
from .nqueens import (
    NQueensProblem,
    NQueensResult,
    brute_force_nqueens,
    first_nqueens,
    queens_conflict,
    solve_nqueens,
)
from .search import (
    SearchProblem,
    SearchResult,
    compose_acceptor,
    never_reject,
    search,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "ROOT",
    "BacktrackingError",
    "Candidate",
    "ExecutionError",
    "InvalidInput",
    "NQueensProblem",
    "NQueensResult",
    "SearchProblem",
    "SearchResult",
    "SearchStats",
    "brute_force_nqueens",
    "compose_acceptor",
    "first_nqueens",
    "never_reject",
    "queens_conflict",
    "search",
    "solve_nqueens",
]
