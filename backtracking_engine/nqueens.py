"""n-Queens as an instance of the generic backtracking search.

A candidate ``(c0, c1, ..., ck)`` places the queen of row ``i`` in column
``ci``. Two expansion configurations are supported and yield the same
solutions:

- unconstrained (``column_filter=False``): every node gets ``size`` children
  and the pruner checks columns, diagonals and anti-diagonals;
- column-filtered (``column_filter=True``): children skip columns already
  used, so the pruner only checks diagonals and anti-diagonals.

``prune=False`` keeps the same expansion and acceptor but never rejects a
partial candidate, which enumerates every candidate down to full depth.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterator, Literal, Sequence

from .candidate import extend
from .errors import InvalidInput
from .metrics import SearchStats
from .search import SearchMode, SearchProblem, Strategy, compose_acceptor, never_reject, search

ColumnOrder = Literal["left-to-right", "center-first"]

COLUMN_ORDERS: tuple[str, ...] = ("left-to-right", "center-first")

Placement = tuple[int, ...]


@dataclass
class NQueensResult:
    size: int
    placements: list[Placement]
    stats: SearchStats

    @property
    def solution(self) -> Placement | None:
        return self.placements[0] if self.placements else None

    def to_dict(self) -> dict[str, object]:
        return {
            "size": self.size,
            "solutions_found": self.stats.solutions_found,
            "placements": [list(placement) for placement in self.placements],
            "stats": self.stats.to_dict(),
        }


def validate_size(size: object) -> int:
    if isinstance(size, bool) or not isinstance(size, int):
        raise InvalidInput(f"Board size must be an integer, got {size!r}.")
    if size < 0:
        raise InvalidInput("Board size must be >= 0.")
    return size


def _ordered_columns(size: int, column_order: ColumnOrder) -> tuple[int, ...]:
    columns = tuple(range(size))
    if column_order == "left-to-right":
        return columns
    center = (size - 1) / 2
    return tuple(sorted(columns, key=lambda col: (abs(col - center), col)))


def queens_conflict(candidate: Sequence[int], *, check_columns: bool = True) -> bool:
    """True if any two queens in ``candidate`` attack each other.

    Row ``i`` holds a queen in column ``candidate[i]``. Rows never clash.
    Columns are compared only when ``check_columns`` is set.
    """
    for i in range(len(candidate)):
        col_i = candidate[i]
        for j in range(i + 1, len(candidate)):
            col_j = candidate[j]
            if check_columns and col_i == col_j:
                return True
            if i - col_i == j - col_j or i + col_i == j + col_j:
                return True
    return False


@dataclass(frozen=True)
class NQueensProblem:
    size: int
    column_filter: bool = False
    column_order: ColumnOrder = "left-to-right"
    prune: bool = True
    columns: tuple[int, ...] = field(init=False, repr=False, compare=False)
    _accept: Callable[[Placement], bool] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_size(self.size)
        if self.column_order not in COLUMN_ORDERS:
            raise InvalidInput(
                f"Unknown column order {self.column_order!r}; expected one of {COLUMN_ORDERS}."
            )
        object.__setattr__(self, "columns", _ordered_columns(self.size, self.column_order))
        object.__setattr__(self, "_accept", compose_acceptor(self.conflicts, self.size))

    def children(self, candidate: Placement) -> Iterator[Placement]:
        if len(candidate) >= self.size:
            return
        used = set(candidate) if self.column_filter else ()
        for column in self.columns:
            if column not in used:
                yield extend(candidate, column)

    def conflicts(self, candidate: Placement) -> bool:
        # Filtered expansion never repeats a column.
        return queens_conflict(candidate, check_columns=not self.column_filter)

    def reject(self, candidate: Placement) -> bool:
        return self.prune and self.conflicts(candidate)

    def accept(self, candidate: Placement) -> bool:
        return self._accept(candidate)

    def as_search_problem(self) -> SearchProblem:
        return SearchProblem(
            children=self.children,
            reject=self.conflicts if self.prune else never_reject,
            accept=self._accept,
        )


def _run(
    problem: NQueensProblem,
    *,
    mode: SearchMode,
    strategy: Strategy,
    max_solutions: int | None,
) -> NQueensResult:
    result = search(
        problem.as_search_problem(),
        mode=mode,
        strategy=strategy,
        max_solutions=max_solutions,
    )
    return NQueensResult(
        size=problem.size,
        placements=list(result.solutions),
        stats=result.stats,
    )


def solve_nqueens(
    size: int,
    *,
    mode: SearchMode = "collect-all",
    column_filter: bool = False,
    column_order: ColumnOrder = "left-to-right",
    strategy: Strategy = "recursive",
    max_solutions: int | None = None,
) -> NQueensResult:
    """Solve n-Queens with pruning.

    ``size == 0`` has exactly one solution, the empty placement.
    """
    problem = NQueensProblem(
        size,
        column_filter=column_filter,
        column_order=column_order,
    )
    return _run(problem, mode=mode, strategy=strategy, max_solutions=max_solutions)


def brute_force_nqueens(
    size: int,
    *,
    column_filter: bool = False,
    column_order: ColumnOrder = "left-to-right",
    strategy: Strategy = "recursive",
) -> NQueensResult:
    """Enumerate every full candidate and keep the conflict-free ones.

    With ``column_filter=False`` this filters the full cartesian product
    ``range(size) ** size``; with ``column_filter=True`` it filters all
    permutations of ``range(size)``.
    """
    problem = NQueensProblem(
        size,
        column_filter=column_filter,
        column_order=column_order,
        prune=False,
    )
    return _run(problem, mode="collect-all", strategy=strategy, max_solutions=None)


def first_nqueens(
    size: int,
    *,
    column_filter: bool = False,
    column_order: ColumnOrder = "left-to-right",
    strategy: Strategy = "recursive",
) -> Placement | None:
    return solve_nqueens(
        size,
        mode="first-match",
        column_filter=column_filter,
        column_order=column_order,
        strategy=strategy,
    ).solution
