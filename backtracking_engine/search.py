"""Generic depth-first backtracking over an implicit tree of candidates.

A problem is three pure operations on candidates:

- ``children(candidate)`` returns a fresh, finite iterable of one-step
  extensions, in the order they are to be explored.
- ``reject(candidate)`` is true when no extension of ``candidate`` can be a
  solution. It must be prefix-closed: if it rejects a candidate it rejects
  every extension of it, otherwise skipping the subtree loses solutions.
- ``accept(candidate)`` is true when the candidate is a complete, feasible
  solution. Build it with :func:`compose_acceptor` so it reuses the same
  feasibility predicate as ``reject``.

Each node goes through ``reject`` first, then ``accept``; only nodes that are
neither are expanded. Accepted nodes are leaves.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from time import perf_counter
from typing import Callable, Iterable, Iterator, Literal

from .candidate import ROOT, Candidate, is_child_of, is_complete
from .errors import ExecutionError, InvalidInput
from .metrics import SearchStats

logger = logging.getLogger(__name__)

SearchMode = Literal["collect-all", "first-match"]
Strategy = Literal["recursive", "iterative"]

Expansion = Callable[[Candidate], Iterable[Candidate]]
Predicate = Callable[[Candidate], bool]

SEARCH_MODES: tuple[str, ...] = ("collect-all", "first-match")
STRATEGIES: tuple[str, ...] = ("recursive", "iterative")


class NodeState(Enum):
    REJECTED = "rejected"
    ACCEPTED = "accepted"
    EXPAND = "expand"


def never_reject(candidate: Candidate) -> bool:
    """Pruner that never rejects; turns the search into full enumeration."""
    return False


def compose_acceptor(reject: Predicate, target_depth: int) -> Predicate:
    """Build ``accept`` from a feasibility predicate and the target depth.

    The returned predicate is true iff the candidate has exactly
    ``target_depth`` choices and ``reject`` does not rule it out.
    """

    def accept(candidate: Candidate) -> bool:
        return is_complete(candidate, target_depth) and not reject(candidate)

    return accept


@dataclass(frozen=True)
class SearchProblem:
    children: Expansion
    reject: Predicate
    accept: Predicate

    @classmethod
    def from_predicate(
        cls,
        children: Expansion,
        conflicts: Predicate,
        target_depth: int,
        *,
        prune: bool = True,
    ) -> SearchProblem:
        """Wire a problem whose acceptor composes ``conflicts``.

        With ``prune=False`` the engine is given :func:`never_reject` as its
        pruner, but the acceptor still checks ``conflicts``: a full solution
        means the same thing whether or not subtrees are cut early.
        """
        return cls(
            children=children,
            reject=conflicts if prune else never_reject,
            accept=compose_acceptor(conflicts, target_depth),
        )


@dataclass
class SearchResult:
    mode: SearchMode
    solutions: list[Candidate]
    stats: SearchStats = field(default_factory=SearchStats)

    @property
    def solution(self) -> Candidate | None:
        return self.solutions[0] if self.solutions else None

    def to_dict(self) -> dict[str, object]:
        return {
            "mode": self.mode,
            "solutions_found": self.stats.solutions_found,
            "solutions": [list(solution) for solution in self.solutions],
            "stats": self.stats.to_dict(),
        }


class _Walk:
    """State of one search run, shared by both traversal strategies."""

    def __init__(self, problem: SearchProblem, limit: int | None) -> None:
        self.problem = problem
        self.limit = limit
        self.stats = SearchStats()
        self.solutions: list[Candidate] = []
        self.halted = False

    def _call(self, operation: str, function: Predicate, candidate: Candidate) -> bool:
        try:
            return bool(function(candidate))
        except ExecutionError:
            raise
        except Exception as exc:
            raise ExecutionError(operation, candidate, repr(exc)) from exc

    def classify(self, candidate: Candidate) -> NodeState:
        self.stats.record_visit(len(candidate))
        if self._call("reject", self.problem.reject, candidate):
            self.stats.nodes_rejected += 1
            return NodeState.REJECTED
        if self._call("accept", self.problem.accept, candidate):
            self.solutions.append(candidate)
            self.stats.solutions_found += 1
            if self.limit is not None and self.stats.solutions_found >= self.limit:
                logger.debug("Halting after %d solution(s)", self.stats.solutions_found)
                self.halted = True
            return NodeState.ACCEPTED
        return NodeState.EXPAND

    def children(self, parent: Candidate) -> Iterator[Candidate]:
        try:
            iterator = iter(self.problem.children(parent))
        except ExecutionError:
            raise
        except Exception as exc:
            raise ExecutionError("children", parent, repr(exc)) from exc
        self.stats.nodes_expanded += 1

        while True:
            try:
                child = next(iterator)
            except StopIteration:
                return
            except ExecutionError:
                raise
            except Exception as exc:
                raise ExecutionError("children", parent, repr(exc)) from exc
            if not is_child_of(child, parent):
                raise ExecutionError(
                    "children",
                    parent,
                    f"produced {child!r}, which is not a one-step extension",
                )
            yield child

    def recurse(self, candidate: Candidate) -> None:
        if self.classify(candidate) is not NodeState.EXPAND:
            return
        for child in self.children(candidate):
            self.recurse(child)
            self.stats.backtracks += 1
            if self.halted:
                return

    def iterate(self, root: Candidate) -> None:
        if self.classify(root) is not NodeState.EXPAND:
            return

        # One pending child iterator per expanded ancestor, innermost last.
        stack = [self.children(root)]
        while stack:
            child = next(stack[-1], None)
            if child is None:
                stack.pop()
                if stack:
                    self.stats.backtracks += 1
                continue

            if self.classify(child) is NodeState.EXPAND:
                stack.append(self.children(child))
                continue

            if self.halted:
                self.stats.backtracks += len(stack)
                return
            self.stats.backtracks += 1


def search(
    problem: SearchProblem,
    root: Candidate = ROOT,
    *,
    mode: SearchMode = "collect-all",
    strategy: Strategy = "recursive",
    max_solutions: int | None = None,
) -> SearchResult:
    """Run a depth-first backtracking search from ``root``.

    ``collect-all`` returns every accepted candidate in depth-first,
    left-to-right order, optionally stopping after ``max_solutions``.
    ``first-match`` stops at the first accepted candidate; no sibling at any
    ancestor level is visited afterwards.

    ``strategy`` selects plain recursion or an explicit stack of child
    iterators. Both visit the same nodes in the same order and return the
    same solutions and statistics.

    Raises :class:`InvalidInput` for bad arguments and
    :class:`ExecutionError` when an operation raises or ``children`` yields
    something that is not a one-step extension. No partial result is
    returned on error.
    """
    if mode not in SEARCH_MODES:
        raise InvalidInput(f"Unknown search mode {mode!r}; expected one of {SEARCH_MODES}.")
    if strategy not in STRATEGIES:
        raise InvalidInput(f"Unknown strategy {strategy!r}; expected one of {STRATEGIES}.")
    if not isinstance(root, tuple):
        raise InvalidInput("Root candidate must be a tuple.")
    if max_solutions is not None:
        if mode == "first-match":
            raise InvalidInput("max_solutions only applies to collect-all mode.")
        if isinstance(max_solutions, bool) or not isinstance(max_solutions, int):
            raise InvalidInput("max_solutions must be an integer.")
        if max_solutions < 1:
            raise InvalidInput("max_solutions must be >= 1.")

    limit = 1 if mode == "first-match" else max_solutions
    walk = _Walk(problem, limit)

    logger.debug("Starting %s search (%s) from depth %d", mode, strategy, len(root))
    start = perf_counter()
    if strategy == "recursive":
        walk.recurse(root)
    else:
        walk.iterate(root)
    walk.stats.elapsed_ms = (perf_counter() - start) * 1000
    logger.debug("Finished %s search: %s", mode, walk.stats)

    return SearchResult(mode=mode, solutions=walk.solutions, stats=walk.stats)
