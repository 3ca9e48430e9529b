"""Candidates: immutable, ordered sequences of choices.

A candidate of length ``k`` is a node at depth ``k`` of the search tree; the
value at position ``i`` is the choice made at depth ``i``. The tree has no
separate node type.
"""

from __future__ import annotations

from typing import Hashable

Candidate = tuple[Hashable, ...]

ROOT: Candidate = ()


def extend(candidate: Candidate, choice: Hashable) -> Candidate:
    return candidate + (choice,)


def is_complete(candidate: Candidate, target_depth: int) -> bool:
    return len(candidate) == target_depth


def is_child_of(child: object, parent: Candidate) -> bool:
    return (
        isinstance(child, tuple)
        and len(child) == len(parent) + 1
        and child[: len(parent)] == parent
    )
