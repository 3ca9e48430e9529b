from dataclasses import asdict, dataclass


@dataclass
class SearchStats:
    nodes_visited: int = 0
    nodes_rejected: int = 0
    nodes_expanded: int = 0
    backtracks: int = 0
    max_depth: int = 0
    solutions_found: int = 0
    elapsed_ms: float = 0.0

    def record_visit(self, depth: int) -> None:
        self.nodes_visited += 1
        if depth > self.max_depth:
            self.max_depth = depth

    def to_dict(self) -> dict[str, int | float]:
        return asdict(self)
