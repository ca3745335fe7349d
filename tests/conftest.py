from typing import Dict, Hashable, List, Sequence


class AdjacencyMap:
    """In-memory graph; unknown nodes have no neighbors. Records every call."""

    def __init__(self, edges: Dict[Hashable, Sequence[Hashable]]) -> None:
        self.edges = edges
        self.calls: List[Hashable] = []

    def adjacent_nodes(self, node):
        self.calls.append(node)
        return list(self.edges.get(node, []))
