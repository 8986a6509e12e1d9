"""
Vertex and edge definitions for the roadmap graph.

Includes:
- Color: visitation state used by the graph search
- Vertex: roadmap vertex carrying a configuration and search bookkeeping
- Edge: read-only view of an undirected weighted edge
"""

import enum
import typing as t
import numpy as np


class Color(enum.Enum):
    WHITE = 0   # unvisited
    GRAY = 1    # open
    BLACK = 2   # closed


class Edge(t.NamedTuple):
    u: "Vertex"
    v: "Vertex"
    weight: float


class Vertex:
    """
    Vertex used in the probabilistic roadmap.

    Identity is the object itself, two vertices with equal configurations are
    still distinct vertices.

    Attributes:
        config: Configuration owned by this vertex (np.ndarray).
        index: Stable index, used as key in the roadmap, the nearest neighbor
            index and the connectivity tracker.
        edges: Dict of neighbor vertices and the weight of the connecting edge.
        color: Visitation state of the last search.
        cost: Accumulated cost from the search start.
        distance: Estimated total cost (cost + heuristic).
        predecessor: Previous vertex on the best known path from the start.
    """
    def __init__(self, config: np.ndarray, index: int):
        self.config = np.array(config, dtype=float, ndmin=1)
        self.index = index
        self.edges: t.Dict['Vertex', float] = {}
        self.reset_search()

    def __repr__(self) -> str:
        return f"Vertex(index={self.index}, config={self.config.tolist()})"

    @property
    def degree(self) -> int:
        return len(self.edges)

    def reset_search(self) -> None:
        self.color = Color.WHITE
        self.cost = float("inf")
        self.distance = float("inf")
        self.predecessor: t.Optional['Vertex'] = None

    def add_edge(self, other: 'Vertex', weight: float):
        self.edges[other] = weight
        other.edges[self] = weight

    def remove_edge(self, other: 'Vertex'):
        self.edges.pop(other, None)
        other.edges.pop(self, None)
