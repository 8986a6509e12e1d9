import logging
import typing as t
import numpy as np

from roadmap_planner.planners.nodes import Edge, Vertex

logger = logging.getLogger(__name__)


class Roadmap:
    """
    Undirected simple graph of roadmap vertices.

    Vertices are stored in a dict keyed by their index, so adding or removing
    one vertex never moves or invalidates any other vertex.
    """
    def __init__(self):
        self.vertices_by_index: t.Dict[int, Vertex] = {}
        self.next_index: int = 0
        self._num_edges: int = 0

    def __len__(self) -> int:
        return len(self.vertices_by_index)

    def __contains__(self, vertex: Vertex) -> bool:
        return self.vertices_by_index.get(vertex.index) is vertex

    def __iter__(self) -> t.Iterator[Vertex]:
        return iter(self.vertices_by_index.values())

    @property
    def num_vertices(self) -> int:
        return len(self.vertices_by_index)

    @property
    def num_edges(self) -> int:
        return self._num_edges

    def add_vertex(self, config: np.ndarray) -> Vertex:
        """
        Create a vertex for the configuration under the next free index.

        Args:
            config: Configuration of the new vertex.

        Returns:
            The new vertex.
        """
        vertex = Vertex(config, self.next_index)
        self.vertices_by_index[vertex.index] = vertex
        self.next_index += 1
        return vertex

    def get_vertex(self, index: int) -> Vertex:
        return self.vertices_by_index[index]

    def remove_vertex(self, vertex: Vertex) -> None:
        """
        Remove a vertex together with all of its incident edges.
        """
        if vertex not in self:
            raise KeyError(f"Vertex {vertex.index} is not part of the roadmap")
        for neighbor in list(vertex.edges):
            vertex.remove_edge(neighbor)
            self._num_edges -= 1
        del self.vertices_by_index[vertex.index]

    def add_edge(self, u: Vertex, v: Vertex, weight: float) -> Edge:
        """
        Connect two roadmap vertices.

        Args:
            u: First endpoint.
            v: Second endpoint.
            weight: Edge weight, the metric distance between the endpoints.

        Returns:
            The new edge.
        """
        if u is v:
            raise ValueError(f"Self-loop on vertex {u.index} is not allowed")
        if u not in self or v not in self:
            raise KeyError("Both endpoints must be part of the roadmap")
        if v in u.edges:
            raise ValueError(f"Vertices {u.index} and {v.index} are already connected")
        u.add_edge(v, weight)
        self._num_edges += 1
        return Edge(u, v, weight)

    def vertices(self) -> t.List[Vertex]:
        return list(self.vertices_by_index.values())

    def edges(self) -> t.Iterator[Edge]:
        """
        Iterate over all edges, each undirected edge is reported once.
        """
        for u in self.vertices_by_index.values():
            for v, weight in u.edges.items():
                if u.index < v.index:
                    yield Edge(u, v, weight)

    def clear(self) -> None:
        for vertex in self.vertices_by_index.values():
            vertex.edges.clear()
        self.vertices_by_index.clear()
        self.next_index = 0
        self._num_edges = 0
        logger.debug("Roadmap cleared")
