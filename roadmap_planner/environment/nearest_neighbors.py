"""
Spatial indexes answering "k nearest roadmap vertices within a radius".

- LinearNearestNeighbors: brute force, works with any Metric.
- KdTreeNearestNeighbors: scipy cKDTree over weighted Euclidean coordinates.
"""

import logging
import typing as t
import numpy as np
from scipy.spatial import cKDTree

from roadmap_planner.environment.metric import Metric, WeightedEuclideanMetric
from roadmap_planner.planners.nodes import Vertex

logger = logging.getLogger(__name__)


class Neighbor(t.NamedTuple):
    vertex: Vertex
    distance: float


def _sorted_neighbors(candidates: t.List[Neighbor], k: int) -> t.List[Neighbor]:
    candidates.sort(key=lambda n: (n.distance, n.vertex.index))
    return candidates[:k]


class NearestNeighbors:
    """
    Interface of the spatial index used by the roadmap planner.

    Vertices are keyed by their index; a vertex can be removed again, which is
    how transient query vertices are retracted.
    """
    def __init__(self):
        self._vertices: t.Dict[int, Vertex] = {}

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: Vertex) -> bool:
        return self._vertices.get(vertex.index) is vertex

    def insert(self, vertex: Vertex) -> None:
        if vertex.index in self._vertices:
            raise KeyError(f"Vertex index {vertex.index} is already indexed")
        self._vertices[vertex.index] = vertex

    def remove(self, vertex: Vertex) -> None:
        if vertex not in self:
            raise KeyError(f"Vertex {vertex.index} is not indexed")
        del self._vertices[vertex.index]

    def clear(self) -> None:
        self._vertices.clear()

    def k_nearest(self, config: np.ndarray, k: int, max_radius: float = float("inf")) -> t.List[Neighbor]:
        """
        Find the nearest indexed vertices.

        Args:
            config: Query configuration.
            k: Maximum number of neighbors returned.
            max_radius: Maximum distance of a neighbor (inclusive).

        Returns:
            Up to k neighbors ordered by ascending distance, ties by vertex index.
        """
        raise NotImplementedError("Each index must implement the k_nearest() method.")


class LinearNearestNeighbors(NearestNeighbors):
    def __init__(self, metric: Metric):
        super().__init__()
        self.metric = metric

    def k_nearest(self, config: np.ndarray, k: int, max_radius: float = float("inf")) -> t.List[Neighbor]:
        if k <= 0:
            return []
        candidates = []
        for vertex in self._vertices.values():
            distance = self.metric.distance(config, vertex.config)
            if distance <= max_radius:
                candidates.append(Neighbor(vertex, distance))
        return _sorted_neighbors(candidates, k)


class KdTreeNearestNeighbors(NearestNeighbors):
    """
    Nearest neighbors on top of a static cKDTree.

    cKDTree cannot be modified, so new vertices wait in a pending buffer that
    is scanned linearly and removed vertices are masked out of tree results.
    The tree is rebuilt once either exceeds `rebuild_threshold`.
    """
    def __init__(self,
                 metric: t.Optional[WeightedEuclideanMetric] = None,
                 rebuild_threshold: int = 64):
        super().__init__()
        if rebuild_threshold < 0:
            raise ValueError(f"rebuild_threshold must be non-negative, got {rebuild_threshold}")
        self.metric = metric if metric is not None else WeightedEuclideanMetric()
        self.rebuild_threshold = rebuild_threshold
        self.kdtree: t.Optional[cKDTree] = None
        self._tree_vertices: t.List[Vertex] = []
        self._pending: t.Dict[int, Vertex] = {}
        self._removed: t.Set[Vertex] = set()

    def insert(self, vertex: Vertex) -> None:
        super().insert(vertex)
        self._pending[vertex.index] = vertex
        if len(self._pending) > self.rebuild_threshold:
            self.rebuild()

    def remove(self, vertex: Vertex) -> None:
        super().remove(vertex)
        if self._pending.get(vertex.index) is vertex:
            del self._pending[vertex.index]
            return
        self._removed.add(vertex)
        if len(self._removed) > self.rebuild_threshold:
            self.rebuild()

    def clear(self) -> None:
        super().clear()
        self.kdtree = None
        self._tree_vertices = []
        self._pending.clear()
        self._removed.clear()

    def rebuild(self) -> None:
        self._tree_vertices = list(self._vertices.values())
        self._pending.clear()
        self._removed.clear()
        if not self._tree_vertices:
            self.kdtree = None
            return
        configs = np.array([self.metric.scale(v.config) for v in self._tree_vertices])
        self.kdtree = cKDTree(configs)
        logger.debug("Rebuilt kd-tree with %d vertices", len(self._tree_vertices))

    def k_nearest(self, config: np.ndarray, k: int, max_radius: float = float("inf")) -> t.List[Neighbor]:
        if k <= 0 or not self._vertices:
            return []
        query = self.metric.scale(config)
        candidates: t.List[Neighbor] = []

        if self.kdtree is not None:
            n_tree = len(self._tree_vertices)
            # ask for extra results to make up for removed vertices
            n_query = min(k + len(self._removed), n_tree)
            bound = np.nextafter(max_radius, np.inf) if np.isfinite(max_radius) else np.inf
            distances, indices = self.kdtree.query(query, k=n_query, distance_upper_bound=bound)
            for distance, idx in zip(np.atleast_1d(distances), np.atleast_1d(indices)):
                if idx >= n_tree or distance > max_radius:
                    continue
                vertex = self._tree_vertices[idx]
                if vertex in self._removed:
                    continue
                candidates.append(Neighbor(vertex, float(distance)))

        for vertex in self._pending.values():
            distance = float(np.linalg.norm(self.metric.scale(vertex.config) - query))
            if distance <= max_radius:
                candidates.append(Neighbor(vertex, distance))

        return _sorted_neighbors(candidates, k)
