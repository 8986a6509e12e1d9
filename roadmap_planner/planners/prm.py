import enum
import logging
import time
import typing as t
import numpy as np

from roadmap_planner.planners.base import Planner
from roadmap_planner.planners.disjoint_sets import DisjointSets
from roadmap_planner.planners.nodes import Vertex
from roadmap_planner.planners.roadmap import Roadmap
from roadmap_planner.planners.search import informed_search, reconstruct_path, zero_heuristic
from roadmap_planner.environment.metric import Metric, WeightedEuclideanMetric
from roadmap_planner.environment.nearest_neighbors import (
    KdTreeNearestNeighbors,
    LinearNearestNeighbors,
    NearestNeighbors,
)
from roadmap_planner.environment.sampler import Sampler
from roadmap_planner.environment.verifier import Verifier

logger = logging.getLogger(__name__)


class Search(enum.Enum):
    ASTAR = "astar"
    DIJKSTRA = "dijkstra"


class PRMPlanner(Planner):
    """
    Probabilistic Roadmaps.

    Lydia E. Kavraki, Petr Svestka, Jean-Claude Latombe, and Mark H. Overmars.
    Probabilistic roadmaps for path planning in high-dimensional configuration
    spaces. IEEE Transactions on Robotics and Automation, 12(4):566-580, 1996.

    The roadmap is grown with construct() and persists across queries. Each
    solve() splices a transient start and goal vertex into the roadmap, runs
    the search and removes both again, leaving the roadmap and its
    connectivity exactly as before.
    """

    def __init__(self,
                 metric: Metric,
                 verifier: Verifier,
                 sampler: Sampler,
                 nearest_neighbors: t.Optional[NearestNeighbors] = None,
                 parameters: t.Optional[dict] = None):
        """
        Initialize the PRM planner.

        Args:
            metric: Distance between configurations, used for edge weights and the A* heuristic.
            verifier: Checks configurations and local motions.
            sampler: Produces candidate configurations during construction.
            nearest_neighbors: Spatial index, defaults to a kd-tree for weighted
                Euclidean metrics and to a linear scan otherwise.
            parameters: Dict with max_degree, max_neighbors, max_radius, search,
                connect_same_component and max_time.
        """
        super().__init__(metric, verifier, parameters)
        self.sampler = sampler
        if nearest_neighbors is None:
            if isinstance(metric, WeightedEuclideanMetric):
                nearest_neighbors = KdTreeNearestNeighbors(metric)
            else:
                nearest_neighbors = LinearNearestNeighbors(metric)
        self.nearest_neighbors = nearest_neighbors

        self.max_degree = self.parameters.get("max_degree", None)
        self.max_neighbors = self.parameters.get("max_neighbors", 30)
        self.max_radius = self.parameters.get("max_radius", None)
        self.search = self.parameters.get("search", Search.ASTAR)
        self.connect_same_component = self.parameters.get("connect_same_component", True)
        self.max_time: t.Optional[float] = self.parameters.get("max_time", None)

        self.roadmap = Roadmap()
        self.ds = DisjointSets()
        self.expanded: int = 0
        self._goal_vertex: t.Optional[Vertex] = None
        self._solved = False

    def get_name(self) -> str:
        return "Probabilistic Roadmaps"

    @property
    def max_degree(self) -> float:
        return self._max_degree

    @max_degree.setter
    def max_degree(self, degree: t.Optional[int]) -> None:
        if degree is None:
            degree = float("inf")
        if degree < 0:
            raise ValueError(f"max_degree must be non-negative, got {degree}")
        self._max_degree = degree

    @property
    def max_neighbors(self) -> int:
        return self._max_neighbors

    @max_neighbors.setter
    def max_neighbors(self, k: int) -> None:
        if k < 1:
            raise ValueError(f"max_neighbors must be at least 1, got {k}")
        self._max_neighbors = int(k)

    @property
    def max_radius(self) -> float:
        return self._max_radius

    @max_radius.setter
    def max_radius(self, radius: t.Optional[float]) -> None:
        if radius is None:
            radius = float("inf")
        if radius < 0:
            raise ValueError(f"max_radius must be non-negative, got {radius}")
        self._max_radius = float(radius)

    @property
    def search(self) -> Search:
        return self._search

    @search.setter
    def search(self, search: t.Union[Search, str]) -> None:
        self._search = search if isinstance(search, Search) else Search(str(search).lower())

    @property
    def connect_same_component(self) -> bool:
        return self._connect_same_component

    @connect_same_component.setter
    def connect_same_component(self, allow: bool) -> None:
        if not isinstance(allow, (bool, np.bool_)):
            raise ValueError(f"connect_same_component must be a bool, got {allow!r}")
        self._connect_same_component = bool(allow)

    @property
    def num_vertices(self) -> int:
        return self.roadmap.num_vertices

    @property
    def num_edges(self) -> int:
        return self.roadmap.num_edges

    def add_vertex(self, config: np.ndarray) -> Vertex:
        """
        Create a vertex and register it in the roadmap, connectivity tracker and spatial index.

        Args:
            config: Configuration of the new vertex.

        Returns:
            The new, still unconnected vertex.
        """
        vertex = self.roadmap.add_vertex(config)
        self.ds.add(vertex.index)
        self.nearest_neighbors.insert(vertex)
        return vertex

    def insert(self, vertex: Vertex, exclude: t.Collection[Vertex] = ()) -> int:
        """
        Connect a freshly added vertex to its neighbors.

        Candidates come from the spatial index in ascending distance. Each one
        is connected when both degrees allow it and the verifier accepts the
        straight motion between the two configurations.

        Args:
            vertex: Vertex already present in the spatial index.
            exclude: Vertices never connected to, used to keep the transient
                start and goal of a query apart.

        Returns:
            Number of edges added.
        """
        # excluded vertices must not take any of the max_neighbors slots
        neighbors = self.nearest_neighbors.k_nearest(vertex.config, self.max_neighbors + len(exclude), self.max_radius)
        neighbors = [n for n in neighbors if n.vertex not in exclude][:self.max_neighbors]

        added = 0
        for neighbor in neighbors:
            if vertex.degree >= self.max_degree:
                break
            candidate = neighbor.vertex
            if candidate is vertex or candidate in vertex.edges:
                continue
            if candidate.degree >= self.max_degree:
                continue
            if not self.connect_same_component and self.ds.same_component(vertex.index, candidate.index):
                continue
            if self.verifier.is_valid_motion(vertex.config, candidate.config):
                weight = self.metric.distance(vertex.config, candidate.config)
                self.roadmap.add_edge(vertex, candidate, weight)
                self.ds.union(vertex.index, candidate.index)
                added += 1
        return added

    def construct(self, steps: int, max_time: t.Optional[float] = None) -> int:
        """
        Grow the roadmap by a number of sampling attempts.

        A sample that fails the validity check still consumes its step.

        Args:
            steps: Number of samples drawn.
            max_time: Optional time budget in seconds, checked between steps.
                Defaults to the `max_time` parameter.

        Returns:
            Number of vertices added to the roadmap.
        """
        if steps < 0:
            raise ValueError(f"steps must be non-negative, got {steps}")
        if max_time is None:
            max_time = self.max_time

        start_time = time.time()
        added = 0
        for step in range(steps):
            if max_time is not None and time.time() - start_time > max_time:
                logger.info("Construction stopped after %d of %d steps (max_time %.2f s)", step, steps, max_time)
                break
            config = self.sampler.generate()
            if not self.verifier.is_valid(config):
                continue
            vertex = self.add_vertex(config)
            self.insert(vertex)
            added += 1
            if added % 1000 == 0:
                logger.debug("Added %d vertices (step %d/%d)", added, step + 1, steps)

        logger.info("Added %d vertices, roadmap has %d vertices, %d edges and %d components",
                    added, self.num_vertices, self.num_edges, self.ds.num_components())
        return added

    def solve(self,
              start_config: t.Optional[np.ndarray] = None,
              goal_config: t.Optional[np.ndarray] = None) -> bool:
        """
        Connect start and goal to the roadmap and search for a path.

        Start and goal are removed again before returning, whatever the outcome.

        Args:
            start_config: Start configuration, defaults to the one given to set_start().
            goal_config: Goal configuration, defaults to the one given to set_goal().

        Return:
            True if a path was found, it is then available through get_path().
        """
        start_config, goal_config = self._resolve_query(start_config, goal_config)
        self._solved = False
        self._goal_vertex = None
        self.expanded = 0

        first_transient = self.roadmap.next_index
        self.ds.checkpoint()
        try:
            begin = self.add_vertex(start_config)
            self.insert(begin)
            end = self.add_vertex(goal_config)
            self.insert(end, exclude=(begin,))

            if not self.ds.same_component(begin.index, end.index):
                logger.debug("Start and goal are in different components, skipping search")
                return False

            if self.search is Search.DIJKSTRA:
                heuristic = zero_heuristic
            else:
                def heuristic(vertex: Vertex) -> float:
                    return self.metric.distance(vertex.config, end.config)

            result = informed_search(self.roadmap, begin, end, heuristic)
            self.expanded = result.expanded
            logger.debug("%s search expanded %d vertices, found=%s, cost=%.4f",
                         self.search.value, result.expanded, result.found, result.cost)
            if result.found:
                self._goal_vertex = end
                self._solved = True
            return result.found
        finally:
            self._retract(first_transient)

    def _retract(self, first_transient: int) -> None:
        """
        Remove every vertex created since the query started, then restore connectivity.
        """
        for index in range(self.roadmap.next_index - 1, first_transient - 1, -1):
            vertex = self.roadmap.vertices_by_index.get(index)
            if vertex is None:
                continue
            if vertex in self.nearest_neighbors:
                self.nearest_neighbors.remove(vertex)
            self.roadmap.remove_vertex(vertex)
        self.ds.rollback()
        self.roadmap.next_index = first_transient

    def get_path(self) -> t.List[np.ndarray]:
        """
        Path found by the last successful solve().

        Zero-length hops, e.g. a start placed exactly on a roadmap vertex,
        appear only once. When start and goal are the same configuration the
        path is that single configuration, the detour through the roadmap
        vertex the query was connected to is dropped.

        Return:
            List of configurations from start to goal.
        """
        if not self._solved or self._goal_vertex is None:
            raise RuntimeError("No path available, call solve() successfully first.")
        path: t.List[np.ndarray] = []
        for vertex in reconstruct_path(self._goal_vertex):
            if path and np.array_equal(path[-1], vertex.config):
                continue
            path.append(vertex.config.copy())
        if len(path) > 1 and np.array_equal(path[0], path[-1]):
            return path[:1]
        return path

    def reset(self) -> None:
        """
        Discard the whole roadmap.
        """
        self.roadmap.clear()
        self.nearest_neighbors.clear()
        self.ds.clear()
        self.expanded = 0
        self._goal_vertex = None
        self._solved = False
        logger.info("Roadmap reset")
