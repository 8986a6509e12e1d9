"""
Shortest-path search over the roadmap.

A single best-first search parameterized by a heuristic. Dijkstra is the same
search with `zero_heuristic`.
"""

import heapq
import itertools
import typing as t

from roadmap_planner.planners.nodes import Color, Vertex
from roadmap_planner.planners.roadmap import Roadmap

Heuristic = t.Callable[[Vertex], float]


def zero_heuristic(vertex: Vertex) -> float:
    return 0.0


class SearchResult(t.NamedTuple):
    found: bool
    expanded: int
    cost: float


def informed_search(roadmap: Roadmap,
                    start: Vertex,
                    goal: Vertex,
                    heuristic: Heuristic = zero_heuristic) -> SearchResult:
    """
    Best-first search from start to goal using edge weights as traversal cost.

    Every vertex of the roadmap has its search fields reset first. Visited
    vertices end up with their cost and predecessor set, so the path can be
    read by following `predecessor` from the goal. The search stops as soon as
    the goal is closed.

    Args:
        roadmap: Graph to search.
        start: Start vertex (part of the roadmap).
        goal: Goal vertex (part of the roadmap).
        heuristic: Estimate of the remaining cost to the goal, must never
            overestimate for the result to be optimal.

    Returns:
        SearchResult with success flag, number of closed vertices and the cost
        of the goal (inf when not reached).
    """
    for vertex in roadmap:
        vertex.reset_search()

    # counter breaks ties between equal estimates in insertion order
    counter = itertools.count()
    start.cost = 0.0
    start.distance = heuristic(start)
    start.color = Color.GRAY
    open_set = [(start.distance, next(counter), start)]
    expanded = 0

    while open_set:
        _, _, current = heapq.heappop(open_set)
        if current.color is Color.BLACK:
            continue
        current.color = Color.BLACK
        expanded += 1

        if current is goal:
            return SearchResult(True, expanded, goal.cost)

        for neighbor, weight in current.edges.items():
            if neighbor.color is Color.BLACK:
                continue
            tentative_cost = current.cost + weight
            if tentative_cost < neighbor.cost:
                neighbor.cost = tentative_cost
                neighbor.distance = tentative_cost + heuristic(neighbor)
                neighbor.predecessor = current
                neighbor.color = Color.GRAY
                heapq.heappush(open_set, (neighbor.distance, next(counter), neighbor))

    return SearchResult(False, expanded, float("inf"))


def reconstruct_path(goal: Vertex) -> t.List[Vertex]:
    """
    Walk predecessors back from the goal.

    Returns:
        List of vertices ordered from start to goal.
    """
    path = []
    vertex: t.Optional[Vertex] = goal
    while vertex is not None:
        path.append(vertex)
        vertex = vertex.predecessor
    return path[::-1]
