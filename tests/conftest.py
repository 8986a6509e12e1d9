"""Shared fakes for deterministic roadmap tests."""

import itertools

import numpy as np
import pytest

from roadmap_planner.environment.metric import WeightedEuclideanMetric
from roadmap_planner.environment.nearest_neighbors import LinearNearestNeighbors
from roadmap_planner.environment.sampler import Sampler
from roadmap_planner.environment.verifier import Verifier
from roadmap_planner.planners.prm import PRMPlanner


class ScriptedSampler(Sampler):
    """Returns the given configurations in order."""

    def __init__(self, configs):
        self._configs = iter(list(configs))
        self.calls = 0

    def extend(self, configs):
        self._configs = itertools.chain(self._configs, list(configs))

    def generate(self):
        self.calls += 1
        return np.atleast_1d(np.asarray(next(self._configs), dtype=float))


class FreeSpaceVerifier(Verifier):
    """Everything is valid; counts motion checks."""

    def __init__(self):
        self.motion_checks = 0

    def is_valid(self, config):
        return True

    def is_valid_motion(self, from_config, to_config):
        self.motion_checks += 1
        return True


class ForbiddenSetVerifier(Verifier):
    """Rejects listed configurations (scalars) and any motion touching them."""

    def __init__(self, forbidden=()):
        self.forbidden = {float(x) for x in forbidden}

    def is_valid(self, config):
        return float(np.atleast_1d(config)[0]) not in self.forbidden

    def is_valid_motion(self, from_config, to_config):
        return self.is_valid(from_config) and self.is_valid(to_config)


@pytest.fixture
def metric():
    return WeightedEuclideanMetric()


@pytest.fixture
def free_verifier():
    return FreeSpaceVerifier()


@pytest.fixture
def make_planner(metric, free_verifier):
    def _make(configs=(), verifier=None, nearest_neighbors=None, **parameters):
        return PRMPlanner(
            metric=metric,
            verifier=verifier if verifier is not None else free_verifier,
            sampler=ScriptedSampler(configs),
            nearest_neighbors=nearest_neighbors,
            parameters=parameters,
        )

    return _make


def roadmap_components(roadmap):
    """Connected components of the roadmap computed by BFS over its edges."""
    seen = set()
    components = []
    for vertex in roadmap:
        if vertex in seen:
            continue
        component = {vertex.index}
        seen.add(vertex)
        queue = [vertex]
        while queue:
            current = queue.pop()
            for neighbor in current.edges:
                if neighbor not in seen:
                    seen.add(neighbor)
                    component.add(neighbor.index)
                    queue.append(neighbor)
        components.append(component)
    return components


def roadmap_snapshot(roadmap):
    vertices = {v.index: tuple(v.config.tolist()) for v in roadmap}
    edges = {(e.u.index, e.v.index, e.weight) for e in roadmap.edges()}
    return vertices, edges, roadmap.num_vertices, roadmap.num_edges, roadmap.next_index
