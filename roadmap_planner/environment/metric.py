import typing as t
import numpy as np


class Metric:
    """
    Distance between two configurations.

    Used as edge weight and as A* heuristic, so it must never overestimate the
    cost of a roadmap path between the two configurations.
    """
    def distance(self, config_a: np.ndarray, config_b: np.ndarray) -> float:
        raise NotImplementedError("Each metric must implement the distance() method.")


class WeightedEuclideanMetric(Metric):
    """
    Euclidean distance with a weight per coordinate.

    Attributes:
        weights: Per-coordinate weights, None means all ones.
    """
    def __init__(self, weights: t.Optional[t.Sequence[float]] = None):
        self.weights = None if weights is None else np.asarray(weights, dtype=float)
        if self.weights is not None and np.any(self.weights < 0):
            raise ValueError(f"Metric weights must be non-negative, got {self.weights}")

    def distance(self, config_a: np.ndarray, config_b: np.ndarray) -> float:
        diff = np.atleast_1d(np.asarray(config_a, dtype=float) - np.asarray(config_b, dtype=float))
        if self.weights is None:
            return float(np.sqrt(np.sum(diff**2)))
        return float(np.sqrt(np.sum(self.weights * diff**2)))

    def scale(self, config: np.ndarray) -> np.ndarray:
        """
        Map a configuration into the space where this metric is plain Euclidean.
        """
        config = np.atleast_1d(np.asarray(config, dtype=float))
        if self.weights is None:
            return config
        return np.sqrt(self.weights) * config
