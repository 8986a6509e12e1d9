import typing as t
import numpy as np


class BoxObstacle:
    """
    Axis-Aligned Bounding Box (AABB) obstacle in configuration space.

    Attributes:
        min_corner: np.ndarray with the minimum value per coordinate.
        max_corner: np.ndarray with the maximum value per coordinate.
    """
    def __init__(self, min_corner: t.Sequence[float], max_corner: t.Sequence[float]):
        self.min_corner = np.atleast_1d(np.asarray(min_corner, dtype=float))
        self.max_corner = np.atleast_1d(np.asarray(max_corner, dtype=float))
        if self.min_corner.shape != self.max_corner.shape:
            raise ValueError("Box corners must have the same dimension.")

    def is_point_inside(self, point: np.ndarray) -> bool:
        """
        Check if a point lies inside the box (boundary included).

        Args:
            point: Configuration as np.ndarray

        Return:
            True if inside, False otherwise.
        """
        return bool(np.all(point >= self.min_corner) and np.all(point <= self.max_corner))


class SphereObstacle:
    """
    Spherical obstacle in configuration space.

    Attributes:
        center: np.ndarray with the center of the sphere.
        radius: Radius of the sphere.
    """
    def __init__(self, center: t.Sequence[float], radius: float):
        self.center = np.atleast_1d(np.asarray(center, dtype=float))
        self.radius = radius

    def is_point_inside(self, point: np.ndarray) -> bool:
        return bool(np.linalg.norm(point - self.center) <= self.radius)


class ObstacleManager:
    """
    Stores and manages multiple obstacles (boxes and spheres).
    """
    def __init__(self):
        self.boxes: t.List[BoxObstacle] = []
        self.spheres: t.List[SphereObstacle] = []

    def __len__(self) -> int:
        return len(self.boxes) + len(self.spheres)

    def add_box(self, min_corner: t.Sequence[float], max_corner: t.Sequence[float]) -> None:
        self.boxes.append(BoxObstacle(min_corner, max_corner))

    def add_sphere(self, center: t.Sequence[float], radius: float) -> None:
        self.spheres.append(SphereObstacle(center, radius))

    def get_all_obstacles(self) -> t.Tuple[t.List[BoxObstacle], t.List[SphereObstacle]]:
        return self.boxes, self.spheres

    def contains(self, point: np.ndarray) -> bool:
        """True if the point lies inside any obstacle."""
        return any(box.is_point_inside(point) for box in self.boxes) or \
            any(sphere.is_point_inside(point) for sphere in self.spheres)
