import typing as t
import numpy as np

from roadmap_planner.environment.obstacles import ObstacleManager


class Verifier:
    """
    Feasibility checks for configurations and for the straight motion between two.
    """
    def is_valid(self, config: np.ndarray) -> bool:
        raise NotImplementedError("Each verifier must implement the is_valid() method.")

    def is_valid_motion(self, from_config: np.ndarray, to_config: np.ndarray) -> bool:
        raise NotImplementedError("Each verifier must implement the is_valid_motion() method.")


class ObstacleVerifier(Verifier):
    """
    Verifier for configuration spaces with box bounds and box/sphere obstacles.

    A configuration is valid when it lies within the bounds and outside every
    obstacle. A motion is checked by testing interpolated configurations.
    """

    def __init__(self,
                 lower_bounds: t.Sequence[float],
                 upper_bounds: t.Sequence[float],
                 obstacles: t.Optional[ObstacleManager] = None,
                 step_size: float = 0.02):
        """
        Initialize the verifier.

        Args:
            lower_bounds: Lower limit per coordinate.
            upper_bounds: Upper limit per coordinate.
            obstacles: Obstacles to avoid, None for free space.
            step_size: Maximum distance between interpolated configurations
                along a checked motion.
        """
        if step_size <= 0:
            raise ValueError(f"step_size must be positive, got {step_size}")
        self.lower_bounds = np.atleast_1d(np.asarray(lower_bounds, dtype=float))
        self.upper_bounds = np.atleast_1d(np.asarray(upper_bounds, dtype=float))
        self.obstacles = obstacles if obstacles is not None else ObstacleManager()
        self.step_size = step_size

    def is_within_limits(self, config: np.ndarray) -> bool:
        return bool(np.all(config >= self.lower_bounds) and np.all(config <= self.upper_bounds))

    def is_valid(self, config: np.ndarray) -> bool:
        """
        Check if the given configuration is feasible.

        Args:
            config: Configuration as a NumPy array.

        Returns:
            True if within bounds and not in collision, False otherwise.
        """
        config = np.atleast_1d(np.asarray(config, dtype=float))
        return self.is_within_limits(config) and not self.obstacles.contains(config)

    def is_valid_motion(self, from_config: np.ndarray, to_config: np.ndarray) -> bool:
        """
        Check if the straight motion from `from_config` to `to_config` is collision-free.

        Args:
            from_config: Starting configuration as a NumPy array.
            to_config: Ending configuration as a NumPy array.

        Returns:
            True if both end configurations and every interpolated configuration are valid.
        """
        from_config = np.atleast_1d(np.asarray(from_config, dtype=float))
        to_config = np.atleast_1d(np.asarray(to_config, dtype=float))
        if not (self.is_valid(from_config) and self.is_valid(to_config)):
            return False

        dist = np.linalg.norm(to_config - from_config)
        steps = max(2, int(np.ceil(dist / self.step_size)))
        for i in range(1, steps):
            alpha = i / steps
            interp = (1 - alpha) * from_config + alpha * to_config
            if not self.is_valid(interp):
                return False
        return True
