"""
Base interface for all motion planners.
Defines the common API for sampling-based planners (solve(), plan(), set_start(), set_goal(), etc.).
"""

import typing as t
import numpy as np

from roadmap_planner.environment.metric import Metric
from roadmap_planner.environment.verifier import Verifier


class Planner:
    def __init__(self,
                 metric: Metric,
                 verifier: Verifier,
                 parameters: t.Optional[dict] = None):
        """
        Initialize the planner with metric, verifier, and parameters.

        Args:
            metric: Distance between configurations.
            verifier: Object to evaluate configuration and motion feasibility.
            parameters: Dictionary containing planner-specific parameters.
        """
        self.metric = metric
        self.verifier = verifier
        self.parameters = dict(parameters or {})
        self.start_config: t.Optional[np.ndarray] = None
        self.goal_config: t.Optional[np.ndarray] = None

    def get_name(self) -> str:
        raise NotImplementedError("Each planner must implement the get_name() method.")

    def set_start(self, start_config: np.ndarray) -> None:
        """
        Define the start configuration of the query.

        Args:
            start_config: Configuration the path starts from.
        """
        self.start_config = np.array(start_config, dtype=float, ndmin=1)

    def set_goal(self, goal_config: np.ndarray) -> None:
        """
        Define the goal configuration of the query.

        Args:
            goal_config: Configuration the path ends in.
        """
        self.goal_config = np.array(goal_config, dtype=float, ndmin=1)

    def solve(self,
              start_config: t.Optional[np.ndarray] = None,
              goal_config: t.Optional[np.ndarray] = None) -> bool:
        """
        Answer the query from start to goal.

        Return:
            True if a path was found, it is then available through get_path().
        """
        raise NotImplementedError("Each planner must implement the solve() method.")

    def get_path(self) -> t.List[np.ndarray]:
        raise NotImplementedError("Each planner must implement the get_path() method.")

    def plan(self) -> t.Tuple[t.List[np.ndarray], bool]:
        """
        Solve the query set with set_start() and set_goal().

        Return:
            A tuple containing:
              - List of configurations representing the path (empty on failure).
              - Boolean flag indicating success.
        """
        if not self.solve():
            return [], False
        return self.get_path(), True

    def _resolve_query(self,
                       start_config: t.Optional[np.ndarray],
                       goal_config: t.Optional[np.ndarray]) -> t.Tuple[np.ndarray, np.ndarray]:
        if start_config is not None:
            self.set_start(start_config)
        if goal_config is not None:
            self.set_goal(goal_config)
        if self.start_config is None or self.goal_config is None:
            raise ValueError("Start and goal must be set before planning.")
        return self.start_config, self.goal_config
