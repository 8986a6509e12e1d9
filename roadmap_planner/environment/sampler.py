"""
Samplers producing candidate configurations for roadmap construction.
"""

import typing as t
import numpy as np


class Sampler:
    def generate(self) -> np.ndarray:
        """
        Produce a candidate configuration.

        Return:
            Configuration as np.ndarray, not necessarily valid.
        """
        raise NotImplementedError("Each sampler must implement the generate() method.")


class UniformSampler(Sampler):
    """
    Uniform sampling within box bounds.

    Attributes:
        lower_bounds: Lower limit per coordinate.
        upper_bounds: Upper limit per coordinate.
        rng: numpy random generator, seeded for reproducible roadmaps.
    """
    def __init__(self,
                 lower_bounds: t.Sequence[float],
                 upper_bounds: t.Sequence[float],
                 seed: t.Optional[int] = None):
        self.lower_bounds = np.atleast_1d(np.asarray(lower_bounds, dtype=float))
        self.upper_bounds = np.atleast_1d(np.asarray(upper_bounds, dtype=float))
        if self.lower_bounds.shape != self.upper_bounds.shape:
            raise ValueError("Lower and upper bounds must have the same shape.")
        if np.any(self.lower_bounds > self.upper_bounds):
            raise ValueError("Lower bounds must not exceed upper bounds.")
        self.rng = np.random.default_rng(seed)

    def generate(self) -> np.ndarray:
        return self.rng.uniform(self.lower_bounds, self.upper_bounds)
