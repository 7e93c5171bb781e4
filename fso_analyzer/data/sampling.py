"""
Parameter sampling utilities for link sweeps.

This module provides sampling methods for choosing the distances (or other
scalar parameters) at which the link is evaluated.
"""

import numpy as np
from typing import Dict, Tuple, List, Optional
import scipy.stats.qmc as qmc


class ParameterSampler:
    """
    Parameter sampler for generating evaluation points.

    Supports various sampling methods:
    - Evenly spaced grid (single parameter only)
    - Uniform random sampling
    - Latin Hypercube Sampling (LHS)
    - Sobol sequences
    - Halton sequences
    """

    VALID_METHODS = ("linspace", "uniform", "latin_hypercube", "sobol", "halton")

    def __init__(
        self,
        method: str = "linspace",
        ranges: Optional[Dict[str, Tuple[float, float]]] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize parameter sampler.

        Args:
            method: Sampling method ('linspace', 'uniform', 'latin_hypercube', 'sobol', 'halton')
            ranges: Dictionary of parameter ranges {name: (min, max)}
            seed: Random seed for reproducibility
        """
        if method not in self.VALID_METHODS:
            raise ValueError(f"Unknown sampling method: {method}. Valid methods: {list(self.VALID_METHODS)}")

        self.method = method
        self.ranges = {}
        self.seed = seed

        for name, (min_value, max_value) in (ranges or {}).items():
            self.add_parameter(name, min_value, max_value)

    def add_parameter(self, name: str, min_value: float, max_value: float):
        """Add a parameter range."""
        if not np.isfinite(min_value) or not np.isfinite(max_value):
            raise ValueError(f"Range for {name} must be finite")
        if min_value > max_value:
            raise ValueError(f"Invalid range for {name}: min {min_value} > max {max_value}")
        self.ranges[name] = (float(min_value), float(max_value))

    def _unit_samples(self, num_samples: int, num_params: int) -> np.ndarray:
        """Generate samples in the unit hypercube."""
        if self.method == "linspace":
            if num_params != 1:
                raise ValueError("linspace sampling supports a single parameter only")
            return np.linspace(0.0, 1.0, num_samples).reshape(-1, 1)

        if self.method == "uniform":
            rng = np.random.default_rng(self.seed)
            return rng.uniform(0, 1, (num_samples, num_params))

        if self.method == "latin_hypercube":
            sampler = qmc.LatinHypercube(d=num_params, seed=self.seed)
        elif self.method == "sobol":
            sampler = qmc.Sobol(d=num_params, seed=self.seed)
        else:
            sampler = qmc.Halton(d=num_params, seed=self.seed)
        return sampler.random(n=num_samples)

    def sample(self, num_samples: int) -> np.ndarray:
        """
        Generate parameter samples.

        Args:
            num_samples: Number of samples to generate

        Returns:
            Array of shape (num_samples, num_parameters) with parameter values
        """
        if not self.ranges:
            raise ValueError("No parameter ranges defined")
        if num_samples < 1:
            raise ValueError("Number of samples must be at least 1")

        bounds = self.get_parameter_bounds()
        unit_samples = self._unit_samples(num_samples, len(self.ranges))

        # Scale to parameter ranges
        return bounds[:, 0] + unit_samples * (bounds[:, 1] - bounds[:, 0])

    def sample_dict(self, num_samples: int) -> List[Dict[str, float]]:
        """
        Generate parameter samples as list of dictionaries.

        Args:
            num_samples: Number of samples to generate

        Returns:
            List of parameter dictionaries
        """
        samples = self.sample(num_samples)
        param_names = self.get_parameter_names()

        return [
            {name: float(row[i]) for i, name in enumerate(param_names)}
            for row in samples
        ]

    def get_parameter_names(self) -> List[str]:
        """Get list of parameter names."""
        return list(self.ranges.keys())

    def get_parameter_bounds(self) -> np.ndarray:
        """
        Get parameter bounds as array.

        Returns:
            Array of shape (num_parameters, 2) with [min, max] for each parameter
        """
        return np.array([self.ranges[name] for name in self.ranges], dtype=np.float64)

    def validate_samples(self, samples: np.ndarray) -> bool:
        """Check that samples are within parameter bounds."""
        bounds = self.get_parameter_bounds()
        return bool(np.all((samples >= bounds[:, 0]) & (samples <= bounds[:, 1])))


def create_distance_sampler(
    distance_range: Tuple[float, float] = (0.1, 15.0),
    method: str = "linspace",
    seed: Optional[int] = None
) -> ParameterSampler:
    """
    Create a sampler over link distance.

    Args:
        distance_range: Distance range in km (min, max)
        method: Sampling method
        seed: Random seed

    Returns:
        Configured ParameterSampler with a single 'distance_km' parameter
    """
    if distance_range[0] < 0:
        raise ValueError("Distance range must be non-negative")

    sampler = ParameterSampler(method=method, seed=seed)
    sampler.add_parameter("distance_km", *distance_range)
    return sampler


def sample_distances(
    num_points: int,
    distance_range: Tuple[float, float] = (0.1, 15.0),
    method: str = "linspace",
    seed: Optional[int] = None
) -> np.ndarray:
    """Sorted 1-D array of sampled distances in km."""
    sampler = create_distance_sampler(distance_range, method=method, seed=seed)
    return np.sort(sampler.sample(num_points)[:, 0])
