"""
Sweep generation and storage module.

This module handles:
- Distance sampling
- Link evaluation across weather conditions and distances
- HDF5 sweep storage
"""

from .sampling import ParameterSampler, create_distance_sampler, sample_distances
from .storage import SweepStore
from .generator import SweepGenerator, run_sweep, generate_link_sweep

__all__ = [
    "ParameterSampler",
    "create_distance_sampler",
    "sample_distances",
    "SweepStore",
    "SweepGenerator",
    "run_sweep",
    "generate_link_sweep",
]
