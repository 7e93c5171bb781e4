"""
Distance sweep generation for FSO link analysis.

This module evaluates the link budget across sampled distances for one or
more weather conditions and stores the results.
"""

import json
import logging
import time
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

import numpy as np
from tqdm import tqdm

from ..simulation import (
    LinkConfig,
    LinkStatus,
    DEFAULT_LINK_CONFIG,
    WeatherType,
    evaluate_link,
    get_weather_profile,
    max_distance_for_status,
    parse_weather,
)
from ..utils.metrics import summarize_sweep
from .sampling import sample_distances
from .storage import SweepStore, NUMERIC_FIELDS

logger = logging.getLogger(__name__)


def run_sweep(
    weathers: Iterable[Union[str, WeatherType]],
    distances: np.ndarray,
    config: Optional[LinkConfig] = None,
    progress: bool = False
) -> Dict[str, Dict[str, np.ndarray]]:
    """
    Evaluate every weather condition at every distance.

    Args:
        weathers: Weather names or WeatherType members
        distances: Distances in km
        config: System constants
        progress: Show a progress bar

    Returns:
        Arrays keyed by weather name, then by LinkStats field
    """
    config = config or DEFAULT_LINK_CONFIG
    distances = np.asarray(distances, dtype=np.float64)
    weather_types = [parse_weather(w) for w in weathers]

    results = {}
    for weather in tqdm(weather_types, desc="Weather conditions", disable=not progress):
        profile = get_weather_profile(weather)
        rows = [evaluate_link(profile, float(d), config) for d in distances]

        data = {name: np.array([getattr(row, name) for row in rows], dtype=np.float64)
                for name in NUMERIC_FIELDS}
        data['status'] = np.array([row.status.value for row in rows], dtype=str)
        results[weather.value] = data

    return results


class SweepGenerator:
    """
    Generator for link sweep datasets.

    Runs sweeps, writes them to HDF5 and records summary metadata.
    """

    def __init__(self, output_dir: Path, config: Optional[LinkConfig] = None):
        """
        Initialize sweep generator.

        Args:
            output_dir: Output directory for sweep files
            config: System constants
        """
        self.output_dir = Path(output_dir)
        self.config = (config or DEFAULT_LINK_CONFIG).validate()
        self.generation_time = 0.0

        self.output_dir.mkdir(parents=True, exist_ok=True)

    def generate(
        self,
        weathers: Iterable[Union[str, WeatherType]],
        distances: np.ndarray,
        attrs: Optional[Dict] = None
    ) -> Dict:
        """
        Generate and store a sweep.

        Args:
            weathers: Weather conditions to evaluate
            distances: Distances in km
            attrs: Extra attributes stored in the HDF5 file

        Returns:
            Dictionary with results, output files and timing
        """
        start_time = time.time()
        weathers = list(weathers)
        distances = np.sort(np.asarray(distances, dtype=np.float64))

        logger.info(f"Sweeping {len(weathers)} weather conditions over {len(distances)} distances")

        results = run_sweep(weathers, distances, self.config, progress=True)

        output_file = SweepStore(self.output_dir / "sweep.h5").save(results, attrs)
        self.generation_time = time.time() - start_time

        metadata = self._create_metadata(results, distances)
        metadata_file = self.output_dir / "sweep_metadata.json"
        with open(metadata_file, 'w') as f:
            json.dump(metadata, f, indent=2)

        logger.info(f"Sweep saved to {output_file} in {self.generation_time:.3f} seconds")

        return {
            'results': results,
            'num_points': len(distances) * len(results),
            'output_file': output_file,
            'metadata_file': metadata_file,
            'generation_time': self.generation_time,
        }

    def _create_metadata(self, results: Dict[str, Dict[str, np.ndarray]], distances: np.ndarray) -> Dict:
        """Create sweep metadata."""
        if len(distances) == 0:
            return {}

        d_min, d_max = float(distances[0]), float(distances[-1])
        weather_summaries = {}
        for weather, data in results.items():
            summary = summarize_sweep(distances, data)
            profile = get_weather_profile(weather)
            summary['attenuation_coefficient'] = profile.attenuation_coefficient
            summary['excellent_range_km'] = max_distance_for_status(
                profile, LinkStatus.EXCELLENT, d_min, d_max, config=self.config
            )
            summary['good_range_km'] = max_distance_for_status(
                profile, LinkStatus.GOOD, d_min, d_max, config=self.config
            )
            weather_summaries[weather] = summary

        return {
            'sweep_info': {
                'num_distances': len(distances),
                'distance_range_km': [d_min, d_max],
                'weathers': list(results.keys()),
                'generation_time': self.generation_time,
            },
            'configuration': self.config.to_dict(),
            'weather_summaries': weather_summaries,
        }


def generate_link_sweep(
    output_dir: Path,
    num_points: int = 150,
    distance_range: Tuple[float, float] = (0.1, 15.0),
    weathers: Optional[List[Union[str, WeatherType]]] = None,
    sampling_method: str = "linspace",
    config: Optional[LinkConfig] = None,
    seed: Optional[int] = None
) -> Dict:
    """
    High-level function to generate a link sweep.

    Args:
        output_dir: Output directory
        num_points: Number of distances to evaluate
        distance_range: Distance range in km
        weathers: Weather conditions (defaults to all)
        sampling_method: Sampling method
        config: System constants
        seed: Random seed

    Returns:
        Generation statistics dictionary
    """
    distances = sample_distances(num_points, distance_range, method=sampling_method, seed=seed)
    generator = SweepGenerator(output_dir, config=config)
    return generator.generate(
        weathers or list(WeatherType),
        distances,
        attrs={'sampling_method': sampling_method, 'num_points': num_points},
    )
