"""
HDF5 storage for link sweep results.

Layout: one group per weather condition, one dataset per LinkStats field,
plus file-level attributes describing the sweep.
"""

from pathlib import Path
from typing import Dict, Optional

import h5py
import numpy as np

NUMERIC_FIELDS = (
    'distance_km',
    'total_attenuation_db',
    'received_power_dbm',
    'snr_db',
    'q_factor',
    'bit_error_rate',
    'current_throughput_gbps',
)


class SweepStore:
    """Reads and writes sweep results to a single HDF5 file."""

    def __init__(self, filepath: Path):
        self.filepath = Path(filepath)

    def save(self, results: Dict[str, Dict[str, np.ndarray]], attrs: Optional[Dict] = None) -> Path:
        """
        Save sweep results.

        Args:
            results: Arrays keyed by weather name, then by LinkStats field
            attrs: Optional scalar attributes stored on the file

        Returns:
            Path of the written file
        """
        self.filepath.parent.mkdir(parents=True, exist_ok=True)

        with h5py.File(self.filepath, 'w') as f:
            for weather, data in results.items():
                group = f.create_group(weather)
                for name in NUMERIC_FIELDS:
                    group.create_dataset(name, data=np.asarray(data[name], dtype=np.float64))
                group.create_dataset(
                    'status',
                    data=np.asarray(data['status'], dtype=object),
                    dtype=h5py.string_dtype(),
                )
                group.attrs['num_points'] = len(data['distance_km'])

            f.attrs.create('weathers', np.array(list(results.keys()), dtype=object), dtype=h5py.string_dtype())
            for key, value in (attrs or {}).items():
                f.attrs[key] = value

        return self.filepath

    def load(self) -> Dict[str, Dict[str, np.ndarray]]:
        """
        Load sweep results.

        Returns:
            Arrays keyed by weather name, then by LinkStats field, in the
            order they were saved
        """
        results = {}
        with h5py.File(self.filepath, 'r') as f:
            # Group iteration is alphabetical, the attribute keeps save order
            if 'weathers' in f.attrs:
                weathers = [str(w) for w in f.attrs['weathers']]
            else:
                weathers = list(f.keys())

            for weather in weathers:
                group = f[weather]
                data = {name: group[name][()] for name in NUMERIC_FIELDS}
                data['status'] = np.array(group['status'].asstr()[()], dtype=str)
                results[weather] = data
        return results

    def load_attrs(self) -> Dict:
        """Load file-level attributes."""
        with h5py.File(self.filepath, 'r') as f:
            attrs = {}
            for key, value in f.attrs.items():
                attrs[key] = value.tolist() if isinstance(value, np.ndarray) else value
            return attrs
