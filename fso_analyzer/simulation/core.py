"""
Core FSO link budget estimation.

This module provides the pure `evaluate_link` function that turns a weather
profile and a link distance into a `LinkStats` snapshot, the `LinkConfig`
holding the fixed system constants, and the `LinkBudgetEstimator` wrapper
used by the CLI and reporting tools.
"""

import json
import logging
from dataclasses import dataclass, asdict, fields
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

import numpy as np
import yaml

from .physics import (
    geometric_loss_db,
    q_factor_from_snr,
    bit_error_rate_from_q,
    throughput_multiplier,
)
from .weather import WeatherProfile, WeatherType, get_weather_profile, parse_weather

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkConfig:
    """System constants for the FSO link."""
    tx_power_dbm: float = 20.0
    noise_floor_dbm: float = -50.0
    peak_throughput_gbps: float = 160.0
    fec_limit_log_ber: float = -3.0  # 1e-3, hard-decision FEC limit
    error_free_log_ber: float = -12.0
    ber_floor: float = 1e-25
    excellent_ber: float = 1e-12
    good_ber: float = 1e-9

    # Channel layout of the multiplexing hub
    total_beams: int = 4
    users_per_beam: int = 4
    base_user_rate_gbps: float = 10.0

    @property
    def total_users(self) -> int:
        return self.total_beams * self.users_per_beam

    def validate(self) -> 'LinkConfig':
        """Check the constants are mutually consistent and return self."""
        non_finite = [f.name for f in fields(self) if not np.isfinite(getattr(self, f.name))]
        if non_finite:
            raise ValueError(f"Configuration values must be finite: {non_finite}")
        if self.peak_throughput_gbps <= 0:
            raise ValueError("Peak throughput must be positive")
        if self.error_free_log_ber >= self.fec_limit_log_ber:
            raise ValueError("Error-free log-BER must be below the FEC limit log-BER")
        if not 0 < self.ber_floor < 1:
            raise ValueError("BER floor must be between 0 and 1")
        if not self.ber_floor < self.excellent_ber < self.good_ber <= 1:
            raise ValueError("BER thresholds must satisfy ber_floor < excellent_ber < good_ber <= 1")
        if self.total_beams < 1 or self.users_per_beam < 1:
            raise ValueError("Beam and user counts must be at least 1")
        if self.base_user_rate_gbps <= 0:
            raise ValueError("Base user rate must be positive")
        return self

    def to_dict(self) -> Dict:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict) -> 'LinkConfig':
        """Create from dictionary."""
        unknown = sorted(set(data) - {f.name for f in fields(cls)})
        if unknown:
            raise ValueError(f"Unknown configuration keys: {unknown}")
        return cls(**data).validate()

    def save(self, filepath: Path):
        """Save configuration to a JSON or YAML file."""
        filepath = Path(filepath)
        with open(filepath, 'w') as f:
            if filepath.suffix in (".yaml", ".yml"):
                yaml.safe_dump(self.to_dict(), f, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, filepath: Path) -> 'LinkConfig':
        """Load configuration from a JSON or YAML file."""
        filepath = Path(filepath)
        with open(filepath, 'r') as f:
            if filepath.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)
        return cls.from_dict(data)


DEFAULT_LINK_CONFIG = LinkConfig()


class LinkStatus(str, Enum):
    """Qualitative link classification derived from BER."""
    EXCELLENT = "EXCELLENT"
    GOOD = "GOOD"
    POOR = "POOR"

    @property
    def rank(self) -> int:
        return {"POOR": 0, "GOOD": 1, "EXCELLENT": 2}[self.value]


@dataclass(frozen=True)
class LinkStats:
    """Snapshot of link performance for one (weather, distance) evaluation."""
    distance_km: float
    total_attenuation_db: float
    received_power_dbm: float
    snr_db: float
    q_factor: float
    bit_error_rate: float
    current_throughput_gbps: float
    status: LinkStatus

    def to_dict(self) -> Dict:
        """Convert to a JSON-serialisable dictionary."""
        data = asdict(self)
        data['status'] = self.status.value
        return data


def classify_status(bit_error_rate: float, config: LinkConfig = DEFAULT_LINK_CONFIG) -> LinkStatus:
    """Classify a BER, first matching threshold wins."""
    if bit_error_rate < config.excellent_ber:
        return LinkStatus.EXCELLENT
    if bit_error_rate < config.good_ber:
        return LinkStatus.GOOD
    return LinkStatus.POOR


def _validate_inputs(weather_profile: WeatherProfile, distance_km: float):
    """Reject inputs outside the estimator's contract."""
    if not np.isfinite(distance_km) or distance_km < 0:
        raise ValueError(f"Link distance must be non-negative and finite, got {distance_km}")
    coefficient = weather_profile.attenuation_coefficient
    if not np.isfinite(coefficient) or coefficient < 0:
        raise ValueError(f"Attenuation coefficient must be non-negative and finite, got {coefficient}")
    if not np.isfinite(coefficient * distance_km):
        raise ValueError(f"Weather attenuation overflows for {coefficient} dB/km over {distance_km} km")


def evaluate_link(
    weather_profile: WeatherProfile,
    distance_km: float,
    config: Optional[LinkConfig] = None
) -> LinkStats:
    """
    Evaluate the link budget for a weather profile and distance.

    Pure and deterministic: identical inputs always give identical output.

    Args:
        weather_profile: Weather profile supplying the attenuation coefficient
        distance_km: Link distance in km (non-negative, finite)
        config: System constants (defaults to DEFAULT_LINK_CONFIG)

    Returns:
        Fully populated LinkStats

    Raises:
        ValueError: If the distance or attenuation coefficient is negative,
            NaN or infinite
    """
    config = config or DEFAULT_LINK_CONFIG
    _validate_inputs(weather_profile, distance_km)

    weather_attenuation_db = weather_profile.attenuation_coefficient * distance_km
    total_attenuation_db = weather_attenuation_db + geometric_loss_db(distance_km)
    received_power_dbm = config.tx_power_dbm - total_attenuation_db

    snr_db = max(0.0, received_power_dbm - config.noise_floor_dbm)
    q_factor = q_factor_from_snr(snr_db)
    ber = bit_error_rate_from_q(q_factor, ber_floor=config.ber_floor)

    multiplier = throughput_multiplier(
        ber,
        fec_limit_log_ber=config.fec_limit_log_ber,
        error_free_log_ber=config.error_free_log_ber,
        ber_floor=config.ber_floor,
    )

    return LinkStats(
        distance_km=float(distance_km),
        total_attenuation_db=float(total_attenuation_db),
        received_power_dbm=float(received_power_dbm),
        snr_db=float(snr_db),
        q_factor=float(q_factor),
        bit_error_rate=float(ber),
        current_throughput_gbps=float(config.peak_throughput_gbps * multiplier),
        status=classify_status(ber, config),
    )


def max_distance_for_status(
    weather_profile: WeatherProfile,
    status: LinkStatus,
    min_distance_km: float = 0.0,
    max_distance_km: float = 15.0,
    tol: float = 1e-3,
    config: Optional[LinkConfig] = None
) -> Optional[float]:
    """
    Find the largest distance in a range that still meets a status.

    Status only degrades with distance, so a binary search is sufficient.

    Args:
        weather_profile: Weather profile
        status: Minimum acceptable status
        min_distance_km: Lower end of the search range
        max_distance_km: Upper end of the search range
        tol: Distance tolerance in km
        config: System constants

    Returns:
        Largest qualifying distance in km, or None if even the lower end fails
    """
    status = LinkStatus(status)
    if max_distance_km < min_distance_km:
        raise ValueError("max_distance_km must not be below min_distance_km")

    def meets(distance_km: float) -> bool:
        return evaluate_link(weather_profile, distance_km, config).status.rank >= status.rank

    if not meets(min_distance_km):
        return None
    if meets(max_distance_km):
        return float(max_distance_km)

    lo, hi = min_distance_km, max_distance_km
    while hi - lo > tol:
        mid = 0.5 * (lo + hi)
        if meets(mid):
            lo = mid
        else:
            hi = mid
    return float(lo)


class LinkBudgetEstimator:
    """
    FSO link budget estimator for a fixed weather condition and distance.

    Wraps `evaluate_link` with input resolution, itemised budget analysis and
    result export.
    """

    def __init__(
        self,
        weather: Union[str, WeatherType, WeatherProfile],
        distance_km: float,
        config: Optional[LinkConfig] = None
    ):
        """
        Initialize the estimator.

        Args:
            weather: Weather name, WeatherType or a custom WeatherProfile
            distance_km: Link distance in km
            config: System constants (defaults to DEFAULT_LINK_CONFIG)
        """
        if isinstance(weather, WeatherProfile):
            self.weather_type = None
            self.weather_profile = weather
        else:
            self.weather_type = parse_weather(weather)
            self.weather_profile = get_weather_profile(self.weather_type)

        self.distance_km = distance_km
        self.config = (config or DEFAULT_LINK_CONFIG).validate()
        _validate_inputs(self.weather_profile, distance_km)

    def run(self) -> LinkStats:
        """Evaluate the link."""
        stats = evaluate_link(self.weather_profile, self.distance_km, self.config)
        logger.debug(
            f"{self.weather_profile.label or 'custom'} @ {self.distance_km} km: "
            f"SNR {stats.snr_db:.1f} dB, BER {stats.bit_error_rate:.2e}, "
            f"{stats.current_throughput_gbps:.1f} Gbps ({stats.status.value})"
        )
        return stats

    def analyze_link_budget(self, stats: LinkStats) -> Dict:
        """
        Itemise the link budget.

        Args:
            stats: Result of `run`

        Returns:
            Dictionary of budget terms in dB/dBm
        """
        weather_loss_db = self.weather_profile.attenuation_coefficient * self.distance_km
        return {
            'tx_power_dbm': self.config.tx_power_dbm,
            'weather_loss_db': weather_loss_db,
            'geometric_loss_db': geometric_loss_db(self.distance_km),
            'total_loss_db': stats.total_attenuation_db,
            'received_power_dbm': stats.received_power_dbm,
            'noise_floor_dbm': self.config.noise_floor_dbm,
            # Unclamped, negative when the signal sits below the noise floor
            'link_margin_db': stats.received_power_dbm - self.config.noise_floor_dbm,
        }

    def get_link_summary(self, stats: LinkStats) -> Dict:
        """
        Get a comprehensive, JSON-serialisable summary of an evaluation.

        Args:
            stats: Result of `run`

        Returns:
            Dictionary containing configuration, results, budget and channels
        """
        from .channels import channel_breakdown

        return {
            'configuration': self.config.to_dict(),
            'weather': {
                'condition': self.weather_type.value if self.weather_type else None,
                **self.weather_profile.to_dict(),
            },
            'results': stats.to_dict(),
            'link_budget': self.analyze_link_budget(stats),
            'channels': [channel.to_dict() for channel in channel_breakdown(stats, self.config)],
        }

    def save_results(self, stats: LinkStats, output_dir: Path) -> Path:
        """
        Save the evaluation summary and configuration.

        Args:
            stats: Result of `run`
            output_dir: Output directory

        Returns:
            Path of the written summary file
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        summary_file = output_dir / "summary.json"
        with open(summary_file, 'w') as f:
            json.dump(self.get_link_summary(stats), f, indent=2)

        self.config.save(output_dir / "config.json")

        logger.info(f"Results saved to: {output_dir}")
        return summary_file
