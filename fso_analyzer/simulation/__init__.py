"""
Link simulation module for FSO link budget estimation.

This module contains the core estimator components including:
- Weather profile table
- Complementary error function approximation and BER models
- evaluate_link and the LinkBudgetEstimator class
- Per-user channel breakdown
"""

from .weather import WeatherType, WeatherProfile, WEATHER_PROFILES, get_weather_profile, parse_weather
from .physics import erfc, geometric_loss_db, q_factor_from_snr, bit_error_rate_from_q, throughput_multiplier
from .core import (
    LinkConfig,
    DEFAULT_LINK_CONFIG,
    LinkStats,
    LinkStatus,
    LinkBudgetEstimator,
    evaluate_link,
    classify_status,
    max_distance_for_status,
)
from .channels import UserChannel, BEAM_COLORS, channel_breakdown, user_channel

__all__ = [
    "WeatherType",
    "WeatherProfile",
    "WEATHER_PROFILES",
    "get_weather_profile",
    "parse_weather",
    "erfc",
    "geometric_loss_db",
    "q_factor_from_snr",
    "bit_error_rate_from_q",
    "throughput_multiplier",
    "LinkConfig",
    "DEFAULT_LINK_CONFIG",
    "LinkStats",
    "LinkStatus",
    "LinkBudgetEstimator",
    "evaluate_link",
    "classify_status",
    "max_distance_for_status",
    "UserChannel",
    "BEAM_COLORS",
    "channel_breakdown",
    "user_channel",
]
