"""
FSO-Analyzer: Link Budget and Bit Error Rate Estimation for Free-Space Optical Links

A toolkit for estimating attenuation, SNR, bit error rate and adaptive
throughput of a free-space optical link as a function of weather and distance.
"""

__version__ = "0.1.0"
__author__ = "FSO-Analyzer Development Team"

from .simulation import (
    WeatherType,
    WeatherProfile,
    WEATHER_PROFILES,
    LinkConfig,
    LinkStats,
    LinkStatus,
    LinkBudgetEstimator,
    evaluate_link,
    erfc,
)

__all__ = [
    "WeatherType",
    "WeatherProfile",
    "WEATHER_PROFILES",
    "LinkConfig",
    "LinkStats",
    "LinkStatus",
    "LinkBudgetEstimator",
    "evaluate_link",
    "erfc",
]
