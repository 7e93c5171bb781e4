"""
Utility functions and helper modules.

This module provides:
- Dashboard display metrics
- Visualization tools
- Logging utilities
"""

from .metrics import *
from .logging_utils import setup_logger, get_logger, log_link_stats

__all__ = [
    "setup_logger",
    "get_logger",
    "log_link_stats",
    "format_ber",
    "snr_gauge_percent",
    "ber_gauge_percent",
    "power_gauge_percent",
    "capacity_percent",
    "capacity_segments",
    "eye_noise_fraction",
    "eye_trace_alpha",
    "status_color",
    "hud_snapshot",
    "summarize_sweep",
]
