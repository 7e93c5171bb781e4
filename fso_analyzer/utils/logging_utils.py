"""
Logging utilities for FSO-Analyzer.

This module provides centralized logging configuration and a helper for
reporting link evaluations.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(
    name: str = "fso_analyzer",
    level: Union[str, int] = "INFO",
    log_file: Optional[Path] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """
    Setup a logger with consistent formatting.

    Args:
        name: Logger name
        level: Logging level name (DEBUG, INFO, ...) or numeric level
        log_file: Optional file path for logging output
        format_string: Custom format string

    Returns:
        Configured logger instance
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Reconfiguring replaces handlers instead of stacking them
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = "fso_analyzer") -> logging.Logger:
    """Get an existing logger instance."""
    return logging.getLogger(name)


def log_link_stats(logger: logging.Logger, stats, level: int = logging.INFO):
    """
    Log every field of a LinkStats snapshot, one per line.

    Args:
        logger: Target logger
        stats: LinkStats to report
        level: Logging level
    """
    logger.log(level, f"Distance: {stats.distance_km:.2f} km")
    logger.log(level, f"Total attenuation: {stats.total_attenuation_db:.2f} dB")
    logger.log(level, f"Received power: {stats.received_power_dbm:.2f} dBm")
    logger.log(level, f"SNR: {stats.snr_db:.2f} dB")
    logger.log(level, f"Q-factor: {stats.q_factor:.2f}")
    logger.log(level, f"Bit error rate: {stats.bit_error_rate:.2e}")
    logger.log(level, f"Throughput: {stats.current_throughput_gbps:.1f} Gbps")
    logger.log(level, f"Status: {stats.status.value}")
