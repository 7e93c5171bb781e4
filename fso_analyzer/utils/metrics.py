"""
Display metrics for FSO link dashboards.

This module maps LinkStats values onto the gauges, labels and capacity bars
a presentation layer renders. All functions are pure.
"""

import logging
from typing import Dict, List, Optional

import numpy as np

from ..simulation.core import LinkConfig, LinkStats, LinkStatus, DEFAULT_LINK_CONFIG

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    LinkStatus.EXCELLENT: "green",
    LinkStatus.GOOD: "yellow",
    LinkStatus.POOR: "red",
}


def format_ber(ber: float) -> str:
    """
    Format a BER as a power of ten.

    Args:
        ber: Bit error rate

    Returns:
        Label such as "10^-9.3", or " < 10⁻²⁴" for BERs at the floor
    """
    if ber < 1e-24:
        return " < 10⁻²⁴"
    return f"10^{np.log10(ber):.1f}"


def snr_gauge_percent(snr_db: float) -> float:
    """SNR gauge fill, full scale at 50 dB."""
    return float(min(100.0, (snr_db / 50) * 100))


def ber_gauge_percent(ber: float) -> float:
    """BER gauge fill on a 15-decade log scale, never below 5%."""
    return float(max(5.0, (1 - np.log10(ber) / -15) * 100))


def power_gauge_percent(received_power_dbm: float) -> float:
    """Received power gauge fill over -60..20 dBm, never below 10%."""
    return float(max(10.0, (received_power_dbm + 60) / 80 * 100))


def capacity_percent(throughput_gbps: float, peak_gbps: float = 160.0) -> float:
    """Share of peak capacity in use."""
    return float(throughput_gbps / peak_gbps * 100)


def capacity_segments(throughput_gbps: float, segment_gbps: float = 10.0, count: int = 16) -> List[str]:
    """
    Split capacity into fixed-size bar segments.

    Args:
        throughput_gbps: Current throughput
        segment_gbps: Capacity represented by one segment
        count: Number of segments

    Returns:
        List of "active", "partial" or "idle" per segment
    """
    segments = []
    for i in range(count):
        if (i + 1) * segment_gbps <= throughput_gbps:
            segments.append("active")
        elif i * segment_gbps < throughput_gbps:
            segments.append("partial")
        else:
            segments.append("idle")
    return segments


def eye_noise_fraction(snr_db: float) -> float:
    """
    Eye diagram noise amplitude as a fraction of a quarter of the eye height.

    Noise vanishes (down to 1%) as SNR approaches 40 dB.
    """
    return float(max(0.01, 1 - snr_db / 40))


def eye_trace_alpha(ber: float) -> float:
    """Eye diagram trace opacity in [0.1, 1], rising with log10(BER)."""
    return float(max(0.1, 1 - np.log10(ber + 1e-20) / -12))


def status_color(status: LinkStatus) -> str:
    return STATUS_COLORS[LinkStatus(status)]


def hud_snapshot(stats: LinkStats, config: Optional[LinkConfig] = None) -> Dict:
    """
    Collect every value a dashboard displays for one evaluation.

    Args:
        stats: Link evaluation result
        config: System constants

    Returns:
        Dictionary of raw LinkStats fields plus formatted and gauge values
    """
    config = config or DEFAULT_LINK_CONFIG
    segment_gbps = config.peak_throughput_gbps / config.total_users

    snapshot = stats.to_dict()
    snapshot.update({
        'status_color': status_color(stats.status),
        'ber_label': format_ber(stats.bit_error_rate),
        'snr_percent': snr_gauge_percent(stats.snr_db),
        'ber_percent': ber_gauge_percent(stats.bit_error_rate),
        'power_percent': power_gauge_percent(stats.received_power_dbm),
        'capacity_percent': capacity_percent(stats.current_throughput_gbps, config.peak_throughput_gbps),
        'capacity_segments': capacity_segments(
            stats.current_throughput_gbps, segment_gbps=segment_gbps, count=config.total_users
        ),
        'eye_noise_fraction': eye_noise_fraction(stats.snr_db),
        'eye_trace_alpha': eye_trace_alpha(stats.bit_error_rate),
    })
    return snapshot


def summarize_sweep(distances: np.ndarray, results: Dict[str, np.ndarray]) -> Dict[str, Optional[float]]:
    """
    Summarise one weather's distance sweep.

    Args:
        distances: Sorted distances in km
        results: Arrays keyed by LinkStats field name, aligned with distances

    Returns:
        Dictionary with min/max per metric plus the error-free and outage
        distances (None when not reached inside the sweep)
    """
    distances = np.asarray(distances)
    if len(distances) == 0:
        logger.warning("Empty sweep, nothing to summarise")
        return {}

    summary = {}
    for name in ('total_attenuation_db', 'received_power_dbm', 'snr_db',
                 'bit_error_rate', 'current_throughput_gbps'):
        values = np.asarray(results[name])
        summary[f'{name}_min'] = float(np.min(values))
        summary[f'{name}_max'] = float(np.max(values))

    throughput = np.asarray(results['current_throughput_gbps'])
    status = np.asarray(results['status'])

    excellent = distances[status == LinkStatus.EXCELLENT.value]
    summary['max_excellent_distance_km'] = float(np.max(excellent)) if len(excellent) else None

    outage = distances[throughput <= 0]
    summary['outage_distance_km'] = float(np.min(outage)) if len(outage) else None

    return summary
