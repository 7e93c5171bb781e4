"""
Visualization utilities for FSO-Analyzer.

This module provides visualization functions for:
- Link performance versus distance for each weather condition
- Static eye diagrams reflecting SNR and BER
"""

from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns

from ..simulation.core import LinkStats, LinkConfig, DEFAULT_LINK_CONFIG
from .metrics import eye_noise_fraction, eye_trace_alpha


def plot_link_performance(
    results: Dict[str, Dict[str, np.ndarray]],
    output_dir: Path,
    config: Optional[LinkConfig] = None,
    figsize: Tuple[int, int] = (15, 5),
    dpi: int = 150
) -> Path:
    """
    Plot SNR, BER and throughput against distance for each weather condition.

    Args:
        results: Sweep arrays keyed by weather name, then by LinkStats field
            (must include 'distance_km')
        output_dir: Directory to save the plot
        config: System constants, used for threshold markers
        figsize: Figure size (width, height)
        dpi: Figure DPI for saving

    Returns:
        Path of the saved figure
    """
    config = config or DEFAULT_LINK_CONFIG
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    sns.set_style("darkgrid")
    palette = sns.color_palette("viridis", n_colors=max(len(results), 1))

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    for color, (weather, data) in zip(palette, results.items()):
        distances = data['distance_km']
        axes[0].plot(distances, data['snr_db'], label=weather, color=color, linewidth=2)
        axes[1].semilogy(distances, data['bit_error_rate'], label=weather, color=color, linewidth=2)
        axes[2].plot(distances, data['current_throughput_gbps'], label=weather, color=color, linewidth=2)

    axes[0].set_ylabel("SNR [dB]")
    axes[0].set_title("Signal-to-Noise Ratio")

    axes[1].axhline(config.excellent_ber, color='green', linestyle='--', alpha=0.6, label='Excellent limit')
    axes[1].axhline(config.good_ber, color='orange', linestyle='--', alpha=0.6, label='Good limit')
    axes[1].axhline(10 ** config.fec_limit_log_ber, color='red', linestyle=':', alpha=0.6, label='FEC limit')
    axes[1].set_ylabel("Bit Error Rate")
    axes[1].set_title("Bit Error Rate")

    axes[2].set_ylim(-5, config.peak_throughput_gbps * 1.05)
    axes[2].set_ylabel("Throughput [Gbps]")
    axes[2].set_title("Adaptive Throughput")

    for ax in axes:
        ax.set_xlabel("Distance [km]")
        ax.legend(fontsize=8)

    plt.suptitle("FSO Link Performance vs Distance", fontsize=14, fontweight='bold')
    plt.tight_layout()

    save_path = output_dir / "link_performance.png"
    plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return save_path


def plot_eye_diagram(
    stats: LinkStats,
    save_path: Union[str, Path],
    samples: int = 12,
    seed: Optional[int] = 0,
    figsize: Tuple[int, int] = (6, 3.5),
    dpi: int = 150
) -> Path:
    """
    Render a static OOK eye diagram for a link evaluation.

    Trace jitter scales with `eye_noise_fraction` and opacity with
    `eye_trace_alpha`, so a degraded link closes the eye.

    Args:
        stats: Link evaluation result
        save_path: Output image path
        samples: Number of overlaid symbol traces
        seed: Seed for the jitter generator
        figsize: Figure size
        dpi: Figure DPI for saving

    Returns:
        Path of the saved figure
    """
    rng = np.random.default_rng(seed)
    noise = eye_noise_fraction(stats.snr_db) * 0.25
    alpha = eye_trace_alpha(stats.bit_error_rate) * 0.4

    t = np.linspace(0, 1, 100)
    # Smoothstep transition between the two decision levels
    rise = 0.25 + 0.5 * (3 * t**2 - 2 * t**3)

    fig, ax = plt.subplots(figsize=figsize)
    ax.set_facecolor('#0f172a')

    for _ in range(samples):
        for base in (rise, 1.0 - rise, np.full_like(t, 0.25), np.full_like(t, 0.75)):
            jitter = (rng.random(2) - 0.5) * noise
            trace = base + np.linspace(jitter[0], jitter[1], t.size)
            ax.plot(t, trace, color='#3b82f6', alpha=alpha, linewidth=2)

    ax.set_xlim(0, 1)
    ax.set_ylim(0, 1)
    ax.set_xlabel("Unit Interval")
    ax.set_ylabel("Amplitude")
    ax.set_title(f"Eye Diagram (SNR {stats.snr_db:.1f} dB, {stats.status.value})")

    save_path = Path(save_path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    plt.tight_layout()
    plt.savefig(save_path, dpi=dpi, bbox_inches='tight')
    plt.close(fig)

    return save_path
