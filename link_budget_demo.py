#!/usr/bin/env python3
"""
Demo script for the FSO link budget estimator.
"""

import numpy as np
from pathlib import Path

from fso_analyzer import LinkBudgetEstimator, WeatherType
from fso_analyzer.data import run_sweep
from fso_analyzer.simulation import LinkStatus, WEATHER_PROFILES, max_distance_for_status
from fso_analyzer.utils import format_ber
from fso_analyzer.utils.visualization import plot_link_performance, plot_eye_diagram


def main():
    """Run a demonstration of the link budget estimator."""
    print("=== FSO-Analyzer Link Budget Demo ===\n")

    distance = 1.5  # km
    output_dir = Path("demo_results")

    print(f"{'Weather':<8} {'Loss [dB]':>10} {'SNR [dB]':>9} {'Q':>7} {'BER':>12} {'Gbps':>7}  Status")
    for weather in WeatherType:
        estimator = LinkBudgetEstimator(weather, distance)
        stats = estimator.run()
        print(
            f"{weather.value:<8} {stats.total_attenuation_db:>10.2f} {stats.snr_db:>9.2f} "
            f"{stats.q_factor:>7.2f} {format_ber(stats.bit_error_rate):>12} "
            f"{stats.current_throughput_gbps:>7.1f}  {stats.status.value}"
        )
        estimator.save_results(stats, output_dir / weather.value.lower())
        plot_eye_diagram(stats, output_dir / f"eye_{weather.value.lower()}.png")

    print("\nError-free range (BER < 1e-12) within 15 km:")
    for weather, profile in WEATHER_PROFILES.items():
        max_range = max_distance_for_status(profile, LinkStatus.EXCELLENT, 0.0, 15.0)
        print(f"  {weather.value:<6} {max_range:.3f} km" if max_range is not None else f"  {weather.value:<6} none")

    # Sweep and plot
    results = run_sweep(list(WeatherType), np.linspace(0.1, 15.0, 300))
    plot_path = plot_link_performance(results, output_dir)
    print(f"\nVisualization saved to: {plot_path}")

    print(f"\nDemo completed successfully!")
    print(f"Results saved to: {output_dir}")


if __name__ == "__main__":
    main()
