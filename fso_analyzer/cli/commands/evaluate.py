"""
Evaluation command for FSO-Analyzer CLI.

This module implements the 'evaluate' subcommand that computes the link
budget for a single weather condition and distance.
"""

import json
import click
from pathlib import Path
from typing import Optional

from fso_analyzer.simulation import WeatherType


@click.command()
@click.option(
    "--weather", "-w",
    type=click.Choice([w.value.lower() for w in WeatherType], case_sensitive=False),
    default="clear",
    help="Weather condition"
)
@click.option(
    "--distance", "-d",
    type=float,
    required=True,
    help="Link distance in km"
)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Link configuration file (.json or .yaml)"
)
@click.option(
    "--output-file", "-o",
    type=click.Path(path_type=Path),
    help="Output file for the evaluation summary (.json)"
)
@click.option(
    "--channels",
    is_flag=True,
    help="Report the per-user channel breakdown"
)
@click.option(
    "--eye-diagram",
    type=click.Path(path_type=Path),
    help="Save an eye diagram image to this path"
)
@click.pass_context
def evaluate(
    ctx,
    weather: str,
    distance: float,
    config_file: Optional[Path],
    output_file: Optional[Path],
    channels: bool,
    eye_diagram: Optional[Path]
):
    """
    Evaluate the link budget for one weather condition and distance.

    Reports attenuation, received power, SNR, Q-factor, BER, adaptive
    throughput and link status.
    """
    logger = ctx.obj['logger']
    logger.info("Starting link evaluation...")
    logger.info(f"Weather: {weather.upper()}")
    logger.info(f"Distance: {distance} km")

    try:
        from fso_analyzer.simulation import LinkBudgetEstimator, LinkConfig, channel_breakdown
        from fso_analyzer.utils.logging_utils import log_link_stats
        from fso_analyzer.utils.metrics import hud_snapshot

        config = LinkConfig.load(config_file) if config_file else None
        if config_file:
            logger.info(f"Loaded configuration: {config_file}")

        estimator = LinkBudgetEstimator(weather, distance, config=config)
        stats = estimator.run()

        log_link_stats(logger, stats)

        hud = hud_snapshot(stats, estimator.config)
        logger.info(f"BER label: {hud['ber_label']}")
        logger.info(f"Capacity: {hud['capacity_percent']:.1f}% of peak")

        budget = estimator.analyze_link_budget(stats)
        logger.info(f"Weather loss: {budget['weather_loss_db']:.2f} dB")
        logger.info(f"Geometric loss: {budget['geometric_loss_db']:.2f} dB")
        logger.info(f"Link margin: {budget['link_margin_db']:.2f} dB")

        if channels:
            for channel in channel_breakdown(stats, estimator.config):
                logger.info(
                    f"User #{channel.user_number}: OAM L={channel.oam_mode}, "
                    f"code {channel.code}, {channel.effective_rate_gbps:.2f} Gbps "
                    f"(base {channel.base_rate_gbps:.0f} Gbps)"
                )

        if output_file:
            output_file.parent.mkdir(parents=True, exist_ok=True)
            summary = estimator.get_link_summary(stats)
            summary['display'] = hud
            with open(output_file, 'w') as f:
                json.dump(summary, f, indent=2)
            logger.info(f"Summary saved to: {output_file}")

        if eye_diagram:
            from fso_analyzer.utils.visualization import plot_eye_diagram
            plot_eye_diagram(stats, eye_diagram)
            logger.info(f"Eye diagram saved to: {eye_diagram}")

        logger.info("Evaluation completed successfully!")

    except Exception as e:
        logger.error(f"Evaluation failed: {e}")
        ctx.exit(1)
