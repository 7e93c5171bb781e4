"""
Sweep command for FSO-Analyzer CLI.

This module implements the 'sweep' subcommand that evaluates the link across
a range of distances for several weather conditions.
"""

import click
from pathlib import Path
from typing import Optional, Tuple

from fso_analyzer.simulation import WeatherType


@click.command()
@click.option(
    "--output-dir", "-o",
    type=click.Path(path_type=Path),
    required=True,
    help="Output directory for sweep results"
)
@click.option(
    "--weather", "-w",
    "weathers",
    multiple=True,
    type=click.Choice([w.value.lower() for w in WeatherType], case_sensitive=False),
    help="Weather condition (repeatable, default: all)"
)
@click.option(
    "--distance-range",
    type=(float, float),
    default=(0.1, 15.0),
    help="Distance range in km (min, max)"
)
@click.option(
    "--num-points", "-n",
    type=int,
    default=150,
    help="Number of distances to evaluate"
)
@click.option(
    "--sampling-method",
    type=click.Choice(["linspace", "uniform", "latin_hypercube", "sobol", "halton"]),
    default="linspace",
    help="Distance sampling method"
)
@click.option(
    "--seed",
    type=int,
    help="Random seed for stochastic sampling methods"
)
@click.option(
    "--config", "config_file",
    type=click.Path(exists=True, path_type=Path),
    help="Link configuration file (.json or .yaml)"
)
@click.option(
    "--skip-plots",
    is_flag=True,
    help="Skip generating visualization plots"
)
@click.pass_context
def sweep(
    ctx,
    output_dir: Path,
    weathers: Tuple[str, ...],
    distance_range: Tuple[float, float],
    num_points: int,
    sampling_method: str,
    seed: Optional[int],
    config_file: Optional[Path],
    skip_plots: bool
):
    """
    Sweep link performance over distance.

    Evaluates every selected weather condition at each sampled distance,
    saves the results to HDF5 with a JSON summary, and plots SNR, BER and
    throughput against distance.
    """
    logger = ctx.obj['logger']
    logger.info("Starting distance sweep...")

    weathers = [w.upper() for w in weathers] or [w.value for w in WeatherType]

    logger.info(f"Output directory: {output_dir}")
    logger.info(f"Weather conditions: {weathers}")
    logger.info(f"Distance range: {distance_range} km")
    logger.info(f"Number of points: {num_points}")
    logger.info(f"Sampling method: {sampling_method}")

    try:
        from fso_analyzer.data import generate_link_sweep
        from fso_analyzer.simulation import LinkConfig

        config = LinkConfig.load(config_file) if config_file else None

        sweep_info = generate_link_sweep(
            output_dir=output_dir,
            num_points=num_points,
            distance_range=distance_range,
            weathers=weathers,
            sampling_method=sampling_method,
            config=config,
            seed=seed,
        )

        if not skip_plots:
            from fso_analyzer.utils.visualization import plot_link_performance
            logger.info("Generating sweep plots...")
            plot_path = plot_link_performance(sweep_info['results'], output_dir, config=config)
            logger.info(f"Plot saved to: {plot_path}")

        logger.info("Sweep completed successfully!")
        logger.info(f"Evaluated {sweep_info['num_points']} link configurations")
        logger.info(f"Results saved to: {sweep_info['output_file']}")
        logger.info(f"Metadata saved to: {sweep_info['metadata_file']}")

    except Exception as e:
        logger.error(f"Sweep failed: {e}")
        ctx.exit(1)
