#!/usr/bin/env python3
"""
Main CLI entry point for FSO-Analyzer.

This module provides the main command-line interface with subcommands for:
- evaluate: Link budget for one weather condition and distance
- sweep: Link performance across distances and weather conditions
- weathers: List the weather profile table
"""

import click

from fso_analyzer.utils.logging_utils import setup_logger
from fso_analyzer.cli.commands import evaluate, sweep


@click.group()
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Enable verbose logging"
)
@click.option(
    "--log-file",
    type=click.Path(),
    help="Log file path (default: logs to console)"
)
@click.pass_context
def cli(ctx, verbose, log_file):
    """
    FSO-Analyzer: Link budget and bit error rate estimation for free-space optical links.

    Estimates attenuation, SNR, BER and adaptive throughput of an FSO link
    as a function of weather condition and distance.
    """
    ctx.ensure_object(dict)

    log_level = "DEBUG" if verbose else "INFO"
    logger = setup_logger(level=log_level, log_file=log_file)
    ctx.obj['logger'] = logger

    ctx.obj['verbose'] = verbose
    ctx.obj['log_file'] = log_file

    logger.debug("FSO-Analyzer CLI started")


cli.add_command(evaluate.evaluate)
cli.add_command(sweep.sweep)


@cli.command()
@click.pass_context
def weathers(ctx):
    """List weather conditions and their attenuation coefficients."""
    from fso_analyzer.simulation import WEATHER_PROFILES

    logger = ctx.obj['logger']
    for weather, profile in WEATHER_PROFILES.items():
        logger.info(
            f"{weather.value.lower():<6} {profile.attenuation_coefficient:>6.2f} dB/km  "
            f"{profile.label}: {profile.description}"
        )


@cli.command()
@click.pass_context
def version(ctx):
    """Show version information."""
    from fso_analyzer import __version__
    ctx.obj['logger'].info(f"FSO-Analyzer version {__version__}")


@cli.command()
@click.pass_context
def info(ctx):
    """Show system and package information."""
    import platform
    import numpy as np
    import scipy
    import h5py
    import matplotlib

    logger = ctx.obj['logger']
    logger.info("=== FSO-Analyzer System Information ===")
    logger.info(f"Python version: {platform.python_version()}")
    logger.info(f"Platform: {platform.platform()}")
    logger.info(f"NumPy version: {np.__version__}")
    logger.info(f"SciPy version: {scipy.__version__}")
    logger.info(f"h5py version: {h5py.__version__}")
    logger.info(f"Matplotlib version: {matplotlib.__version__}")


if __name__ == "__main__":
    cli()
