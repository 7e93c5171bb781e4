"""
CLI command modules.

This package contains the implementation of the CLI subcommands:
- evaluate: Single link evaluation
- sweep: Link performance across distances and weather conditions
"""

from . import evaluate, sweep

__all__ = ["evaluate", "sweep"]
