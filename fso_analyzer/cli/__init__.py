"""
Command Line Interface module.

This module provides the main CLI entry points for:
- Single link evaluation
- Distance sweeps
"""

from .main import cli

__all__ = ["cli"]
