#!/usr/bin/env python3
"""
Environment setup script for FSO-Analyzer development.

This script installs the package in development mode, optionally with the
development tools and pre-commit hooks.
"""

import sys
import subprocess
import argparse


def run_command(cmd, check=True):
    """Run a shell command and handle errors."""
    print(f"Running: {cmd}")
    result = subprocess.run(cmd, shell=True, capture_output=True, text=True)
    if check and result.returncode != 0:
        print(f"Error running command: {cmd}")
        print(f"stdout: {result.stdout}")
        print(f"stderr: {result.stderr}")
        sys.exit(1)
    return result


def main():
    parser = argparse.ArgumentParser(description="Setup FSO-Analyzer development environment")
    parser.add_argument("--dev", action="store_true", help="Install development dependencies")
    parser.add_argument("--hooks", action="store_true", help="Install pre-commit hooks (implies --dev)")
    args = parser.parse_args()

    print("Setting up FSO-Analyzer development environment...")

    if args.dev or args.hooks:
        print("Installing package with development dependencies...")
        run_command('pip install -e ".[dev]"')
    else:
        run_command("pip install -e .")

    if args.hooks:
        print("Installing pre-commit hooks...")
        run_command("pre-commit install")

    print("Environment setup complete!")


if __name__ == "__main__":
    main()
