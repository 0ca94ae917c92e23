#!/usr/bin/env python3
"""
CLI for the analysis pre-processing step.

Run it after the build has written its project descriptors and before the
external analyzers start. It classifies the projects, fetches the quality
profiles from the server, writes one rule set per analyzer plugin and persists
the merged analysis config.

Usage:
  python prep_cli.py --project-key my_project
  python prep_cli.py -k my_project -n "My Project" -v 1.0 -d sonar.exclusions=**/gen/**
  python prep_cli.py -k my_project --organization my-org --host https://sonarcloud.io
"""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from cli.args.base import add_base_args
from cli.commands.prepare import run_prepare_mode
from pipeline.settings import load_environment
from pipeline.wiring import build_pipeline

LOG_FORMAT = "%(levelname)s | %(name)s | %(message)s"


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Prepare a build for static analysis.")
    add_base_args(parser)
    return parser.parse_args(argv)


def configure_logging(verbose: bool) -> None:
    """--verbose wins; otherwise SONAR_LOG_LEVEL (default INFO)."""
    if verbose:
        level = logging.DEBUG
    else:
        name = (os.getenv("SONAR_LOG_LEVEL") or "INFO").strip().upper()
        level = getattr(logging, name, None)
        if not isinstance(level, int):
            raise SystemExit(f"Unknown SONAR_LOG_LEVEL: {name}")
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)


def main(argv: Optional[List[str]] = None) -> int:
    # Load .env before anything reads the environment (log level included)
    load_environment()

    args = parse_args(argv)
    configure_logging(bool(args.verbose))

    pipeline = build_pipeline(
        load_dotenv=False,
        working_dir=args.working_dir,
        host=args.host,
        organization=args.organization,
    )
    return run_prepare_mode(args, pipeline)


if __name__ == "__main__":
    raise SystemExit(main())
