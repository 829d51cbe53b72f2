#!/usr/bin/env python3
"""
Data widget - command-line entry point
"""

import argparse
import logging
import sys
from typing import List, Optional

from .config.loader import ConfigLoader
from .config.models import SIZE_CLASSES
from .controller import Outcome, UniversalWidget
from .rendering.host import FileHost
from .sources.registry import SourceRegistry
from .utils.errors import ConfigurationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Universal data widget - render a data source as a home-screen widget"
    )
    parser.add_argument(
        "source",
        nargs="?",
        default="",
        help="Source identifier (billboard, imdb, steam, hackernews, github, wikipedia)",
    )
    parser.add_argument("--size", default="medium", choices=SIZE_CLASSES, help="Widget size class")
    parser.add_argument("--config", help="Path to a YAML file overriding the defaults")
    parser.add_argument("--output", help="Write a PNG preview of the widget to this path")
    parser.add_argument(
        "--list-sources", action="store_true", help="List configured sources and exit"
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logger = logging.getLogger(__name__)

    try:
        config = ConfigLoader().load(args.config)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.list_sources:
        registry = SourceRegistry()
        registry.auto_discover()
        implemented = set(registry.list_sources())
        for source_id, source in config.sources.items():
            marker = "" if source_id in implemented else " (not implemented)"
            print(f"{source_id:<12} {source.name}{marker}")
        return 0

    widget = UniversalWidget(config)
    run = widget.run(args.source, args.size)

    host = FileHost(args.size, output=args.output)
    try:
        host.set_widget(run.canvas)
    except OSError as e:
        logger.error(f"Failed to write preview: {e}")
        return 1
    finally:
        host.complete()

    if run.outcome is Outcome.FAILED:
        logger.error(f"Widget failed: {run.error}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
