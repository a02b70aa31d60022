#!/usr/bin/env python3
"""
DNS Record Reconciler - Command Line Interface

Main entry point for the DNS Record Reconciler CLI.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

import yaml
from rich.console import Console

from ..core.record_manager import RecordManager
from ..exceptions import ReconcilerError
from ..parsers.records_file import RecordsFileParser
from ..providers.dns_client import DNSClient
from .output import render_outcomes

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="record-reconciler",
        description="DNS Record Reconciler - Idempotent DNS record management",
    )

    parser.add_argument(
        "--config",
        "-c",
        default="configs/config.yaml",
        help="Configuration file path (default: configs/config.yaml)",
    )

    parser.add_argument(
        "--records", "-f", required=True, help="YAML file containing record declarations"
    )

    parser.add_argument(
        "--zone-id",
        "-z",
        help="Hosted zone for records that do not declare their own zone_id",
    )

    parser.add_argument(
        "--delete",
        action="store_true",
        help="Delete the declared records instead of reconciling them",
    )

    parser.add_argument(
        "--workers",
        "-w",
        type=int,
        default=1,
        help="Number of records processed concurrently (default: 1)",
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with an error status when any record completed with a warning",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )

    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if not Path(args.config).exists():
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)

    if not Path(args.records).exists():
        print(f"Error: Records file '{args.records}' not found")
        sys.exit(1)

    if args.workers < 1:
        print("Error: --workers must be at least 1")
        sys.exit(1)

    config = load_config(args.config)
    config_logger(config, verbose=args.verbose)

    try:
        dns_client = DNSClient(config)
        parser = RecordsFileParser(args.records)
        declarations = parser.parse()
        record_manager = RecordManager(dns_client, max_workers=args.workers)
        outcomes = record_manager.process_records(
            declarations,
            zone_id=args.zone_id or parser.zone_id,
            delete_records=args.delete,
        )
    except ReconcilerError as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)

    summary = render_outcomes(outcomes, Console())

    if summary.failures or (args.strict and summary.warnings):
        print("DNS record reconciliation failed")
        sys.exit(1)

    print("DNS record reconciliation completed successfully")
    sys.exit(0)


def load_config(config_path: str) -> Dict:
    """Load configuration from YAML file."""
    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
        if config is None:
            return get_default_config()
        if not isinstance(config, dict):
            logger.error(
                f"Error parsing config file: expected a mapping, got {type(config).__name__}"
            )
            sys.exit(1)
        logger.info(f"Configuration loaded from {config_path}")
        return config or get_default_config()
    except FileNotFoundError:
        logger.warning(f"Config file {config_path} not found, using defaults")
        return get_default_config()
    except yaml.YAMLError as e:
        logger.error(f"Error parsing config file: {e}")
        sys.exit(1)


def get_default_config() -> Dict:
    """Return default configuration."""
    return {
        "dns_providers": {"route53": {"region": "us-east-1"}},
        "default_provider": "route53",
        "logging": {"level": "INFO"},
    }


def config_logger(config: Dict, verbose: bool = False):
    """Configure logging."""
    logging_config = config.get("logging", None) or {}
    log_level = "DEBUG" if verbose else logging_config.get("level", "INFO")
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handlers = [logging.StreamHandler(sys.stdout)]
    log_file = logging_config.get("file")
    if log_file:
        handlers.insert(0, logging.FileHandler(log_file))

    logging.basicConfig(level=log_level, format=log_format, handlers=handlers)


if __name__ == "__main__":
    main()
