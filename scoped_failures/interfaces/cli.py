"""
CLI Interface

Command-line interface for the failure-handling demonstrations.
Runs every scenario by default, or a chosen subset, printing the narration.
"""

import argparse
import logging
import sys
from typing import List, Optional

from scoped_failures.application.scenarios import (
    ScenarioReport,
    list_available_scenarios,
    run_scenario,
)
from scoped_failures.infrastructure.config import AppConfig, get_config
from scoped_failures.infrastructure.scenario_catalog import get_catalog


def configure_logging(config: AppConfig, verbose: bool = False) -> None:
    """Send log records to stderr so stdout carries only the narration."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else config.effective_log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr
    )


def print_header(title: str, width: int = 60) -> None:
    """Print formatted header."""
    print("\n" + "=" * width)
    print(f"  {title}")
    print("=" * width)


def print_section(title: str) -> None:
    """Print formatted section header."""
    print(f"\n--- {title} ---")


def show_scenarios() -> None:
    """Display the scenario catalog."""
    print_header("AVAILABLE SCENARIOS", get_config().banner_width)
    for s in list_available_scenarios():
        print(f"  - {s['id']}: {s['name']} ({s['category']})")
        if s["description"]:
            print(f"      {s['description']}")


def run_scenarios(scenario_ids: List[str]) -> List[ScenarioReport]:
    """
    Run scenarios in order, narrating each to stdout.

    Args:
        scenario_ids: Catalogued scenario ids

    Returns:
        One report per scenario
    """
    config = get_config()
    catalog = get_catalog()

    print_header("FAILURE HANDLING DEMONSTRATIONS", config.banner_width)

    reports = []
    for index, scenario_id in enumerate(scenario_ids, 1):
        info = catalog.get(scenario_id)
        print_section(f"{index}. {info.name}")

        reports.append(run_scenario(scenario_id, say=lambda line: print(f"  {line}")))

    print("\n" + "=" * config.banner_width)
    print(f"Completed {len(reports)} scenario(s).")
    print("=" * config.banner_width)

    return reports


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scoped-failures",
        description="Narrated demonstrations of failure handling and scoped resource cleanup",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run every scenario
  python -m scoped_failures.interfaces.cli

  # Run selected scenarios
  python -m scoped_failures.interfaces.cli -s suppressed -s chaining

  # List scenarios
  python -m scoped_failures.interfaces.cli --list
        """
    )

    mode_group = parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--all", "-a",
        action="store_true",
        help="Run every scenario (default)"
    )
    mode_group.add_argument(
        "--scenario", "-s",
        action="append",
        metavar="ID",
        help="Run a scenario by id (repeatable)"
    )
    mode_group.add_argument(
        "--list", "-l",
        action="store_true",
        help="List available scenarios"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # pydantic's ValidationError is a ValueError
    try:
        config = get_config()
        get_catalog()
    except (ValueError, FileNotFoundError) as e:
        parser.error(f"invalid configuration: {e}")

    configure_logging(config, verbose=args.verbose)

    if args.list:
        show_scenarios()
        return 0

    available = [s["id"] for s in list_available_scenarios()]
    if args.scenario:
        unknown = [s for s in args.scenario if s not in available]
        if unknown:
            parser.error(
                f"unknown scenario(s): {', '.join(unknown)} "
                f"(choose from {', '.join(available)})"
            )
        selected = args.scenario
    else:
        selected = available

    run_scenarios(selected)
    return 0


if __name__ == "__main__":
    sys.exit(main())
