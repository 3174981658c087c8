#!/usr/bin/env python3
"""Command line runner - applies cleanup passes to checked-out repos.

TIER 3: Entry point, may import from all layers.

Usage:
    element-cleanup --pass typescript path/to/paper-button path/to/iron-icon
"""

import argparse
import sys
from pathlib import Path

from core.errors import CleanupError, ConfigError
from core.types import ElementRepo, RunContext
from lib.config import get
from lib.git import GitRepo
from lib.logger import get_logger, set_log_level
from lib.npm import NpmVersionResolver
from passes import all_passes, default_passes, get_pass
from passes.registry import CleanupPass

logger = get_logger("run")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="element-cleanup",
        description="Apply automated maintenance passes to element repos.",
    )
    parser.add_argument("dirs", nargs="*", type=Path, help="Checked-out repo directories")
    parser.add_argument(
        "--pass",
        dest="passes",
        action="append",
        metavar="NAME",
        help="Pass to run (repeatable, default: all default passes)",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override CLEANUP_LOG_LEVEL",
    )
    parser.add_argument("--list", action="store_true", help="List registered passes and exit")
    return parser


def load_element(path: Path) -> ElementRepo:
    """Build an ElementRepo for a checked-out directory, named after the directory."""
    path = path.resolve()
    return ElementRepo(name=path.name, dir=path, repo=GitRepo(path))


def run_passes(
    elements: list[ElementRepo], passes: list[CleanupPass], context: RunContext
) -> list[tuple[str, bool, str]]:
    """Run every pass on every repo.

    A failing pass stops the remaining passes for that repo only; the next
    repo is still processed.

    Returns:
        List of (repo_name, success, message) tuples.
    """
    results: list[tuple[str, bool, str]] = []

    for element in elements:
        try:
            for cleanup_pass in passes:
                logger.debug(f"{element.name}: running {cleanup_pass.name}")
                outcome = cleanup_pass.run(element, context)
                state = "committed" if outcome.committed else "no commit"
                results.append((element.name, True, f"{cleanup_pass.name}: {state}"))
        except (CleanupError, OSError) as e:
            logger.error(f"{element.name}: {e}")
            results.append((element.name, False, str(e)))

    return results


def main(argv: list[str] | None = None) -> int:
    """Run the requested passes. Returns the process exit code."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)

    if args.list:
        for cleanup_pass in all_passes():
            default = " (default)" if cleanup_pass.runs_by_default else ""
            print(f"{cleanup_pass.name}{default}")
        return 0

    try:
        passes = [get_pass(name) for name in args.passes] if args.passes else default_passes()
        context = RunContext(resolver=NpmVersionResolver(get("typescript.generator")))
    except ConfigError as e:
        logger.error(str(e))
        return 2

    if not passes:
        logger.warning("No passes selected")
        return 0

    elements = [load_element(d) for d in args.dirs]
    results = run_passes(elements, passes, context)

    return 0 if all(ok for _, ok, _ in results) else 1


if __name__ == "__main__":
    sys.exit(main())
