"""Travis CI configuration updates.

TIER 1: May import from core only.

Adds a before_script step that fails the build when the checked-in type
declarations differ from freshly generated ones.
"""

from pathlib import Path

import yaml

from core.errors import ConfigError
from core.types import ElementRepo
from lib.config import get
from lib.logger import get_logger

TRAVIS_FILE = ".travis.yml"

logger = get_logger("travis")


def stale_types_check(script_name: str) -> str:
    """Build the shell command that fails when generated typings are stale.

    Runs the update script, then `git diff --exit-code`; on any diff it
    prints a red error and exits non-zero.

    Args:
        script_name: npm script that regenerates the declarations.

    Returns:
        Single-line shell command.
    """
    return (
        f"npm run {script_name} && "
        "git diff --exit-code || "
        "(echo -e '\\n\\033[31mERROR:\\033[0m Typings are stale. "
        f'Please run "npm run {script_name}".\' && '
        "false)"
    )


def load_travis(path: Path) -> dict:
    """Load .travis.yml as a mapping (an empty file loads as {})."""
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Invalid {path.name}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid {path.name}: top level must be a mapping")
    return data


def dump_travis(path: Path, data: dict) -> None:
    path.write_text(
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False, width=float("inf")),
        encoding="utf-8",
    )


def add_stale_types_check(travis: dict, script_name: str) -> list[str]:
    """Replace any previous stale-typings check in before_script with the current one.

    Args:
        travis: Parsed .travis.yml, mutated in place.
        script_name: npm script name, also used to recognise the old entry.

    Returns:
        The new before_script list.
    """
    before_script = travis.get("before_script")
    if before_script is None:
        before_script = []
    elif isinstance(before_script, str):
        before_script = [before_script]

    before_script = [line for line in before_script if script_name not in str(line)]
    before_script.append(stale_types_check(script_name))
    travis["before_script"] = before_script
    return before_script


def update_travis(element: ElementRepo) -> bool:
    """Make an element's Travis build fail on stale typings.

    Args:
        element: Repo to update.

    Returns:
        True if .travis.yml exists and was rewritten, False if it is missing.
    """
    path = element.dir / TRAVIS_FILE
    if not path.exists():
        logger.info(f"{element.name}: Missing {TRAVIS_FILE}")
        return False

    travis = load_travis(path)
    add_stale_types_check(travis, get("typescript.script_name"))
    dump_travis(path, travis)
    return True
