"""npm operations - registry lookups, installs and scripts.

TIER 1: May import from core only.
"""

import re
import subprocess
from pathlib import Path

from core.errors import CommandError, VersionNotFoundError
from lib.config import get
from lib.logger import get_logger

LOCK_FILE = "package-lock.json"
# Older npm prints "latest: '1.2.3'", newer npm drops the quotes.
# Prerelease tags and other tags ending in "latest" must not match.
LATEST_VERSION_RE = re.compile(r"(?<![\w-])latest: '?(\d+\.\d+\.\d+)(?:'|\s|$)")

logger = get_logger("npm")


def run_npm(args: list[str], cwd: Path | None = None) -> str:
    """Run an npm command.

    Args:
        args: npm command arguments.
        cwd: Working directory (defaults to current).

    Returns:
        Command stdout.

    Raises:
        CommandError: If npm exits non-zero, times out or cannot be started.
    """
    command = f"npm {' '.join(args)}"
    timeout = get("npm.timeout")

    logger.debug(f"{command} (cwd={cwd})")
    try:
        result = subprocess.run(  # noqa: S603
            ["npm", *args],  # noqa: S607
            capture_output=True,
            text=True,
            cwd=cwd,
            check=True,
            timeout=timeout,
        )
        return result.stdout
    except subprocess.TimeoutExpired as e:
        raise CommandError(f"{command} timed out after {timeout}s") from e
    except subprocess.CalledProcessError as e:
        raise CommandError(f"{command} failed: {e.stderr or e.stdout}") from e
    except OSError as e:
        raise CommandError(f"{command} could not be started: {e}") from e


def install_dependencies(cwd: Path) -> None:
    """Install a package's dependencies from scratch.

    The lock file is deleted first so the newest versions allowed by
    package.json are resolved.

    Args:
        cwd: Package directory.
    """
    lock_path = cwd / LOCK_FILE
    if lock_path.exists():
        lock_path.unlink()
    run_npm(["install"], cwd=cwd)


def run_script(cwd: Path, name: str) -> str:
    """Run a package.json script.

    Args:
        cwd: Package directory.
        name: Script name.

    Returns:
        Script stdout.
    """
    return run_npm(["run", name], cwd=cwd)


class NpmVersionResolver:
    """Looks up the latest published version of a package on the registry.

    The version is fetched on first use and reused for the lifetime of the
    resolver, so one resolver per run means one registry query per run.

    Implements: core.ports.VersionResolverPort
    """

    def __init__(self, package: str) -> None:
        self.package = package
        self._latest: str | None = None

    def latest_version(self) -> str:
        """Get the latest published version.

        Raises:
            VersionNotFoundError: If `npm info` output has no latest version.
            CommandError: If `npm info` fails.
        """
        if self._latest is None:
            output = run_npm(["info", self.package])
            match = LATEST_VERSION_RE.search(output)
            if not match:
                raise VersionNotFoundError(f"Could not find latest version of {self.package}")
            self._latest = match.group(1)
            logger.info(f"Latest {self.package} is {self._latest}")
        return self._latest
