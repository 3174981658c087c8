"""Cleanup pass registry.

TIER 2: May import from core, lib.
"""

from collections.abc import Callable
from dataclasses import dataclass

from core.errors import ConfigError
from core.types import ElementRepo, PassResult, RunContext

PassFunction = Callable[[ElementRepo, RunContext], PassResult]


@dataclass(frozen=True)
class CleanupPass:
    """A named maintenance step that can be run against an element repo."""

    name: str
    run: PassFunction
    runs_by_default: bool = True


_registry: dict[str, CleanupPass] = {}


def register(cleanup_pass: CleanupPass) -> CleanupPass:
    """Register a pass under its name.

    Raises:
        ConfigError: If a pass with the same name is already registered.
    """
    if cleanup_pass.name in _registry:
        raise ConfigError(f"Cleanup pass already registered: {cleanup_pass.name}")
    _registry[cleanup_pass.name] = cleanup_pass
    return cleanup_pass


def unregister(name: str) -> None:
    """Remove a pass (for testing)."""
    _registry.pop(name, None)


def get_pass(name: str) -> CleanupPass:
    """Look up a registered pass.

    Raises:
        ConfigError: If no pass has that name.
    """
    try:
        return _registry[name]
    except KeyError:
        known = ", ".join(sorted(_registry)) or "none"
        raise ConfigError(f"Unknown cleanup pass: {name} (known: {known})") from None


def all_passes() -> list[CleanupPass]:
    """All registered passes, in registration order."""
    return list(_registry.values())


def default_passes() -> list[CleanupPass]:
    """Passes that run when none are requested explicitly."""
    return [p for p in _registry.values() if p.runs_by_default]
