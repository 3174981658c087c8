"""Port interfaces for the cleanup passes.

TIER 0: No internal imports, only Python stdlib.

Ports define contracts that adapters must implement, so passes depend on
abstractions and tests can hand in substitutes.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class VersionResolverPort(Protocol):
    """Port for looking up the latest published version of a package.

    Implemented by: lib.npm.NpmVersionResolver
    """

    def latest_version(self) -> str:
        """Get the latest published version (e.g. "1.2.3")."""
        ...


@runtime_checkable
class RepoPort(Protocol):
    """Port for version-control operations on one working tree.

    Implemented by: lib.git.GitRepo
    """

    def changed_files(self) -> list[str]:
        """Get paths with working tree changes, relative to the repo root."""
        ...

    def commit(self, files: list[str], message: str) -> None:
        """Commit exactly the given files with the given message."""
        ...


def verify_port(implementation: Any, port: type) -> bool:
    """Verify that an implementation satisfies a port.

    Args:
        implementation: Object to verify.
        port: Protocol class to check against.

    Returns:
        True if implementation satisfies the port.
    """
    return isinstance(implementation, port)
