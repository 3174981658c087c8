"""Core types and enums.

TIER 0: No internal imports, only Python stdlib.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from core.ports import RepoPort, VersionResolverPort


class FileKind(str, Enum):
    """Classification of a changed file after a pass has run."""

    DECLARATION = "declaration"
    CI_CONFIG = "ci-config"
    MANIFEST = "manifest"
    UNEXPECTED = "unexpected"

    def is_committable(self) -> bool:
        """Check if files of this kind belong in the pass commit."""
        return self != FileKind.UNEXPECTED


@dataclass
class ElementRepo:
    """A checked-out element repository."""

    name: str
    dir: Path
    repo: RepoPort


@dataclass
class RunContext:
    """State shared by every pass during one run.

    The resolver is created once per run so the latest version is looked
    up at most once no matter how many repos are processed.
    """

    resolver: VersionResolverPort


@dataclass
class PassResult:
    """Outcome of a pass on a single repo."""

    major_version_bump: bool = False
    updated_script: bool = False
    updated_ci: bool = False
    updated_types: bool = False
    commit_files: list[str] = field(default_factory=list)
    unexpected_files: list[str] = field(default_factory=list)
    committed: bool = False

    @property
    def needs_commit(self) -> bool:
        return (
            self.updated_types
            or self.major_version_bump
            or self.updated_script
            or self.updated_ci
        )
