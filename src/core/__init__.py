"""Core module - types, errors, ports, parsers.

TIER 0: No internal imports, only Python stdlib.

Exports:
- Error types: CleanupError, ConfigError, ManifestError, VersionNotFoundError,
  CommandError, GitError
- Types: FileKind, ElementRepo, RunContext, PassResult
- Ports: RepoPort, VersionResolverPort
- Parsers: parse_jsonc, satisfies
"""

from core.errors import (
    CleanupError,
    CommandError,
    ConfigError,
    GitError,
    ManifestError,
    VersionNotFoundError,
)
from core.jsonc import parse_jsonc, strip_comments
from core.ports import RepoPort, VersionResolverPort, verify_port
from core.semver import parse_range, parse_version, satisfies
from core.types import ElementRepo, FileKind, PassResult, RunContext

__all__ = [
    "CleanupError",
    "CommandError",
    "ConfigError",
    "ElementRepo",
    "FileKind",
    "GitError",
    "ManifestError",
    "PassResult",
    "RepoPort",
    "RunContext",
    "VersionNotFoundError",
    "VersionResolverPort",
    "parse_jsonc",
    "parse_range",
    "parse_version",
    "satisfies",
    "strip_comments",
    "verify_port",
]
