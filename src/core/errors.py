"""Custom exceptions for element-cleanup.

TIER 0: No internal imports, only Python stdlib.
"""


class CleanupError(Exception):
    """Base exception for element-cleanup."""

    pass


class ConfigError(CleanupError):
    """Configuration error."""

    pass


class ManifestError(ConfigError):
    """Missing or invalid package.json."""

    pass


class VersionNotFoundError(ConfigError):
    """Latest published version could not be determined."""

    pass


class CommandError(CleanupError):
    """External command failed or could not be started."""

    pass


class GitError(CommandError):
    """Git operation failed."""

    pass
