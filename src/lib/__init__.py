"""Lib module - I/O adapters.

TIER 1: May import from core only.
"""

from lib.config import clear_cache, get, load_config
from lib.git import GitRepo, changed_files, git_add, git_commit, make_commit, run_git
from lib.logger import get_logger, set_log_level
from lib.manifest import ManifestUpdate, read_manifest, update_manifest, write_manifest
from lib.npm import NpmVersionResolver, install_dependencies, run_npm, run_script
from lib.travis import add_stale_types_check, stale_types_check, update_travis

__all__ = [
    "GitRepo",
    "ManifestUpdate",
    "NpmVersionResolver",
    "add_stale_types_check",
    "changed_files",
    "clear_cache",
    "get",
    "get_logger",
    "git_add",
    "git_commit",
    "install_dependencies",
    "load_config",
    "make_commit",
    "read_manifest",
    "run_git",
    "run_npm",
    "run_script",
    "set_log_level",
    "stale_types_check",
    "update_manifest",
    "update_travis",
    "write_manifest",
]
