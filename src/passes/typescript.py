"""TypeScript declarations pass.

TIER 2: May import from core, lib.

Sets an element repo up to ship typings generated by
gen-typescript-declarations: pins the generator in package.json, adds an
update-types npm script, makes Travis fail on stale typings, regenerates
the declarations and commits the result.

Raises ManifestError for a missing or invalid package.json, and
CommandError if npm or the generator fail.
"""

from dataclasses import dataclass, field

from core.types import ElementRepo, FileKind, PassResult, RunContext
from lib.config import get
from lib.logger import get_logger
from lib.manifest import (
    MANIFEST_FILE,
    manifest_path,
    read_manifest,
    update_manifest,
    write_manifest,
)
from lib.npm import LOCK_FILE, install_dependencies, run_script
from lib.travis import TRAVIS_FILE, update_travis
from passes.registry import CleanupPass, register

DECLARATION_SUFFIX = ".d.ts"

logger = get_logger("typescript")


@dataclass
class ChangeSet:
    """Changed files sorted into what the pass commits and what it leaves alone."""

    commit_files: list[str] = field(default_factory=list)
    unexpected: list[str] = field(default_factory=list)
    updated_types: bool = False
    updated_ci: bool = False


def classify_file(path: str) -> FileKind:
    """Classify a changed path (relative to the repo root)."""
    if path.endswith(DECLARATION_SUFFIX):
        return FileKind.DECLARATION
    if path == TRAVIS_FILE:
        return FileKind.CI_CONFIG
    if path in (MANIFEST_FILE, LOCK_FILE):
        return FileKind.MANIFEST
    return FileKind.UNEXPECTED


def classify_changes(element: ElementRepo, paths: list[str]) -> ChangeSet:
    """Sort changed paths; unexpected ones are logged and left out of the commit."""
    changes = ChangeSet()

    for path in paths:
        kind = classify_file(path)
        if not kind.is_committable():
            logger.warning(f"{element.name}: Unexpected changed file: {path}")
            changes.unexpected.append(path)
            continue

        if kind == FileKind.DECLARATION:
            changes.updated_types = True
        elif kind == FileKind.CI_CONFIG:
            changes.updated_ci = True
        changes.commit_files.append(path)

    return changes


def typescript_pass(element: ElementRepo, context: RunContext) -> PassResult:
    """Regenerate and commit an element's type declarations.

    Args:
        element: Checked-out repo to update.
        context: Run context holding the generator version resolver.

    Returns:
        What changed and whether a commit was made.
    """
    manifest = read_manifest(element)

    latest_version = context.resolver.latest_version()
    update = update_manifest(manifest, latest_version)
    write_manifest(manifest_path(element), manifest)

    update_travis(element)

    install_dependencies(element.dir)
    run_script(element.dir, get("typescript.script_name"))

    changes = classify_changes(element, element.repo.changed_files())
    result = PassResult(
        major_version_bump=update.major_version_bump,
        updated_script=update.updated_script,
        updated_ci=changes.updated_ci,
        updated_types=changes.updated_types,
        commit_files=changes.commit_files,
        unexpected_files=changes.unexpected,
    )

    if not result.needs_commit:
        logger.info(f"{element.name}: No typings changed.")
        return result

    if not result.commit_files:
        logger.info(f"{element.name}: Nothing to commit.")
        return result

    element.repo.commit(result.commit_files, get("typescript.commit_message"))
    result.committed = True
    logger.info(f"{element.name}: Committed {len(result.commit_files)} file(s)")
    return result


register(CleanupPass(name="typescript", run=typescript_pass, runs_by_default=False))
