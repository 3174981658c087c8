"""package.json reading, updating and writing.

TIER 1: May import from core only.
"""

import json
from dataclasses import dataclass
from pathlib import Path

from core.errors import ManifestError
from core.semver import satisfies
from core.types import ElementRepo
from lib.config import get

MANIFEST_FILE = "package.json"
SECTIONS = ("devDependencies", "scripts")


@dataclass
class ManifestUpdate:
    """What update_manifest() changed."""

    major_version_bump: bool = False
    updated_script: bool = False


def manifest_path(element: ElementRepo) -> Path:
    return element.dir / MANIFEST_FILE


def read_manifest(element: ElementRepo) -> dict:
    """Read and parse an element's package.json.

    Args:
        element: Repo to read from.

    Returns:
        Parsed manifest.

    Raises:
        ManifestError: If the file is missing, unreadable or not a JSON object, or
            if devDependencies or scripts is not an object.
    """
    try:
        data = json.loads(manifest_path(element).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestError(f"{element.name}: Missing or invalid {MANIFEST_FILE}.") from e

    if not isinstance(data, dict):
        raise ManifestError(f"{element.name}: Missing or invalid {MANIFEST_FILE}.")

    for key in SECTIONS:
        if data.get(key) is not None and not isinstance(data[key], dict):
            raise ManifestError(f"{element.name}: {MANIFEST_FILE}: {key} must be an object")
    return data


def _section(manifest: dict, key: str) -> dict:
    """Get a name -> string mapping from the manifest, creating it if absent."""
    section = manifest.get(key)
    if section is None:
        section = manifest[key] = {}
    if not isinstance(section, dict):
        raise ManifestError(f"{MANIFEST_FILE}: {key} must be an object")
    return section


def update_manifest(manifest: dict, latest_version: str) -> ManifestUpdate:
    """Pin the declaration generator and configure the update script.

    Mutates manifest in place:
    - devDependencies[generator] is always set to ^latest_version
    - devDependencies[helper] is added with a default range if missing
    - scripts[script_name] is set to the generator command

    Args:
        manifest: Parsed package.json.
        latest_version: Latest published generator version.

    Returns:
        Flags describing the change.
    """
    generator = get("typescript.generator")
    helper = get("typescript.helper_dependency")
    script_name = get("typescript.script_name")
    script_command = get("typescript.script_command")

    update = ManifestUpdate()
    dev_dependencies = _section(manifest, "devDependencies")
    scripts = _section(manifest, "scripts")

    old_range = dev_dependencies.get(generator)
    if not isinstance(old_range, str) or not satisfies(latest_version, old_range):
        update.major_version_bump = True
    dev_dependencies[generator] = f"^{latest_version}"

    # The generator resolves the HTML import graph, so bower must be installed
    if helper not in dev_dependencies:
        dev_dependencies[helper] = get("typescript.helper_range")

    if scripts.get(script_name) != script_command:
        scripts[script_name] = script_command
        update.updated_script = True

    return update


def write_manifest(path: Path, manifest: dict) -> None:
    """Write package.json with 2-space indentation and a trailing newline."""
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
