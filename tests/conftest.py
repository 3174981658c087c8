"""Pytest configuration and shared fixtures."""

import json
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from core.types import ElementRepo, RunContext  # noqa: E402


class FakeRepo:
    """In-memory stand-in for lib.git.GitRepo."""

    def __init__(self, changed: list[str] | None = None):
        self.changed = list(changed or [])
        self.commits: list[tuple[list[str], str]] = []

    def changed_files(self) -> list[str]:
        return list(self.changed)

    def commit(self, files: list[str], message: str) -> None:
        self.commits.append((list(files), message))


class StaticResolver:
    """Version resolver returning a fixed version and counting lookups."""

    def __init__(self, version: str = "1.2.0"):
        self.version = version
        self.calls = 0

    def latest_version(self) -> str:
        self.calls += 1
        return self.version


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Point config lookup at an empty directory and reset the cache."""
    from lib.config import clear_cache

    config_dir = tmp_path_factory.mktemp("config")
    monkeypatch.setenv("CLEANUP_CONFIG_DIR", str(config_dir))
    clear_cache()
    yield config_dir
    clear_cache()


@pytest.fixture
def sample_manifest():
    """Return a typical element package.json."""
    return {
        "name": "@polymer/paper-button",
        "version": "3.0.0",
        "devDependencies": {
            "@polymer/gen-typescript-declarations": "^1.0.0",
            "wct-browser-legacy": "^1.0.0",
        },
        "scripts": {
            "test": "wct",
        },
    }


@pytest.fixture
def fake_repo():
    return FakeRepo()


@pytest.fixture
def resolver():
    return StaticResolver()


@pytest.fixture
def context(resolver):
    return RunContext(resolver=resolver)


@pytest.fixture
def element(tmp_path, sample_manifest, fake_repo):
    """Create a checked-out element repo with a package.json."""
    repo_dir = tmp_path / "paper-button"
    repo_dir.mkdir()
    (repo_dir / "package.json").write_text(json.dumps(sample_manifest, indent=2) + "\n")
    return ElementRepo(name="paper-button", dir=repo_dir, repo=fake_repo)


@pytest.fixture
def travis_yaml():
    """Return a sample .travis.yml."""
    return """language: node_js
node_js: stable
before_script:
  - npm run lint
script:
  - xvfb-run npm test
"""
