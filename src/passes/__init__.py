"""Passes module - cleanup passes and the runner.

TIER 2: May import from core, lib.

Passes:
- typescript.py: generate and commit TypeScript declarations

Importing this package registers every pass.
"""

from passes import typescript
from passes.registry import (
    CleanupPass,
    all_passes,
    default_passes,
    get_pass,
    register,
)

__all__ = [
    "CleanupPass",
    "all_passes",
    "default_passes",
    "get_pass",
    "register",
    "typescript",
]
