"""Directory prune lists for source discovery.

Tier 0 (HARDCODED_DIRS): Never traversed.
    - VCS internals and IDE state

Tier 1 (DEFAULT_PRUNABLE_DIRS): Build outputs and package caches.
    - Generated C# (obj/*.g.cs) and restored packages are not user code
"""

from __future__ import annotations

HARDCODED_DIRS: frozenset[str] = frozenset(
    (
        ".git",
        ".svn",
        ".hg",
        ".vs",
        ".idea",
    )
)

DEFAULT_PRUNABLE_DIRS: frozenset[str] = frozenset(
    (
        # -------------------------------------------------------------------------
        # .NET build outputs
        # -------------------------------------------------------------------------
        "bin",
        "obj",
        "TestResults",
        "artifacts",
        # -------------------------------------------------------------------------
        # Package caches
        # -------------------------------------------------------------------------
        "packages",
        ".nuget",
        "node_modules",
        # -------------------------------------------------------------------------
        # Tooling caches
        # -------------------------------------------------------------------------
        "__pycache__",
        ".venv",
    )
)

PRUNABLE_DIRS: frozenset[str] = HARDCODED_DIRS | DEFAULT_PRUNABLE_DIRS


def is_prunable_dir(dirname: str) -> bool:
    """Check if a directory name is pruned during discovery."""
    return dirname in PRUNABLE_DIRS
