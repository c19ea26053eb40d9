import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from monorepo_hash.core.errors import ConfigurationError, WorkspaceNotFoundError
from monorepo_hash.core.models import PackageInfo


logger = logging.getLogger(__name__)

PNPM_WORKSPACE = "pnpm-workspace.yaml"
PACKAGE_JSON = "package.json"
DENO_JSON = "deno.json"

DEPENDENCY_FIELDS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


@dataclass
class Workspace:
    root: Path
    patterns: List[str]
    source: str


# ============================================================
# Workspace file detection
# ============================================================

def _read_json(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ConfigurationError(f"Expected a JSON object in {path}")
    return data


def _patterns_in(directory: Path) -> Optional[tuple]:
    """
    (patterns, source filename) if `directory` holds a workspace
    definition, else None. pnpm wins over package.json, which wins
    over deno.json.
    """
    pnpm = directory / PNPM_WORKSPACE
    if pnpm.is_file():
        loaded = yaml.safe_load(pnpm.read_text(encoding="utf-8")) or {}
        packages = loaded.get("packages") if isinstance(loaded, dict) else None
        return (packages if isinstance(packages, list) else []), PNPM_WORKSPACE

    manifest = directory / PACKAGE_JSON
    if manifest.is_file():
        workspaces = _read_json(manifest).get("workspaces")
        if isinstance(workspaces, dict):
            workspaces = workspaces.get("packages")
        if isinstance(workspaces, list):
            return workspaces, PACKAGE_JSON

    deno = directory / DENO_JSON
    if deno.is_file():
        members = _read_json(deno).get("workspace")
        if isinstance(members, list):
            return members, DENO_JSON

    return None


def find_workspace(start: Path) -> Workspace:
    """Walk up from `start` until a workspace definition is found."""
    start = Path(start).resolve()

    for directory in [start, *start.parents]:
        found = _patterns_in(directory)
        if found is None:
            continue

        patterns, source = found
        patterns = [str(p) for p in patterns if isinstance(p, str) and p.strip()]
        if not patterns:
            raise ConfigurationError(f'No "packages:" entries in {directory / source}')

        logger.debug("workspace root %s (%s, %d patterns)", directory, source, len(patterns))
        return Workspace(root=directory, patterns=patterns, source=source)

    raise WorkspaceNotFoundError(
        f"No workspace definition ({PNPM_WORKSPACE}, {PACKAGE_JSON} workspaces "
        f"or {DENO_JSON}) found from {start}"
    )


# ============================================================
# Package discovery
# ============================================================

def _normalize_pattern(pattern: str) -> str:
    pattern = pattern.strip().replace("\\", "/")
    while pattern.startswith("./"):
        pattern = pattern[2:]
    return pattern.rstrip("/") or "."


def expand_patterns(root: Path, patterns: List[str]) -> List[Path]:
    """
    Directories matched by the workspace globs that hold a package.json.
    A `!pattern` removes what earlier patterns matched.
    """
    selected: Dict[Path, None] = {}

    for raw in patterns:
        negate = raw.startswith("!")
        pattern = _normalize_pattern(raw[1:] if negate else raw)

        matches = [root] if pattern == "." else list(root.glob(pattern))
        for match in matches:
            if not match.is_dir() or "node_modules" in match.relative_to(root).parts:
                continue
            if negate:
                selected.pop(match, None)
            elif (match / PACKAGE_JSON).is_file():
                selected[match] = None

    return sorted(selected, key=lambda p: p.relative_to(root).as_posix())


def read_manifest(package_dir: Path) -> dict:
    """Parsed package.json. Invalid JSON propagates as ValueError."""
    return _read_json(Path(package_dir) / PACKAGE_JSON)


def discover_packages(root: Path, patterns: List[str]) -> Dict[str, PackageInfo]:
    root = Path(root)
    packages: Dict[str, PackageInfo] = {}

    for package_dir in expand_patterns(root, patterns):
        rel_dir = os.path.relpath(package_dir, root)
        name = read_manifest(package_dir).get("name")

        if not isinstance(name, str) or not name:
            raise ConfigurationError(f"{rel_dir}/{PACKAGE_JSON} has no name")
        if name in packages:
            raise ConfigurationError(
                f"Duplicate package name {name!r} in {packages[name].rel_dir} and {rel_dir}"
            )

        packages[name] = PackageInfo(name=name, dir=package_dir, rel_dir=rel_dir)

    if not packages:
        raise ConfigurationError(f"No packages matched {patterns} under {root}")

    return packages


def internal_dependencies(manifest: dict, known: Dict[str, PackageInfo]) -> List[str]:
    """
    Workspace-internal dependency names, sorted. A package naming itself
    is kept so the chain reports it as a cycle.
    """
    names = set()
    for field_name in DEPENDENCY_FIELDS:
        declared = manifest.get(field_name)
        if isinstance(declared, dict):
            names.update(declared)
    return sorted(n for n in names if n in known)


def resolve_dependencies(packages: Dict[str, PackageInfo]) -> None:
    for pkg in packages.values():
        pkg.deps = internal_dependencies(read_manifest(pkg.dir), packages)
