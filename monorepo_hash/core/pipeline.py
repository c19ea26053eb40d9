import asyncio
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from monorepo_hash.core.artifacts import load_debug_file, write_debug_file, write_hash
from monorepo_hash.core.graph import HashChain
from monorepo_hash.core.hashing import compute_own_hash, compute_per_file_hashes
from monorepo_hash.core.ignore import IgnoreRules, load_ignore_text
from monorepo_hash.core.models import PackageInfo, RunConfig
from monorepo_hash.core.scanner import list_workspace_files
from monorepo_hash.core.workspace import (
    Workspace,
    discover_packages,
    resolve_dependencies,
)


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int, PackageInfo], None]


@dataclass
class Fingerprints:
    packages: Dict[str, PackageInfo]
    finals: Dict[str, str]
    # name -> .debug-hash content from before this run (debug mode only)
    previous_debug: Dict[str, Optional[Dict[str, str]]] = field(default_factory=dict)


def root_ignore_rules(workspace: Workspace, config: RunConfig) -> IgnoreRules:
    return IgnoreRules.for_root(load_ignore_text(workspace.root), config.extra_ignore)


async def hash_package(
    pkg: PackageInfo,
    root_rules: IgnoreRules,
    config: RunConfig,
) -> Optional[Dict[str, str]]:
    """
    Fill in per_file_hashes and own_hash for one package.

    In debug mode the previous .debug-hash is returned before being
    replaced by the new per-file map.
    """
    files = await asyncio.to_thread(
        list_workspace_files, pkg.dir, pkg.rel_dir, root_rules
    )
    per_file = await compute_per_file_hashes(pkg.dir, files, config.batch_size)

    pkg.per_file_hashes = per_file
    pkg.own_hash = compute_own_hash(per_file)

    if not config.debug:
        return None

    previous = await asyncio.to_thread(load_debug_file, pkg.dir)
    await asyncio.to_thread(write_debug_file, pkg.dir, per_file)
    return previous


async def compute_fingerprints(
    workspace: Workspace,
    config: RunConfig,
    on_progress: Optional[ProgressCallback] = None,
) -> Fingerprints:
    packages = discover_packages(workspace.root, workspace.patterns)
    root_rules = root_ignore_rules(workspace, config)

    total = len(packages)
    done = 0

    async def _one(pkg: PackageInfo):
        nonlocal done
        previous = await hash_package(pkg, root_rules, config)
        done += 1
        if on_progress:
            on_progress(done, total, pkg)
        return pkg.name, previous

    results = await asyncio.gather(*(_one(pkg) for pkg in packages.values()))

    # deps can only be filtered once every package name is known
    resolve_dependencies(packages)
    finals = HashChain(packages).compute_all()

    logger.debug("computed %d fingerprints", len(finals))

    return Fingerprints(
        packages=packages,
        finals=finals,
        previous_debug=dict(results) if config.debug else {},
    )


async def generate_hashes(fingerprints: Fingerprints, config: RunConfig) -> List[PackageInfo]:
    """Write .hash for every targeted package. Returns what was written."""
    targets = [
        pkg for pkg in fingerprints.packages.values() if config.is_target(pkg)
    ]
    await asyncio.gather(*(
        asyncio.to_thread(write_hash, pkg.dir, fingerprints.finals[pkg.name])
        for pkg in targets
    ))
    return targets
