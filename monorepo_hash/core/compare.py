import asyncio
from typing import Dict, Optional

from monorepo_hash.core.artifacts import diverging_files, read_hash
from monorepo_hash.core.graph import TransitiveDeps
from monorepo_hash.core.models import (
    ChangedEntry,
    CompareReport,
    MissingEntry,
    PackageInfo,
    RunConfig,
)


async def load_stored_hashes(packages: Dict[str, PackageInfo]) -> Dict[str, Optional[str]]:
    """Read every package's `.hash` concurrently; None where absent."""
    names = list(packages)
    values = await asyncio.gather(
        *(asyncio.to_thread(read_hash, packages[n].dir) for n in names)
    )
    return dict(zip(names, values))


def build_report(
    packages: Dict[str, PackageInfo],
    finals: Dict[str, str],
    stored: Dict[str, Optional[str]],
    config: RunConfig,
    previous_debug: Optional[Dict[str, Optional[Dict[str, str]]]] = None,
) -> CompareReport:
    """
    Classify each targeted package as unchanged, changed or missing.

    The set of changed packages is computed over every package, not just
    the targets, so a target notices a change anywhere in its transitive
    dependencies.
    """
    dirty = {
        name for name in packages
        if stored.get(name) is None or stored[name] != finals[name]
    }
    closure = TransitiveDeps(packages)
    report = CompareReport()

    for name, pkg in packages.items():
        if not config.is_target(pkg):
            continue

        new_hash = finals[name]
        old_hash = stored.get(name)

        if old_hash is None:
            report.missing.append(MissingEntry(name=pkg.rel_dir, new_hash=new_hash))
            continue

        if config.debug and previous_debug is not None:
            old_map = previous_debug.get(name)
            report.debug[pkg.rel_dir] = (
                None if old_map is None
                else diverging_files(old_map, pkg.per_file_hashes)
            )

        changed_deps = sorted(
            packages[d].rel_dir for d in closure.of(name)
            if d in dirty and d != name
        )

        if old_hash != new_hash or changed_deps:
            report.changed.append(ChangedEntry(
                name=pkg.rel_dir,
                old_hash=old_hash,
                new_hash=new_hash,
                changed_deps=changed_deps,
            ))
        else:
            report.unchanged.append(pkg.rel_dir)

    return report


async def compare_hashes(
    packages: Dict[str, PackageInfo],
    finals: Dict[str, str],
    config: RunConfig,
    previous_debug: Optional[Dict[str, Optional[Dict[str, str]]]] = None,
) -> CompareReport:
    stored = await load_stored_hashes(packages)
    return build_report(packages, finals, stored, config, previous_debug)
