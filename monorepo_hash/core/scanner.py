import logging
import os
import posixpath
from pathlib import Path
from typing import List

from monorepo_hash.core.errors import FileSystemError
from monorepo_hash.core.ignore import (
    IgnoreRules,
    LayeredIgnore,
    load_ignore_text,
)


logger = logging.getLogger(__name__)


def to_posix(path: str) -> str:
    return path.replace(os.sep, "/")


def to_host(path: str) -> str:
    return path.replace("/", os.sep)


def _walk_files(directory: Path) -> List[str]:
    """
    Every regular file under `directory`, dotfiles included,
    as posix paths relative to it.
    """

    def _fail(err: OSError):
        raise err

    found = []
    # real dirs on the walked path down to each dir, to stop symlink loops
    chains = {str(directory): {os.path.realpath(directory)}}

    for current, dirs, files in os.walk(str(directory), onerror=_fail, followlinks=True):
        ancestors = chains.pop(current, set())
        kept = []
        for d in dirs:
            real = os.path.realpath(os.path.join(current, d))
            if real in ancestors:
                logger.debug("skipping symlink loop at %s", os.path.join(current, d))
                continue
            chains[os.path.join(current, d)] = ancestors | {real}
            kept.append(d)
        dirs[:] = kept

        rel = os.path.relpath(current, directory)
        for name in files:
            if not (Path(current) / name).is_file():
                continue
            joined = name if rel == os.curdir else os.path.join(rel, name)
            found.append(to_posix(joined))
    return found


def list_workspace_files(
    package_dir: Path,
    package_rel_dir: str,
    root_rules: IgnoreRules,
) -> List[str]:
    """
    List a package's files after root and package-level ignore rules.

    Returns package-relative paths using host separators, sorted by
    their posix form so the order is the same on every OS.
    """
    package_dir = Path(package_dir)
    if not package_dir.is_dir():
        raise FileSystemError(f"Package directory not found: {package_dir}")

    try:
        raw_files = _walk_files(package_dir)
        package_rules = IgnoreRules.for_package(load_ignore_text(package_dir))
    except OSError as exc:
        raise FileSystemError(f"Cannot read package directory {package_dir}: {exc}") from exc

    rel_posix = to_posix(package_rel_dir).strip("/")
    layered = LayeredIgnore(root_rules, package_rules, rel_posix)

    kept = []
    for f in raw_files:
        repo_path = posixpath.join(rel_posix, f) if rel_posix else f
        if layered.should_include(repo_path):
            kept.append(f)

    logger.debug(
        "%s: %d files, %d after ignore rules",
        rel_posix or ".",
        len(raw_files),
        len(kept),
    )

    return [to_host(f) for f in sorted(kept)]
