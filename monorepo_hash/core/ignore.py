import posixpath
from pathlib import Path
from typing import Iterable, List, Optional

import pathspec

from monorepo_hash.core.models import ARTIFACT_FILES


GITIGNORE = ".gitignore"


# ============================================================
# Ignore rules
# ============================================================

class IgnoreRules:
    """
    One parsed set of gitignore rules.

    Paths are evaluated relative to the directory the rules belong to,
    in posix form. Parsing happens once, in the constructor.
    """

    def __init__(self, patterns: Iterable[str] = ()):
        self.patterns = [p for p in patterns if p is not None]
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    @classmethod
    def from_text(cls, text: Optional[str], extra: Iterable[str] = ()) -> "IgnoreRules":
        lines = text.splitlines() if text else []
        return cls([*lines, *extra])

    @classmethod
    def for_root(cls, text: Optional[str], extra: Iterable[str] = ()) -> "IgnoreRules":
        # artifacts are ignored at any depth of the repo
        artifacts = [f"**/{name}" for name in ARTIFACT_FILES]
        return cls.from_text(text, [*extra, *artifacts])

    @classmethod
    def for_package(cls, text: Optional[str]) -> "IgnoreRules":
        return cls.from_text(text, ARTIFACT_FILES)

    def should_ignore(self, path: str) -> bool:
        return self._spec.match_file(path)

    def should_include(self, path: str) -> bool:
        return not self.should_ignore(path)

    def filter(self, paths: Iterable[str]) -> List[str]:
        return [p for p in paths if self.should_include(p)]


def load_ignore_text(directory: Path) -> Optional[str]:
    path = directory / GITIGNORE
    if not path.is_file():
        return None
    return path.read_text(encoding="utf-8")


# ============================================================
# Root + package composition
# ============================================================

class LayeredIgnore:
    """
    A path survives only if the root rules keep it (repo-relative)
    AND the package rules keep it (package-relative).
    """

    def __init__(self, root: IgnoreRules, package: IgnoreRules, package_rel_dir: str):
        self.root = root
        self.package = package
        self.package_rel_dir = package_rel_dir.replace("\\", "/").strip("/")

    def to_package_path(self, repo_path: str) -> str:
        if not self.package_rel_dir:
            return repo_path
        return posixpath.relpath(repo_path, self.package_rel_dir)

    def should_include(self, repo_path: str) -> bool:
        if not self.root.should_include(repo_path):
            return False
        return self.package.should_include(self.to_package_path(repo_path))
