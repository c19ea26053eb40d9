from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, List, Dict


HASH_FILE = ".hash"
DEBUG_HASH_FILE = ".debug-hash"
ARTIFACT_FILES = (HASH_FILE, DEBUG_HASH_FILE)

MODE_GENERATE = "generate"
MODE_COMPARE = "compare"

DEFAULT_BATCH_SIZE = 100


@dataclass
class PackageInfo:
    """
    One discovered workspace member.

    Filled in over three passes:
    - per_file_hashes / own_hash once files are hashed
    - deps once every package name is known
    - the final hash lives in the chain memo, not here
    """
    name: str
    dir: Path
    rel_dir: str

    deps: List[str] = field(default_factory=list)
    per_file_hashes: Dict[str, str] = field(default_factory=dict)
    own_hash: Optional[bytes] = None

    @property
    def rel_posix(self) -> str:
        return self.rel_dir.replace("\\", "/")


@dataclass(frozen=True)
class RunConfig:
    """
    Everything a run needs to know about how it was invoked.

    `targets` holds repo-relative package paths in posix form.
    None means every discovered package.
    """
    mode: str
    targets: Optional[tuple] = None
    debug: bool = False
    silent: bool = False
    batch_size: int = DEFAULT_BATCH_SIZE
    extra_ignore: tuple = ()

    def is_target(self, pkg: PackageInfo) -> bool:
        if self.targets is None:
            return True
        return pkg.rel_posix in self.targets


@dataclass
class ChangedEntry:
    name: str
    old_hash: str
    new_hash: str
    changed_deps: List[str] = field(default_factory=list)


@dataclass
class MissingEntry:
    name: str
    new_hash: str


@dataclass
class CompareReport:
    unchanged: List[str] = field(default_factory=list)
    changed: List[ChangedEntry] = field(default_factory=list)
    missing: List[MissingEntry] = field(default_factory=list)

    # rel_dir -> diverging files, None when no previous .debug-hash
    debug: Dict[str, Optional[List[str]]] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.changed and not self.missing
