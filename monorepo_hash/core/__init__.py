# Auto-generated __init__.py

from . import artifacts
from .artifacts import load_debug_file
from .artifacts import read_hash
from .artifacts import write_debug_file
from .artifacts import write_hash
from . import compare
from .compare import build_report
from .compare import compare_hashes
from . import errors
from .errors import ConfigurationError
from .errors import CyclicDependencyError
from .errors import FileSystemError
from .errors import HashIOError
from .errors import MissingOwnHashError
from .errors import MonorepoHashError
from .errors import WorkspaceNotFoundError
from . import graph
from .graph import HashChain
from .graph import TransitiveDeps
from .graph import compute_final_hash
from . import hashing
from .hashing import compute_own_hash
from .hashing import compute_per_file_hashes
from . import ignore
from .ignore import IgnoreRules
from .ignore import LayeredIgnore
from . import models
from .models import CompareReport
from .models import PackageInfo
from .models import RunConfig
from . import pipeline
from .pipeline import compute_fingerprints
from .pipeline import generate_hashes
from . import scanner
from .scanner import list_workspace_files
from . import workspace
from .workspace import discover_packages
from .workspace import find_workspace

__all__ = [
    "artifacts",
    "compare",
    "errors",
    "graph",
    "hashing",
    "ignore",
    "models",
    "pipeline",
    "scanner",
    "workspace",
    "CompareReport",
    "ConfigurationError",
    "CyclicDependencyError",
    "FileSystemError",
    "HashChain",
    "HashIOError",
    "IgnoreRules",
    "LayeredIgnore",
    "MissingOwnHashError",
    "MonorepoHashError",
    "PackageInfo",
    "RunConfig",
    "TransitiveDeps",
    "WorkspaceNotFoundError",
    "build_report",
    "compare_hashes",
    "compute_final_hash",
    "compute_fingerprints",
    "compute_own_hash",
    "compute_per_file_hashes",
    "discover_packages",
    "find_workspace",
    "generate_hashes",
    "list_workspace_files",
    "load_debug_file",
    "read_hash",
    "write_debug_file",
    "write_hash",
]
