from pathlib import Path
import json
import logging
from typing import Dict, Optional

from monorepo_hash.core.errors import HashIOError
from monorepo_hash.core.models import HASH_FILE, DEBUG_HASH_FILE


logger = logging.getLogger(__name__)


def hash_path(package_dir: Path) -> Path:
    return Path(package_dir) / HASH_FILE


def debug_hash_path(package_dir: Path) -> Path:
    return Path(package_dir) / DEBUG_HASH_FILE


def read_hash(package_dir: Path) -> Optional[str]:
    """Stored fingerprint, or None if the package was never generated."""
    path = hash_path(package_dir)
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise HashIOError(f"Cannot read {path}: {exc}") from exc


def write_hash(package_dir: Path, final_hash: str) -> Path:
    path = hash_path(package_dir)
    try:
        path.write_text(final_hash, encoding="utf-8")
    except OSError as exc:
        raise HashIOError(f"Cannot write {path}: {exc}") from exc
    logger.debug("wrote %s", path)
    return path


def load_debug_file(package_dir: Path) -> Optional[Dict[str, str]]:
    path = debug_hash_path(package_dir)
    if not path.exists():
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except (OSError, ValueError) as exc:
        raise HashIOError(f"Cannot read {path}: {exc}") from exc


def write_debug_file(package_dir: Path, per_file: Dict[str, str]) -> Path:
    path = debug_hash_path(package_dir)
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(per_file, f, indent=2, sort_keys=True)
    except OSError as exc:
        raise HashIOError(f"Cannot write {path}: {exc}") from exc
    return path


def diverging_files(old: Dict[str, str], new: Dict[str, str]) -> list:
    """Paths added, removed or modified between two per-file maps."""
    return sorted(k for k in set(old) | set(new) if old.get(k) != new.get(k))
