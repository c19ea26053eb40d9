import asyncio
import hashlib
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from monorepo_hash.core.errors import HashIOError
from monorepo_hash.core.models import DEFAULT_BATCH_SIZE
from monorepo_hash.core.scanner import to_posix


# ============================================================
# Per-file hashes
# ============================================================

def hash_file_content(normalized: str, content: bytes) -> str:
    """
    sha256(posix path, then raw bytes).

    The path goes in first so a rename changes the digest even when
    the bytes are identical.
    """
    h = hashlib.sha256()
    h.update(normalized.encode("utf-8"))
    h.update(content)
    return h.hexdigest()


async def _hash_one(directory: Path, rel: str) -> Tuple[str, str]:
    normalized = to_posix(rel)
    full_path = directory / rel
    try:
        content = await asyncio.to_thread(full_path.read_bytes)
    except OSError as exc:
        raise HashIOError(f"Cannot read {full_path}: {exc}") from exc
    return normalized, hash_file_content(normalized, content)


async def compute_per_file_hashes(
    directory: Path,
    file_list: List[str],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> Dict[str, str]:
    """
    Map of posix relative path -> hex sha256 for every listed file.

    Files are read in sequential batches; reads inside a batch run
    concurrently. The batch only bounds open files and memory.
    """
    if batch_size < 1:
        raise ValueError("batch_size must be positive")

    directory = Path(directory)
    result: Dict[str, str] = {}

    for i in range(0, len(file_list), batch_size):
        batch = file_list[i:i + batch_size]
        partial = await asyncio.gather(*(_hash_one(directory, rel) for rel in batch))
        for normalized, digest in partial:
            result[normalized] = digest

    return result


# ============================================================
# Package own hash
# ============================================================

def compute_own_hash(
    per_file: Dict[str, str],
    sorted_keys: Optional[List[str]] = None,
) -> bytes:
    """
    Fold every per-file digest (raw bytes, sorted path order) into a
    single sha256. An empty map gives sha256 of empty input.
    """
    if sorted_keys is None:
        sorted_keys = sorted(per_file)

    h = hashlib.sha256()
    for key in sorted_keys:
        h.update(bytes.fromhex(per_file[key]))
    return h.digest()
