import json
from pathlib import Path
from typing import Dict, Any

from monorepo_hash.core.errors import ConfigurationError
from monorepo_hash.core.models import DEFAULT_BATCH_SIZE


SETTINGS_FILE = ".monorepo-hash.json"


# ----------------------------
# Settings
# ----------------------------

DEFAULT_SETTINGS = {
    "hashing": {"batch_size": DEFAULT_BATCH_SIZE},
    "ignore": {"extra_patterns": []},
}


def load_settings(root: Path) -> Dict[str, Any]:
    """
    Defaults, overlaid with `.monorepo-hash.json` from the workspace
    root when present. Sections merge one level deep.
    """
    merged = json.loads(json.dumps(DEFAULT_SETTINGS))

    settings_path = Path(root) / SETTINGS_FILE
    if not settings_path.exists():
        return merged

    with open(settings_path, "r", encoding="utf-8") as f:
        try:
            user_settings = json.load(f)
        except json.JSONDecodeError as exc:
            raise ConfigurationError(f"Invalid JSON in {settings_path}: {exc}") from exc

    if not isinstance(user_settings, dict):
        raise ConfigurationError(f"Expected a JSON object in {settings_path}")

    for k, v in user_settings.items():
        if isinstance(v, dict) and k in merged:
            merged[k].update(v)
        else:
            merged[k] = v

    for section in DEFAULT_SETTINGS:
        if not isinstance(merged[section], dict):
            raise ConfigurationError(f"{section} must be a JSON object in {settings_path}")

    batch_size = merged["hashing"].get("batch_size")
    if not isinstance(batch_size, int) or isinstance(batch_size, bool) or batch_size < 1:
        raise ConfigurationError(f"hashing.batch_size must be a positive integer, got {batch_size!r}")

    extra = merged["ignore"].get("extra_patterns")
    if not isinstance(extra, list) or not all(isinstance(p, str) for p in extra):
        raise ConfigurationError("ignore.extra_patterns must be a list of strings")

    return merged
