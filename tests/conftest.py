import json
from pathlib import Path
from typing import Dict, List, Optional

import pytest


# ----------------------------
# Helpers
# ----------------------------

def write_file(path: Path, content: str):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def make_package(
    root: Path,
    rel_dir: str,
    name: Optional[str],
    deps: Optional[List[str]] = None,
    files: Optional[Dict[str, str]] = None,
) -> Path:
    pkg_dir = root / rel_dir
    pkg_dir.mkdir(parents=True, exist_ok=True)

    manifest = {"version": "0.1.0", "type": "module"}
    if name is not None:
        manifest["name"] = name
    if deps:
        manifest["dependencies"] = {d: "workspace:^" for d in deps}
    write_file(pkg_dir / "package.json", json.dumps(manifest, indent=2))

    for rel, content in (files or {}).items():
        write_file(pkg_dir / rel, content)

    return pkg_dir


def write_pnpm_workspace(root: Path, patterns: List[str]):
    lines = ["packages:"] + [f'  - "{p}"' for p in patterns]
    write_file(root / "pnpm-workspace.yaml", "\n".join(lines) + "\n")


# ----------------------------
# Fixtures
# ----------------------------

@pytest.fixture
def monorepo(tmp_path: Path) -> Path:
    """
    packages/pkg-a -> packages/pkg-b, and an unrelated packages/pkg-c.
    """
    write_pnpm_workspace(tmp_path, ["packages/*"])

    make_package(
        tmp_path, "packages/pkg-a", "pkg-a",
        deps=["pkg-b"],
        files={"index.js": 'console.log("hello from pkg-a")\n'},
    )
    make_package(
        tmp_path, "packages/pkg-b", "pkg-b",
        files={"index.js": 'export const msg = "pkg-b"\n'},
    )
    make_package(
        tmp_path, "packages/pkg-c", "pkg-c",
        files={"index.js": 'export const msg = "pkg-c"\n'},
    )
    return tmp_path
