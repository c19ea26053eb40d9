import asyncio
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List, Optional

from monorepo_hash.cli.console import Console
from monorepo_hash.cli.parser import (
    EXIT_CHANGED,
    EXIT_OK,
    EXIT_UNEXPECTED,
    EXIT_WORKSPACE,
    UsageError,
    parse_args,
)
from monorepo_hash.cli.settings import load_settings
from monorepo_hash.core.compare import compare_hashes
from monorepo_hash.core.errors import ConfigurationError
from monorepo_hash.core.models import MODE_GENERATE, RunConfig
from monorepo_hash.core.pipeline import compute_fingerprints, generate_hashes
from monorepo_hash.core.workspace import find_workspace


logger = logging.getLogger(__name__)


def _announce(config: RunConfig, console: Console):
    verb = "Generating" if config.mode == MODE_GENERATE else "Comparing"
    if config.targets is not None:
        console.log(f"ℹ️  {verb} hashes for specified targets... ({', '.join(config.targets)})\n")
    else:
        console.log(f"ℹ️  {verb} hashes for all workspaces...\n")
    if config.debug:
        console.log("ℹ️  Debug mode enabled\n")


# ----------------------------
# CLI Orchestrator
# ----------------------------

async def run(config: RunConfig, *, cwd: Path, console: Console) -> int:
    workspace = find_workspace(cwd)
    settings = load_settings(workspace.root)

    config = dataclasses.replace(
        config,
        batch_size=settings["hashing"]["batch_size"],
        extra_ignore=tuple(settings["ignore"]["extra_patterns"]),
    )

    _announce(config, console)

    fingerprints = await compute_fingerprints(workspace, config, console.progress)
    console.progress_done(len(fingerprints.packages))

    if config.targets is not None:
        known = {pkg.rel_posix for pkg in fingerprints.packages.values()}
        for target in config.targets:
            if target not in known:
                logger.warning("target %s is not a workspace package", target)

    if config.mode == MODE_GENERATE:
        for pkg in await generate_hashes(fingerprints, config):
            console.generated(pkg, fingerprints.finals[pkg.name])
        return EXIT_OK

    report = await compare_hashes(
        fingerprints.packages,
        fingerprints.finals,
        config,
        fingerprints.previous_debug,
    )
    console.compare_report(report)
    return EXIT_OK if report.ok else EXIT_CHANGED


def main(argv: Optional[List[str]] = None, cwd: Optional[Path] = None) -> int:
    try:
        config = parse_args(argv)
    except UsageError as exc:
        Console().error(str(exc))
        return exc.code
    except SystemExit as exc:
        # --help and --version
        return exc.code or EXIT_OK

    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    console = Console(silent=config.silent)
    try:
        return asyncio.run(run(config, cwd=cwd or Path.cwd(), console=console))
    except ConfigurationError as exc:
        console.error(str(exc))
        return EXIT_WORKSPACE
    except Exception as exc:
        logger.debug("unexpected error", exc_info=True)
        console.error(f"Unexpected error : {exc}")
        return EXIT_UNEXPECTED
