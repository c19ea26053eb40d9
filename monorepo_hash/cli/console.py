import sys

from monorepo_hash.core.models import CompareReport, PackageInfo


class Console:
    """User-facing output. Everything on stdout respects --silent."""

    def __init__(self, silent: bool = False, stream=None):
        self.silent = silent
        self.stream = stream or sys.stdout

    def log(self, message: str = "", overwrite: bool = False):
        if self.silent:
            return
        if overwrite and self.stream.isatty():
            self.stream.write("\r\x1b[2K" + message)
            self.stream.flush()
        else:
            print(message, file=self.stream)

    def error(self, message: str):
        print(f"❌ {message}", file=sys.stderr)

    # ----------------------------
    # Progress
    # ----------------------------

    def progress(self, done: int, total: int, pkg: PackageInfo):
        pad = len(str(total))
        self.log(
            f"🔄 Computing hashes ({str(done).zfill(pad)}/{total}) • {pkg.rel_dir}",
            overwrite=True,
        )

    def progress_done(self, total: int):
        self.log(f"✅ Computed all hashes ({total})", overwrite=True)
        self.log()

    # ----------------------------
    # Reports
    # ----------------------------

    def generated(self, pkg: PackageInfo, final_hash: str):
        self.log(f"✅ {pkg.rel_dir} ({final_hash}) written to .hash")

    def debug_divergence(self, report: CompareReport):
        for rel_dir, files in report.debug.items():
            if files is None:
                self.log(f"❓ <debug> {rel_dir} has no .debug-hash to compare")
                self.log()
            elif files:
                self.log(f"⚠️  <debug> {rel_dir} diverging files :")
                for f in files:
                    self.log(f"  • {f}")
                self.log()

    def compare_report(self, report: CompareReport):
        self.debug_divergence(report)

        if report.unchanged:
            self.log(f"✅ Unchanged ({len(report.unchanged)}) :")
            for name in report.unchanged:
                self.log(f"• {name}")
            self.log()

        if report.changed:
            self.log(f"⚠️  Changed ({len(report.changed)}) :")
            for entry in report.changed:
                self.log(f"• {entry.name}")
                self.log(f"\told : {entry.old_hash}")
                self.log(f"\tnew : {entry.new_hash}")
                if entry.changed_deps:
                    self.log("\t🚧 changed dependency(s) :")
                    for dep in entry.changed_deps:
                        self.log(f"\t\t• {dep}")
            self.log()

        if report.missing:
            self.log(f"❓ Missing .hash files ({len(report.missing)}) :")
            for entry in report.missing:
                self.log(f"• {entry.name} (would be {entry.new_hash})")
            self.log()
