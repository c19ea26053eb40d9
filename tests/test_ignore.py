from monorepo_hash.core.ignore import IgnoreRules, LayeredIgnore


def test_glob_and_directory_rules():
    rules = IgnoreRules(["*.log", "node_modules/", "/build"])

    assert rules.should_ignore("debug.log")
    assert rules.should_ignore("src/deep/trace.log")
    assert rules.should_ignore("node_modules/x/index.js")
    assert rules.should_ignore("build/out.js")
    assert rules.should_include("src/build/out.js")
    assert rules.should_include("src/index.js")


def test_negation_re_includes():
    rules = IgnoreRules(["*.env", "!keep.env"])

    assert rules.should_ignore("secret.env")
    assert rules.should_include("keep.env")


def test_comments_and_blank_lines_are_skipped():
    rules = IgnoreRules.from_text("# comment\n\n*.tmp\n")

    assert rules.should_ignore("a.tmp")
    assert rules.should_include("# comment")


def test_artifacts_always_ignored():
    root = IgnoreRules.for_root(None)
    package = IgnoreRules.for_package(None)

    assert root.should_ignore("packages/a/.hash")
    assert root.should_ignore("packages/a/.debug-hash")
    assert package.should_ignore(".hash")
    assert package.should_ignore(".debug-hash")
    assert package.should_include("index.js")


def test_root_extra_patterns():
    root = IgnoreRules.for_root("*.log\n", extra=["dist/"])

    assert root.should_ignore("packages/a/dist/index.js")
    assert root.should_ignore("x.log")


def test_filter_keeps_order():
    rules = IgnoreRules(["b.txt"])
    assert rules.filter(["c.txt", "b.txt", "a.txt"]) == ["c.txt", "a.txt"]


def test_layered_requires_both_scopes():
    root = IgnoreRules(["*.log"])
    package = IgnoreRules(["/generated"])
    layered = LayeredIgnore(root, package, "packages/pkg-a")

    assert layered.should_include("packages/pkg-a/index.js")
    assert not layered.should_include("packages/pkg-a/app.log")
    assert not layered.should_include("packages/pkg-a/generated/types.js")


def test_package_rules_are_package_relative():
    root = IgnoreRules([])
    package = IgnoreRules(["/src"])
    layered = LayeredIgnore(root, package, "packages/pkg-a")

    # "/src" is anchored to the package, not the repo
    assert not layered.should_include("packages/pkg-a/src/index.js")
    assert layered.should_include("packages/pkg-a/lib/src/index.js")


def test_layered_accepts_windows_rel_dir():
    layered = LayeredIgnore(IgnoreRules([]), IgnoreRules(["*.tmp"]), "packages\\pkg-a")

    assert layered.to_package_path("packages/pkg-a/x.tmp") == "x.tmp"
    assert not layered.should_include("packages/pkg-a/x.tmp")
