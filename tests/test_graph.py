import hashlib
from pathlib import Path

import pytest

from monorepo_hash.core.errors import (
    ConfigurationError,
    CyclicDependencyError,
    MissingOwnHashError,
)
from monorepo_hash.core.graph import HashChain, TransitiveDeps, compute_final_hash
from monorepo_hash.core.models import PackageInfo


# ----------------------------
# Helpers
# ----------------------------

def _pkg(name, deps=(), own=None):
    return PackageInfo(
        name=name,
        dir=Path("/repo") / name,
        rel_dir=name,
        deps=list(deps),
        own_hash=own if own is not None else hashlib.sha256(name.encode()).digest(),
    )


def _graph(*pkgs):
    return {p.name: p for p in pkgs}


def _fold(own: bytes, *dep_hex: str) -> str:
    h = hashlib.sha256(own)
    for d in dep_hex:
        h.update(bytes.fromhex(d))
    return h.hexdigest()


# ----------------------------
# Tests
# ----------------------------

def test_leaf_is_hash_of_own_hash():
    pkgs = _graph(_pkg("a"))
    assert compute_final_hash("a", pkgs, {}) == _fold(pkgs["a"].own_hash)


def test_chain_incorporates_dependency_final_hashes_in_order():
    pkgs = _graph(_pkg("a", ["b", "c"]), _pkg("b"), _pkg("c"))

    b = _fold(pkgs["b"].own_hash)
    c = _fold(pkgs["c"].own_hash)

    assert compute_final_hash("a", pkgs, {}) == _fold(pkgs["a"].own_hash, b, c)


def test_diamond_matches_manual_fold():
    pkgs = _graph(
        _pkg("a", ["b", "c"]),
        _pkg("b", ["d"]),
        _pkg("c", ["d"]),
        _pkg("d"),
    )

    d = _fold(pkgs["d"].own_hash)
    b = _fold(pkgs["b"].own_hash, d)
    c = _fold(pkgs["c"].own_hash, d)
    a = _fold(pkgs["a"].own_hash, b, c)

    finals = HashChain(pkgs).compute_all()

    assert finals == {"a": a, "b": b, "c": c, "d": d}


def test_memo_is_reused():
    pkgs = _graph(_pkg("a", ["b"]), _pkg("b"))
    cache = {"b": "ab" * 32}

    result = compute_final_hash("a", pkgs, cache)

    assert result == _fold(pkgs["a"].own_hash, "ab" * 32)
    assert compute_final_hash("a", pkgs, cache) == result


def test_dependency_change_propagates_but_not_to_unrelated():
    before = _graph(_pkg("a", ["b"]), _pkg("b"), _pkg("c"))
    after = _graph(_pkg("a", ["b"]), _pkg("b", own=b"\x01" * 32), _pkg("c"))

    f1 = HashChain(before).compute_all()
    f2 = HashChain(after).compute_all()

    assert f1["b"] != f2["b"]
    assert f1["a"] != f2["a"]
    assert f1["c"] == f2["c"]


def test_missing_own_hash_is_fatal():
    pkgs = _graph(PackageInfo(name="a", dir=Path("/repo/a"), rel_dir="a"))

    with pytest.raises(MissingOwnHashError):
        compute_final_hash("a", pkgs, {})


def test_unknown_dependency():
    pkgs = _graph(_pkg("a", ["ghost"]))

    with pytest.raises(ConfigurationError):
        compute_final_hash("a", pkgs, {})


def test_cycle_detected_without_corrupting_memo():
    pkgs = _graph(_pkg("a", ["b"]), _pkg("b", ["c"]), _pkg("c", ["a"]), _pkg("d"))
    chain = HashChain(pkgs)

    with pytest.raises(CyclicDependencyError) as info:
        chain.final_hash("a")

    assert info.value.cycle == ["a", "b", "c", "a"]
    assert chain.cache == {}

    # unrelated packages still compute on the same chain
    assert chain.final_hash("d") == _fold(pkgs["d"].own_hash)


def test_self_dependency_is_a_cycle():
    pkgs = _graph(_pkg("a", ["a"]))

    with pytest.raises(CyclicDependencyError):
        HashChain(pkgs).compute_all()


def test_transitive_closure():
    pkgs = _graph(
        _pkg("a", ["b"]),
        _pkg("b", ["c", "d"]),
        _pkg("c", ["d"]),
        _pkg("d"),
        _pkg("e"),
    )
    closure = TransitiveDeps(pkgs)

    assert closure.of("a") == {"b", "c", "d"}
    assert closure.of("c") == {"d"}
    assert closure.of("d") == set()
    assert closure.of("e") == set()


def test_transitive_closure_terminates_on_cycles():
    pkgs = _graph(_pkg("a", ["b"]), _pkg("b", ["a"]))

    assert TransitiveDeps(pkgs).of("a") == {"a", "b"}
