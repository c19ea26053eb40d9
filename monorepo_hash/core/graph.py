import hashlib
from typing import Dict, List, Optional, Set

from monorepo_hash.core.errors import (
    ConfigurationError,
    CyclicDependencyError,
    MissingOwnHashError,
)
from monorepo_hash.core.models import PackageInfo


# ============================================================
# Final hash chaining
# ============================================================

class HashChain:
    """
    Memoized final-hash computation over the internal dependency graph.

    final = sha256(own_hash, final(dep_1), final(dep_2), ...) with deps
    taken in the order stored on the package. A package revisited while
    it is still being computed means the graph has a cycle.
    """

    def __init__(
        self,
        packages: Dict[str, PackageInfo],
        cache: Optional[Dict[str, str]] = None,
    ):
        self.packages = packages
        self.cache = cache if cache is not None else {}
        self._in_progress: List[str] = []

    def final_hash(self, name: str) -> str:
        if name in self.cache:
            return self.cache[name]

        if name in self._in_progress:
            start = self._in_progress.index(name)
            raise CyclicDependencyError(self._in_progress[start:] + [name])

        pkg = self.packages.get(name)
        if pkg is None:
            raise ConfigurationError(f"Unknown workspace package: {name}")
        if pkg.own_hash is None:
            raise MissingOwnHashError(name)

        self._in_progress.append(name)
        try:
            chain = hashlib.sha256(pkg.own_hash)
            for dep in pkg.deps:
                chain.update(bytes.fromhex(self.final_hash(dep)))
        finally:
            self._in_progress.pop()

        final_hex = chain.hexdigest()
        self.cache[name] = final_hex
        return final_hex

    def compute_all(self) -> Dict[str, str]:
        for name in self.packages:
            self.final_hash(name)
        return self.cache


def compute_final_hash(
    name: str,
    packages: Dict[str, PackageInfo],
    cache: Dict[str, str],
) -> str:
    return HashChain(packages, cache).final_hash(name)


# ============================================================
# Transitive closure
# ============================================================

class TransitiveDeps:
    """
    Every package reachable from a given one, computed with an explicit
    stack and cached per package.
    """

    def __init__(self, packages: Dict[str, PackageInfo]):
        self.adjacency = {name: list(pkg.deps) for name, pkg in packages.items()}
        self._cache: Dict[str, Set[str]] = {}

    def of(self, name: str) -> Set[str]:
        if name in self._cache:
            return self._cache[name]

        visited: Set[str] = set()
        stack = list(self.adjacency.get(name, []))

        while stack:
            dep = stack.pop()
            if dep in visited:
                continue
            visited.add(dep)
            stack.extend(d for d in self.adjacency.get(dep, []) if d not in visited)

        self._cache[name] = visited
        return visited
