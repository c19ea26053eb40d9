from typing import List


class MonorepoHashError(Exception):
    """Base class for every fatal condition of a run."""


class ConfigurationError(MonorepoHashError):
    pass


class WorkspaceNotFoundError(ConfigurationError):
    pass


class FileSystemError(MonorepoHashError):
    pass


class HashIOError(MonorepoHashError):
    pass


class MissingOwnHashError(MonorepoHashError):
    def __init__(self, name: str):
        super().__init__(f"ownHash missing for package {name}")
        self.name = name


class CyclicDependencyError(MonorepoHashError):
    def __init__(self, cycle: List[str]):
        super().__init__("Dependency cycle detected: " + " -> ".join(cycle))
        self.cycle = cycle
