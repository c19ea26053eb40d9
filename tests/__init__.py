# Auto-generated __init__.py

from . import conftest
from .conftest import make_package
from .conftest import write_file
from .conftest import write_pnpm_workspace

__all__ = [
    "conftest",
    "make_package",
    "write_file",
    "write_pnpm_workspace",
]
