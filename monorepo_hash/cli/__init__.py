# Auto-generated __init__.py

from . import console
from .console import Console
from . import hash_cli
from .hash_cli import main
from .hash_cli import run
from . import parser
from .parser import build_parser
from .parser import parse_args
from . import settings
from .settings import load_settings

__all__ = [
    "console",
    "hash_cli",
    "parser",
    "settings",
    "Console",
    "build_parser",
    "load_settings",
    "main",
    "parse_args",
    "run",
]
