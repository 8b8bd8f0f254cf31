"""
Boardroom - decision governance engine.

Classifies tasks, routes them to advisor councils, searches institutional
memory, and keeps per-entity trust scores.
"""

from importlib.metadata import PackageNotFoundError, version

from .config import BoardroomConfig, load_config
from .core import Boardroom

try:
    __version__ = version("boardroom")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = ["Boardroom", "BoardroomConfig", "load_config"]
