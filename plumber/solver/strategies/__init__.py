"""
Strategies Package - Concrete search strategies.

Import this module to register all built-in strategies.
"""

from .sequential import SequentialStrategy
from .concurrent import ConcurrentStrategy

__all__ = [
    "SequentialStrategy",
    "ConcurrentStrategy",
]
