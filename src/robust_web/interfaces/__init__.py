"""
Interfaces module - Abstract base classes for pluggable components.
"""

from robust_web.interfaces.context import ISearchContext

__all__ = [
    "ISearchContext",
]
