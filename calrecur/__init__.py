"""
.. include:: ../README.md
"""

__all__ = [
    "component",
    "enumeration",
    "event",
    "exceptions",
    "iter",
    "journal",
    "occurrence",
    "recur_adapter",
    "timezone",
    "todo",
    "types",
    "util",
]
