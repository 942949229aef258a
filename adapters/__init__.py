"""
Adapters package - External service connections.
"""

from adapters import storage_adapter

__all__ = [
    "storage_adapter",
]
