"""ember language server package.

This package provides:
- A pygls-based Language Server for ember source files.
- An indexer that reads documents with the ember parser without evaluating them.
"""

__all__ = [
    "server",
    "indexer",
]
