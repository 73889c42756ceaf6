"""Business logic services for mypod.

Public API:
    LibraryInitializer - Catalog ingestion and default playlist bootstrap
"""

from mypod.services.ingestion import CoverFetcherProtocol, LibraryInitializer

__all__ = [
    "CoverFetcherProtocol",
    "LibraryInitializer",
]
