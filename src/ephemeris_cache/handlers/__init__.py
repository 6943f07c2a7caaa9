"""Handler layer for HTTP endpoints.

This layer contains the HTTP request/response handlers.
Handlers depend on services (cache logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Cache)  -> (LRU store / ephemeris)
"""

from .ephemeris_handler import EphemerisHandler

__all__ = [
    "EphemerisHandler",
]
