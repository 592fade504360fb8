"""Exceptions raised by the cache simulator.

Everything derives from `CacheSimError` so callers (the CLI in particular)
can catch the whole family in one place.
"""
from typing import Optional


class CacheSimError(Exception):
    pass


class ConfigurationError(CacheSimError, ValueError):
    """Invalid (s, E, b) combination. Raised before any storage is built."""


class AllocationError(CacheSimError, MemoryError):
    """Storage for the sets/lines could not be obtained."""


class TraceFormatError(CacheSimError, ValueError):
    """A trace line could not be decoded."""

    def __init__(self, message: str, lineno: Optional[int] = None, text: Optional[str] = None):
        self.lineno = lineno
        self.text = text
        if lineno is not None:
            message = f"line {lineno}: {message}"
        if text is not None:
            message = f"{message}: {text.rstrip()!r}"
        super().__init__(message)
