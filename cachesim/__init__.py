"""Trace-driven simulator for a set-associative cache with LRU eviction."""
from cachesim.core.cache import Cache, Line, Outcome
from cachesim.core.config import CacheConfig
from cachesim.core.errors import AllocationError, CacheSimError, ConfigurationError, TraceFormatError
from cachesim.core.simulator import CacheSimulator, simulate
from cachesim.data.stats_export import Statistics

__all__ = [
    "Cache",
    "Line",
    "Outcome",
    "CacheConfig",
    "CacheSimError",
    "ConfigurationError",
    "AllocationError",
    "TraceFormatError",
    "CacheSimulator",
    "simulate",
    "Statistics",
]
