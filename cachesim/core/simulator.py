"""CacheSimulator feeds decoded trace events into the core Cache and
accumulates hit/miss/eviction totals in a `Statistics` object.
"""
import logging
from typing import Callable, Iterable, List, Optional

from .cache import Cache, Outcome
from .config import CacheConfig
from .trace import Operation, TraceEvent
from ..data.stats_export import Statistics

logger = logging.getLogger(__name__)

Callback = Callable[[TraceEvent, List[Outcome]], None]


def format_verbose(event: TraceEvent, outcomes: List[Outcome]) -> str:
    """Render `L 10, 1 miss eviction` style lines."""
    parts = [event.format()] + [o.label for o in outcomes]
    return " ".join(parts)


class CacheSimulator:
    def __init__(self, cache: Cache, stats: Optional[Statistics] = None):
        self.cache = cache
        self.stats = stats or Statistics()
        self.events = 0

    def reset(self):
        # clear stats and cache contents
        self.stats.reset()
        self.cache.reset()
        self.events = 0

    def step(self, event: TraceEvent) -> List[Outcome]:
        outcomes: List[Outcome] = []
        # M is a load followed by a store to the same address
        for _ in range(event.operation.accesses):
            outcome = self.cache.access(event.address)
            self.stats.record(outcome)
            outcomes.append(outcome)
        self.events += 1
        return outcomes

    def run(self, events: Iterable[TraceEvent], callback: Optional[Callback] = None) -> Statistics:
        for event in events:
            outcomes = self.step(event)
            if callback and event.operation is not Operation.OTHER:
                callback(event, outcomes)
        logger.debug("processed %d events: %s", self.events, self.stats.summary())
        return self.stats


def simulate(config: CacheConfig, events: Iterable[TraceEvent],
             callback: Optional[Callback] = None) -> Statistics:
    """Build a cache for `config`, replay `events` and return the totals."""
    sim = CacheSimulator(Cache.from_config(config))
    return sim.run(events, callback)
