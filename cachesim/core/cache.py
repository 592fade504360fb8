"""Core cache implementation

Set-associative cache model driven one address at a time.
Behavior:
- The cache has S = 2**s sets; each set has E lines (ways).
  set_index = (address >> b) & (S - 1)
  tag = address >> (s + b)
- Block offset bits are stripped and never looked at again.
- access(address) returns an `Outcome`: HIT, MISS_FILL (an empty line was
  used) or MISS_EVICT (the LRU line of a full set was replaced).
"""

import enum
import logging
from dataclasses import dataclass
from typing import List, Tuple

from cachesim.core.config import ADDRESS_BITS, CacheConfig
from cachesim.core.errors import AllocationError
from cachesim.core.replacement_policies import LRUReplacement

logger = logging.getLogger(__name__)

ADDRESS_MASK = (1 << ADDRESS_BITS) - 1


class Outcome(enum.Enum):
    HIT = "hit"
    MISS_FILL = "miss"
    MISS_EVICT = "miss eviction"

    @property
    def is_hit(self) -> bool:
        return self is Outcome.HIT

    @property
    def is_miss(self) -> bool:
        return self is not Outcome.HIT

    @property
    def is_eviction(self) -> bool:
        return self is Outcome.MISS_EVICT

    @property
    def label(self) -> str:
        return self.value


@dataclass
class Line:
    """container for a cache line (way).

    Fields:
    - valid: whether the line currently holds a block
    - tag: upper address bits of that block (meaningless while invalid)
    - recency: LRU rank within the set, 0 = most recently used
    """

    valid: bool = False
    tag: int = 0
    recency: int = 0


class Cache:
    """Set-associative cache model with ranked LRU eviction.
    """

    def __init__(self, set_bits: int, associativity: int, block_bits: int):
        self.config = CacheConfig(set_bits, associativity, block_bits).validate()
        self.set_bits = set_bits
        self.associativity = associativity
        self.block_bits = block_bits
        self.num_sets = self.config.num_sets
        self._set_mask = self.num_sets - 1
        self.policy = LRUReplacement(associativity)
        self.sets: List[List[Line]] = self._allocate()
        logger.debug("cache created: %s", self.config.describe())

    @classmethod
    def from_config(cls, config: CacheConfig) -> "Cache":
        return cls(config.set_bits, config.associativity, config.block_bits)

    def _allocate(self) -> List[List[Line]]:
        # reserve the outer table first so absurd geometries fail fast
        try:
            sets: List[List[Line]] = [None] * self.num_sets
        except (MemoryError, OverflowError) as exc:
            raise AllocationError(f"cannot allocate {self.num_sets} cache sets") from exc
        try:
            for i in range(self.num_sets):
                sets[i] = [Line() for _ in range(self.associativity)]
        except MemoryError as exc:
            # drop whatever was built before reporting the failure
            sets.clear()
            raise AllocationError(
                f"cannot allocate {self.num_sets} sets of {self.associativity} lines"
            ) from exc
        return sets

    def decode(self, address: int) -> Tuple[int, int]:
        """Decode address into (set_index, tag)."""

        address &= ADDRESS_MASK
        set_index = (address >> self.block_bits) & self._set_mask
        tag = address >> (self.set_bits + self.block_bits)
        return set_index, tag

    def access(self, address: int) -> Outcome:
        """Perform a cache access and report what happened.

        Lookup order: a valid line with a matching tag (hit), then the first
        invalid line (fill), then the LRU line of the full set (evict). The
        touched line always ends up most recently used.
        """

        set_index, tag = self.decode(address)
        cache_set = self.sets[set_index]

        # search for hit
        for way, line in enumerate(cache_set):
            if line.valid and line.tag == tag:
                self.policy.touch(cache_set, way)
                return Outcome.HIT

        # try to find a free way
        for way, line in enumerate(cache_set):
            if not line.valid:
                line.valid = True
                line.tag = tag
                self.policy.admit(cache_set, way)
                return Outcome.MISS_FILL

        # set is full: replace the LRU line
        way = self.policy.victim(cache_set)
        victim = cache_set[way]
        logger.debug("set %d: evicting tag %#x from way %d for tag %#x",
                     set_index, victim.tag, way, tag)
        victim.tag = tag
        self.policy.touch(cache_set, way)
        return Outcome.MISS_EVICT

    def valid_lines(self, set_index: int) -> List[Line]:
        return [line for line in self.sets[set_index] if line.valid]

    def lru_order(self, set_index: int) -> List[int]:
        """Way indices of valid lines in `set_index`, most recent first."""
        return self.policy.order(self.sets[set_index])

    def reset(self):
        """Invalidate every line.
        """

        for s in self.sets:
            for line in s:
                line.valid = False
                line.tag = 0
                line.recency = 0
