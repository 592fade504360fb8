"""Ranked LRU replacement.

Each line of a set carries a `recency` rank: 0 is the most recently used
line and E-1 the least recently used one once the set is full. The policy
works directly on the list of lines of a set, so it keeps no state of its own
and one instance can serve every set of the cache.

API (methods):
- touch(lines, way): move `lines[way]` to the front of the recency order
- victim(lines): index of the line to evict from a full set
- order(lines): valid way indices from MRU to LRU (for verbose output/tests)
"""
from typing import List, Sequence


class LRUReplacement:
    """Least-Recently-Used replacement using explicit per-line ranks.

    Ranks double as positions in an LRU stack. Touching a line bumps every
    valid line that was younger than it by one and puts it at rank 0; lines
    older than it keep their rank.
    """

    def __init__(self, associativity: int):
        self.associativity = int(associativity)

    def touch(self, lines: Sequence, way: int) -> None:
        touched = lines[way]
        previous = touched.recency
        for i, line in enumerate(lines):
            if i != way and line.valid and line.recency < previous:
                line.recency += 1
        touched.recency = 0

    def admit(self, lines: Sequence, way: int) -> None:
        """Rank a freshly filled line as older than every valid line, then touch it."""
        lines[way].recency = self.associativity
        self.touch(lines, way)

    def victim(self, lines: Sequence) -> int:
        # highest rank wins, scanning from way 0 so the lowest index breaks ties
        victim_index = 0
        for i, line in enumerate(lines):
            if line.valid and line.recency > lines[victim_index].recency:
                victim_index = i
        return victim_index

    def order(self, lines: Sequence) -> List[int]:
        valid = [i for i, line in enumerate(lines) if line.valid]
        return sorted(valid, key=lambda i: (lines[i].recency, i))


__all__ = ["LRUReplacement"]
