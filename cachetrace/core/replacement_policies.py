"""Replacement policies for the set-associative cache model.

Both policies share a small API so the cache can call them interchangeably:

- touch(cache_set, way): a hit or fill touched `way` of the set
- evict(cache_set): choose the way to overwrite on a miss

`cache_set` is the list of CacheLine objects for one set, indexed by way.
Policies never change tags or valid bits; that is the cache's job.
"""

import random
from typing import List, Optional


class LRUReplacement:
    """Least-Recently-Used replacement using per-line recency counters.

    Every access to a set ages all of its lines by one and then resets the
    touched line to 0, so the counter of a resident line is the number of
    accesses to that set since it was last used.
    """

    def touch(self, cache_set: List, way: int) -> None:
        # increment first, then zero; the other order would age the touched line
        for line in cache_set:
            line.counter += 1
        cache_set[way].counter = 0

    def evict(self, cache_set: List) -> int:
        """Return the first empty way, else the way with the largest counter."""
        victim = 0
        max_counter = -1
        for way, line in enumerate(cache_set):
            if not line.valid:
                return way
            if line.counter > max_counter:
                max_counter = line.counter
                victim = way
        return victim


class RandomReplacement:
    """Random replacement picks a uniformly random way on every miss.

    Empty ways get no preference. The generator is owned by the simulation
    run and may be shared between several caches.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def touch(self, cache_set: List, way: int) -> None:
        return None

    def evict(self, cache_set: List) -> int:
        return self.rng.randrange(len(cache_set))


def make_policy(replacement, rng: Optional[random.Random] = None):
    """Build the policy object for a ReplacementPolicy member or its label."""
    name = getattr(replacement, "label", replacement)
    if name == "LRU":
        return LRUReplacement()
    if name == "Random":
        return RandomReplacement(rng)
    raise ValueError(f"unknown replacement policy: {replacement!r}")


__all__ = ["LRUReplacement", "RandomReplacement", "make_policy"]
