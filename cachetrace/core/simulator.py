"""CacheSimulator coordinates cache accesses and statistics.
Feeds every address into each configured Cache and keeps one Statistics per cache.
"""
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional

from .cache import Cache
from ..data.stats_export import Statistics


@dataclass
class ConfigResult:
    kind: str
    policy: str
    hits: int
    accesses: int

    @property
    def label(self) -> str:
        return f"{self.kind} / {self.policy}"

    @property
    def misses(self) -> int:
        return self.accesses - self.hits

    @property
    def hit_rate(self) -> float:
        return (self.hits / self.accesses) if self.accesses else 0.0


class CacheSimulator:
    def __init__(self, caches: List[Cache], stats: Optional[List[Statistics]] = None):
        self.caches = list(caches)
        if stats is None:
            stats = [Statistics() for _ in self.caches]
        if len(stats) != len(self.caches):
            raise ValueError("need exactly one Statistics per cache")
        self.stats = stats
        self.accesses = 0

    def reset(self):
        # clear stats and cache contents
        for s in self.stats:
            s.reset()
        for c in self.caches:
            c.reset()
        self.accesses = 0

    def step(self, address: int) -> dict:
        # the same address goes to every cache before the next one is read
        hits = []
        for cache, stats in zip(self.caches, self.stats):
            hit = cache.access(address)[0]
            stats.record_access(hit)
            hits.append(hit)
        self.accesses += 1
        return {
            'address': address,
            'index': self.accesses - 1,
            'hits': hits,
        }

    def run_all(self, addresses: Iterable[int], callback: Optional[Callable[[dict], None]] = None):
        # addresses may be a one-shot generator; it is consumed exactly once
        for address in addresses:
            info = self.step(address)
            if callback:
                callback(info)
        return self.results()

    def results(self) -> List[ConfigResult]:
        return [
            ConfigResult(c.kind.label, c.replacement.label, s.hits, s.accesses)
            for c, s in zip(self.caches, self.stats)
        ]
