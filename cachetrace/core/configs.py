"""Cache configurations replayed side by side.

The default set is the cross product of every associativity kind with
every replacement policy, in report order (kind major, policy minor).
"""
from dataclasses import dataclass
from itertools import product
import random
from typing import Iterable, List, Optional

from .cache import AssociativityKind, Cache, ReplacementPolicy, geometry_for


@dataclass(frozen=True)
class CacheConfig:
    kind: AssociativityKind
    replacement: ReplacementPolicy

    @property
    def label(self) -> str:
        return f"{self.kind.label} / {self.replacement.label}"

    def build(self, rng: Optional[random.Random] = None) -> Cache:
        return Cache(self.kind, self.replacement, rng=rng)


def default_configurations() -> List[CacheConfig]:
    return [CacheConfig(kind, policy) for kind, policy in product(AssociativityKind, ReplacementPolicy)]


def build_caches(configs: Iterable[CacheConfig], rng: Optional[random.Random] = None) -> List[Cache]:
    """Create one independent cache per config.

    Geometry is checked for every config before any cache is built, so a bad
    configuration list fails as a whole.
    """
    configs = list(configs)
    for cfg in configs:
        geometry_for(cfg.kind)
    return [cfg.build(rng) for cfg in configs]
