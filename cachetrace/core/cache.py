"""Core cache implementation

This file provides the set-associative cache model replayed by the simulator.
Behavior:
- Cache holds NUM_BLOCKS lines split into `num_sets` sets of `num_ways` ways.
  The line table is flat and row-major: lines[set_index * num_ways + way].
  set_index = (address // BLOCK_SIZE) % num_sets
  tag = address // NUM_BLOCKS
- Access returns (hit:bool, set_index:int, way_index:int, evicted:Optional[CacheLine])
"""

from dataclasses import dataclass, replace
from enum import Enum
import random
from typing import List, Optional, Tuple

from cachetrace.core.address import NUM_BLOCKS, decode
from cachetrace.core.replacement_policies import make_policy


class AssociativityKind(Enum):
    DIRECT_MAPPED = ("Direct Mapped", 1)
    TWO_WAY = ("2-Way", 2)
    FOUR_WAY = ("4-Way", 4)
    FULLY_ASSOCIATIVE = ("Fully Associative", NUM_BLOCKS)

    def __init__(self, label: str, ways: int):
        self.label = label
        self.ways = ways

    @classmethod
    def from_label(cls, label: str) -> "AssociativityKind":
        for kind in cls:
            if kind.label == label or kind.name == label:
                return kind
        raise ValueError(f"unknown associativity: {label!r}")


class ReplacementPolicy(Enum):
    LRU = "LRU"
    RANDOM = "Random"

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def from_label(cls, label: str) -> "ReplacementPolicy":
        for policy in cls:
            if policy.value == label or policy.name == label:
                return policy
        raise ValueError(f"unknown replacement policy: {label!r}")


@dataclass
class CacheLine:
    """container for one cache line (way).

    Fields:
    - tag: the tag stored in the line, meaningless while invalid
    - valid: whether the line currently holds a block
    - counter: accesses to the set since this line was last used (LRU only)
    """

    tag: int = 0
    valid: bool = False
    counter: int = 0


def geometry_for(kind: AssociativityKind, num_blocks: int = NUM_BLOCKS) -> Tuple[int, int]:
    """Return (num_sets, num_ways) for `kind` with `num_blocks` lines in total."""
    num_ways = num_blocks if kind is AssociativityKind.FULLY_ASSOCIATIVE else kind.ways
    num_sets = num_blocks // num_ways if num_ways else 0
    if num_sets * num_ways == 0:
        raise ValueError(f"empty cache geometry for {kind.label}: {num_sets} sets x {num_ways} ways")
    if num_sets * num_ways != num_blocks:
        raise ValueError(f"{kind.label} does not divide {num_blocks} blocks evenly")
    return num_sets, num_ways


class Cache:
    """Set-associative cache with a fixed number of lines."""

    def __init__(
        self,
        kind=AssociativityKind.DIRECT_MAPPED,
        replacement=ReplacementPolicy.LRU,
        rng: Optional[random.Random] = None,
    ):
        if isinstance(kind, str):
            kind = AssociativityKind.from_label(kind)
        if isinstance(replacement, str):
            replacement = ReplacementPolicy.from_label(replacement)
        self.kind = kind
        self.replacement = replacement
        self.num_sets, self.num_ways = geometry_for(kind)
        self.policy = make_policy(replacement, rng)
        self.lines: List[CacheLine] = [CacheLine() for _ in range(self.num_sets * self.num_ways)]

    @property
    def num_blocks(self) -> int:
        return self.num_sets * self.num_ways

    @property
    def label(self) -> str:
        return f"{self.kind.label} / {self.replacement.label}"

    def line_index(self, set_index: int, way: int) -> int:
        if not 0 <= set_index < self.num_sets:
            raise IndexError(f"set {set_index} out of range [0, {self.num_sets - 1}]")
        if not 0 <= way < self.num_ways:
            raise IndexError(f"way {way} out of range [0, {self.num_ways - 1}]")
        return set_index * self.num_ways + way

    def line(self, set_index: int, way: int) -> CacheLine:
        return self.lines[self.line_index(set_index, way)]

    def set_lines(self, set_index: int) -> List[CacheLine]:
        """Return the lines of one set, indexed by way (same objects as the table)."""
        start = self.line_index(set_index, 0)
        return self.lines[start:start + self.num_ways]

    @property
    def sets(self) -> List[List[CacheLine]]:
        return [self.set_lines(s) for s in range(self.num_sets)]

    def contains(self, address: int) -> bool:
        """Check residency without touching replacement state."""
        set_index, tag = decode(address, self.num_sets)
        return any(line.valid and line.tag == tag for line in self.set_lines(set_index))

    def access(self, address: int):
        """Perform a cache access.

        Returns a tuple:
        (hit: bool, set_index: int, way_index: int, evicted: Optional[CacheLine])

        - hit: whether the block was resident
        - way_index: the way that was hit or filled
        - evicted: copy of the overwritten line if a valid block was replaced
        """

        set_index, tag = decode(address, self.num_sets)
        cache_set = self.set_lines(set_index)

        # search for hit
        for wi, line in enumerate(cache_set):
            if line.valid and line.tag == tag:
                self.policy.touch(cache_set, wi)
                return True, set_index, wi, None

        # miss: ask policy for a victim and install the block there
        victim_index = self.policy.evict(cache_set)
        victim = cache_set[victim_index]
        evicted = replace(victim) if victim.valid else None
        victim.tag = tag
        victim.valid = True
        self.policy.touch(cache_set, victim_index)
        return False, set_index, victim_index, evicted

    def reset(self):
        """Clear cache contents; lines go back to invalid with zeroed counters."""

        for line in self.lines:
            line.tag = 0
            line.valid = False
            line.counter = 0

    def __repr__(self):
        return f"Cache({self.label}, sets={self.num_sets}, ways={self.num_ways})"
