import random

import pytest

from cachetrace.core.cache import CacheLine, ReplacementPolicy
from cachetrace.core.replacement_policies import LRUReplacement, RandomReplacement, make_policy


def _lines(*entries):
    # None for an empty line, else (tag, counter)
    out = []
    for s in entries:
        if s is None:
            out.append(CacheLine())
        else:
            out.append(CacheLine(tag=s[0], valid=True, counter=s[1]))
    return out


def test_lru_touch_increments_then_zeroes():
    cache_set = _lines((1, 3), (2, 0), (3, 5))
    LRUReplacement().touch(cache_set, 1)
    assert [line.counter for line in cache_set] == [4, 0, 6]


def test_lru_prefers_empty_way_over_oldest():
    cache_set = _lines((1, 9), None, (3, 2), None)
    assert LRUReplacement().evict(cache_set) == 1


def test_lru_empty_way_wins_regardless_of_counter():
    cache_set = _lines((1, 0), (2, 1), None)
    cache_set[2].counter = 100
    assert LRUReplacement().evict(cache_set) == 2


def test_lru_evicts_largest_counter():
    cache_set = _lines((1, 2), (2, 7), (3, 4), (4, 0))
    assert LRUReplacement().evict(cache_set) == 1


def test_lru_tie_goes_to_lowest_way():
    cache_set = _lines((1, 1), (2, 5), (3, 5))
    assert LRUReplacement().evict(cache_set) == 1


def test_random_evict_in_range_and_ignores_counters():
    policy = RandomReplacement(random.Random(0))
    cache_set = _lines((1, 0), (2, 0), (3, 0), (4, 0))
    seen = {policy.evict(cache_set) for _ in range(200)}
    assert seen == {0, 1, 2, 3}
    policy.touch(cache_set, 2)
    assert [line.counter for line in cache_set] == [0, 0, 0, 0]


def test_random_uses_injected_generator():
    cache_set = _lines(None, None, None, None)
    a = RandomReplacement(random.Random(123))
    b = RandomReplacement(random.Random(123))
    assert [a.evict(cache_set) for _ in range(20)] == [b.evict(cache_set) for _ in range(20)]


def test_shared_generator_draws_one_stream():
    # two policies on one generator consume it in turn
    rng = random.Random(5)
    expected = random.Random(5)
    a = RandomReplacement(rng)
    b = RandomReplacement(rng)
    cache_set = _lines(None, None)
    draws = [a.evict(cache_set), b.evict(cache_set), a.evict(cache_set)]
    assert draws == [expected.randrange(2) for _ in range(3)]


def test_make_policy():
    assert isinstance(make_policy(ReplacementPolicy.LRU), LRUReplacement)
    rng = random.Random(0)
    p = make_policy(ReplacementPolicy.RANDOM, rng)
    assert isinstance(p, RandomReplacement)
    assert p.rng is rng
    assert isinstance(make_policy('LRU'), LRUReplacement)
    with pytest.raises(ValueError):
        make_policy('FIFO')
