import pytest

from cachetrace.core.cache import AssociativityKind, ReplacementPolicy
from cachetrace.core.configs import CacheConfig, build_caches, default_configurations
from cachetrace.core.simulator import CacheSimulator
from cachetrace.simulation import SCENARIOS, Simulation


def test_default_configurations_order():
    labels = [c.label for c in default_configurations()]
    assert labels == [
        'Direct Mapped / LRU', 'Direct Mapped / Random',
        '2-Way / LRU', '2-Way / Random',
        '4-Way / LRU', '4-Way / Random',
        'Fully Associative / LRU', 'Fully Associative / Random',
    ]


def test_configs_are_independent_instances():
    sim = Simulation(seed=0)
    assert len(sim.caches) == 8
    assert len({id(c) for c in sim.caches}) == 8
    assert len({id(c.lines[0]) for c in sim.caches}) == 8


def test_simulator_counts_per_cache():
    caches = build_caches([CacheConfig(AssociativityKind.DIRECT_MAPPED, ReplacementPolicy.LRU),
                           CacheConfig(AssociativityKind.FULLY_ASSOCIATIVE, ReplacementPolicy.LRU)])
    sim = CacheSimulator(caches)
    # 0 and 32 collide in the direct-mapped set 0 but both fit fully associative
    results = sim.run_all(iter([0, 32, 0, 32]))
    assert [r.hits for r in results] == [0, 2]
    assert all(r.accesses == 4 for r in results)
    assert results[1].hit_rate == pytest.approx(0.5)
    assert results[0].misses == 4


def test_step_reports_every_cache():
    sim = CacheSimulator(build_caches(default_configurations()[:2]))
    info = sim.step(0)
    assert info['address'] == 0
    assert info['hits'] == [False, False]
    info = sim.step(0)
    assert info['index'] == 1
    assert info['hits'] == [True, True]


def test_callback_and_reset():
    sim = CacheSimulator(build_caches(default_configurations()[:1]))
    seen = []
    sim.run_all([0, 4, 0], callback=seen.append)
    assert [s['address'] for s in seen] == [0, 4, 0]
    assert sim.results()[0].hits == 1
    sim.reset()
    assert sim.results()[0].accesses == 0
    assert sim.caches[0].contains(0) is False


def test_stats_length_must_match():
    with pytest.raises(ValueError):
        CacheSimulator(build_caches(default_configurations()[:2]), stats=[])


def test_empty_trace_reports_zero():
    results = Simulation(seed=1).run([])
    assert len(results) == 8
    for r in results:
        assert r.accesses == 0
        assert r.hits == 0
        assert r.hit_rate == 0.0


def test_trace_file_run(trace_file):
    path = trace_file("0 4\n0x0\n")
    results = Simulation(seed=1).run_trace_file(path)
    assert results[0].kind == 'Direct Mapped'
    assert results[0].hits == 1
    assert all(r.accesses == 3 for r in results)


def test_missing_trace_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Simulation().run_trace_file(str(tmp_path / 'nope.txt'))


def test_same_seed_same_results():
    a = Simulation(seed=4).run_scenario('Random Access', num_passes=3)
    b = Simulation(seed=4).run_scenario('Random Access', num_passes=3)
    assert [r.hits for r in a] == [r.hits for r in b]


@pytest.mark.parametrize('name', SCENARIOS)
def test_builtin_scenarios_produce_results(name):
    results = Simulation(seed=0).run_scenario(name, num_passes=2)
    assert len(results) == 8
    assert results[0].accesses > 0
    assert len({r.accesses for r in results}) == 1


def test_unknown_scenario():
    with pytest.raises(ValueError):
        Simulation().run_scenario('Linked List Chase')


def test_repeated_runs_start_cold():
    sim = Simulation(seed=2)
    first = sim.run([0, 4, 0])
    second = sim.run([0, 4, 0])
    assert [r.accesses for r in second] == [3] * 8
    assert [r.hits for r in first] == [r.hits for r in second]


def test_interleave_scenario_alternates_code_and_data():
    seq = Simulation()._generate_sequence_for_scenario('Instruction/Data Interleave')
    assert len(seq) == 64
    assert seq[:6] == [0, 100, 1, 101, 2, 102]
    assert seq[-2:] == [31, 107]
