import math

import pytest

from pi_drop.convergence_tracker import SimulationStats
from pi_drop.sampler import SampleStatus
from pi_drop.simulation import Simulation


def test_defaults_match_canvas():
    sim = Simulation()
    assert sim.center == (300, 300)
    assert sim.radius == pytest.approx(240)


def test_drop_one_then_land():
    sim = Simulation(seed=1)
    sim.drop(1)
    (s,) = sim.samples
    assert s.status is SampleStatus.FALLING
    assert s.progress == 0.0
    assert sim.stats.total_in_circle == 0

    sim.run_until_landed()
    (s,) = sim.samples
    assert s.status is SampleStatus.LANDED
    assert s.progress == 1.0
    assert sim.stats.total_in_circle == 1


def test_stats_only_change_on_landing():
    sim = Simulation(seed=2, increment=0.5)
    sim.drop(10)
    assert sim.tick() == []
    assert sim.stats.total_in_circle == 0
    assert len(sim.tick()) == 10
    assert sim.stats.total_in_circle == 10


def test_two_batches_sum():
    sim = Simulation(seed=3)
    sim.drop(500)
    sim.tick()
    sim.drop(500)
    sim.run_until_landed()
    assert sim.falling_count == 0
    assert sim.stats.total_in_circle == 1000


def test_square_never_exceeds_circle_while_ticking():
    sim = Simulation(seed=4)
    for n in (1, 100, 0, 500):
        sim.drop(n)
        for _ in range(3):
            sim.tick()
            s = sim.stats
            assert s.total_in_square <= s.total_in_circle
    sim.run_until_landed()
    s = sim.stats
    assert s.total_in_circle == 601
    assert s.total_in_square <= s.total_in_circle


def test_drop_zero_is_noop():
    sim = Simulation()
    assert sim.drop(0) == []
    assert sim.samples == []


@pytest.mark.parametrize("count", [-1, 2.5, "3", True])
def test_invalid_drop_leaves_state_untouched(count):
    sim = Simulation(seed=5)
    sim.drop(3)
    before = [s.id for s in sim.samples]
    with pytest.raises(ValueError):
        sim.drop(count)
    assert [s.id for s in sim.samples] == before


def test_reset_returns_to_zero_state():
    sim = Simulation(seed=6)
    sim.drop(100)
    sim.run_until_landed()
    sim.drop(50)
    sim.tick()
    sim.reset()
    assert sim.samples == []
    assert sim.stats == SimulationStats()
    assert sim.history == []
    assert sim.falling_count == 0


def test_history_is_deduplicated_and_bounded():
    sim = Simulation(seed=7)
    for _ in range(30):
        sim.drop(100)
        sim.run_until_landed()
    indices = [p.index for p in sim.history]
    assert len(indices) == 100
    assert indices == sorted(set(indices))
    assert indices[-1] == 3000


def test_large_run_converges_to_pi():
    sim = Simulation(seed=8)
    sim.drop(100_000)
    sim.run_until_landed()
    stats = sim.stats
    assert stats.total_in_circle == 100_000
    assert stats.error < 0.02
    assert stats.estimated_pi == pytest.approx(math.pi, rel=0.02)


@pytest.mark.parametrize("kwargs", [{"radius": 0}, {"width": 0}, {"increment": 0}])
def test_invalid_configuration_rejected(kwargs):
    with pytest.raises(ValueError):
        Simulation(**kwargs)


def test_tick_counts_every_landing_even_with_equal_ids():
    sim = Simulation(seed=9, increment=0.5)
    sim.drop(50)
    for s in sim.samples:
        s.id = "same"
    sim.run_until_landed()
    assert sim.stats.total_in_circle == 50


def test_seeded_runs_are_reproducible():
    def run():
        sim = Simulation(seed=10)
        sim.drop(300)
        sim.tick()
        sim.drop(200)
        sim.run_until_landed()
        return [s.id for s in sim.samples], [(s.x, s.y) for s in sim.samples], sim.stats, sim.history

    assert run() == run()
