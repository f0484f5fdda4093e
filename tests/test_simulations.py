import pytest

from simulations.common import (
    ExperimentSpec,
    format_stats_line,
    radial_band_counts,
    summarize_counts,
)
from simulations.methods import METHODS, get_method
from simulations.run import run_experiment, run_pair


def test_spec_validation():
    with pytest.raises(ValueError):
        ExperimentSpec(balls=-1)
    with pytest.raises(ValueError):
        ExperimentSpec(balls=10, radius=0)
    with pytest.raises(ValueError):
        ExperimentSpec(balls=10, batches=0)


def test_batch_sizes_split_evenly():
    assert ExperimentSpec(balls=10, batches=3).batch_sizes() == [4, 3, 3]
    assert sum(ExperimentSpec(balls=1001, batches=7).batch_sizes()) == 1001


def test_radial_band_counts():
    center = (0.0, 0.0)
    points = [(0.0, 0.0), (0.5, 0.0), (0.0, 1.0)]
    # r^2 fractions 0, 0.25, 1.0 over 4 bands
    assert radial_band_counts(points, center, 1.0, 4) == [1, 1, 0, 1]


def test_summarize_counts():
    s = summarize_counts([8, 10, 12])
    assert (s.min, s.max, s.mean) == (8, 12, 10)
    assert s.max_rel_deviation == pytest.approx(0.2)
    with pytest.raises(ValueError):
        summarize_counts([])


def test_unknown_method():
    with pytest.raises(ValueError):
        get_method("buffon")


@pytest.mark.parametrize("method", sorted(METHODS))
def test_every_method_lands_every_ball(method):
    r = run_experiment(method, balls=2000, batches=3, seed=1)
    assert r.stats.total_in_circle == 2000
    assert sum(r.band_counts) == 2000
    assert r.stats.total_in_square <= r.stats.total_in_circle
    assert method in format_stats_line(r)


def test_animated_and_direct_sqrt_polar_agree():
    # Same seed, same sampler; animation must not change the statistics
    a, b = run_pair("sqrt_polar", "sqrt_polar_direct", balls=3000, seed=9)
    assert a.stats == b.stats
    assert a.meta["animated"] and not b.meta["animated"]


def test_naive_polar_is_center_biased():
    uniform, naive = run_pair("rejection", "naive_polar", balls=20_000, seed=3)
    assert uniform.band_stats.max_rel_deviation < 0.1
    # The innermost ring holds ~sqrt(0.1) of naive samples instead of 10%
    assert naive.band_counts[0] > 2.5 * uniform.band_counts[0]
    assert naive.stats.estimated_pi < uniform.stats.estimated_pi
