# simulations/run.py

from __future__ import annotations

from .common import ExperimentSpec, ExperimentResult
from .methods import get_method


def run_experiment(
    method: str,
    balls: int,
    radius: float = 240.0,
    batches: int = 1,
    bands: int = 10,
    seed: int = 42,
) -> ExperimentResult:
    """
    Run a single simulation and return an ExperimentResult.

    Parameters
    ----------
    method:
        Name of the disc sampler (e.g., 'sqrt_polar', 'naive_polar', 'rejection').
    balls:
        Total number of balls dropped.
    radius:
        Circle radius.
    batches:
        Number of drop actions the balls are split across.
    bands:
        Number of equal-area radial bands for the uniformity check.
    seed:
        RNG seed.
    """
    spec = ExperimentSpec(balls=balls, radius=radius, batches=batches, bands=bands)
    fn = get_method(method)
    return fn(spec, seed)


def run_pair(
    method_a: str,
    method_b: str,
    balls: int,
    radius: float = 240.0,
    batches: int = 1,
    bands: int = 10,
    seed: int = 42,
):
    """
    Convenience helper: run two methods with the same parameters and seed.

    Returns (result_a, result_b).
    """
    ra = run_experiment(method_a, balls, radius=radius, batches=batches, bands=bands, seed=seed)
    rb = run_experiment(method_b, balls, radius=radius, batches=batches, bands=bands, seed=seed)
    return ra, rb
