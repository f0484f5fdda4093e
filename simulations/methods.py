# simulations/methods.py

from __future__ import annotations

import math
import random
from typing import Callable, Dict, List

from .common import ExperimentSpec, ExperimentResult, Timer, radial_band_counts

from pi_drop.convergence_tracker import ConvergenceTracker
from pi_drop.sampler import Point, Sample, SampleStatus, in_inscribed_square, sample_id, sample_point
from pi_drop.simulation import Simulation


PointFn = Callable[[Point, float, random.Random], Point]
SimFn = Callable[[ExperimentSpec, int], ExperimentResult]


# --- Alternative disc samplers -----------------------------------------------

def naive_polar_point(center: Point, radius: float, rng: random.Random) -> Point:
    """
    Uniform angle and uniform radius. Stays inside the disc but the density
    falls off as 1/r, so the inner rings (and the square) are oversampled.
    """
    theta = rng.random() * 2 * math.pi
    r = radius * rng.random()
    cx, cy = center
    return (cx + r * math.cos(theta), cy + r * math.sin(theta))


def rejection_point(center: Point, radius: float, rng: random.Random) -> Point:
    """
    Uniform in the bounding square of the disc, redrawn until inside.
    Area-uniform; needs 4/pi draws per point on average.
    """
    cx, cy = center
    while True:
        dx = (2 * rng.random() - 1) * radius
        dy = (2 * rng.random() - 1) * radius
        if dx * dx + dy * dy <= radius * radius:
            return (cx + dx, cy + dy)


def _simulate_points(method: str, spec: ExperimentSpec, seed: int, point_fn: PointFn) -> ExperimentResult:
    """
    Drop balls straight onto the disc (no animation). The tracker only
    reacts to landings, so skipping the fall gives the same statistics.
    """
    rng = random.Random(seed)
    tracker = ConvergenceTracker(cadence=spec.history_cadence)
    points: List[Point] = []

    with Timer() as t:
        for _ in range(spec.balls):
            x, y = point_fn(spec.center, spec.radius, rng)
            points.append((x, y))
            tracker.record_landing(Sample(
                x=x,
                y=y,
                in_square=in_inscribed_square(x, y, spec.center, spec.radius),
                progress=1.0,
                status=SampleStatus.LANDED,
                id=sample_id(rng),
            ))

    return ExperimentResult(
        method=method,
        spec=spec,
        stats=tracker.snapshot(),
        history=tracker.history(),
        band_counts=radial_band_counts(points, spec.center, spec.radius, spec.bands),
        runtime_s=t.elapsed_s,
        meta={"animated": False},
    )


# --- Simulations --------------------------------------------------------------

def simulate_sqrt_polar(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    """
    The production path: batches dropped into a Simulation and animated
    until every ball has landed.
    """
    sim = Simulation(
        width=2 * spec.radius,
        height=2 * spec.radius,
        radius=spec.radius,
        history_cadence=spec.history_cadence,
        seed=seed,
    )
    ticks = 0

    with Timer() as t:
        for size in spec.batch_sizes():
            sim.drop(size)
            ticks += sim.run_until_landed()

    points = [(s.x, s.y) for s in sim.samples]
    return ExperimentResult(
        method="sqrt_polar",
        spec=spec,
        stats=sim.stats,
        history=sim.history,
        band_counts=radial_band_counts(points, spec.center, spec.radius, spec.bands),
        runtime_s=t.elapsed_s,
        meta={"animated": True, "ticks": ticks},
    )


def simulate_naive_polar(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    return _simulate_points("naive_polar", spec, seed, naive_polar_point)


def simulate_rejection(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    return _simulate_points("rejection", spec, seed, rejection_point)


def simulate_sqrt_polar_direct(spec: ExperimentSpec, seed: int) -> ExperimentResult:
    """Same sampler as sqrt_polar, without the animation loop."""
    return _simulate_points("sqrt_polar_direct", spec, seed, sample_point)


# --- Registry / dispatch -----------------------------------------------------

def get_method(name: str) -> SimFn:
    name = name.strip().lower()
    if name not in METHODS:
        raise ValueError(f"unknown method '{name}'. Available: {sorted(METHODS.keys())}")
    return METHODS[name]


METHODS: Dict[str, SimFn] = {
    "sqrt_polar": simulate_sqrt_polar,
    "sqrt_polar_direct": simulate_sqrt_polar_direct,
    "naive_polar": simulate_naive_polar,
    "rejection": simulate_rejection,
}
