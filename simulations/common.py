# simulations/common.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import math
import time

from pi_drop.convergence_tracker import HistoryPoint, SimulationStats
from pi_drop.sampler import Point


@dataclass(frozen=True)
class ExperimentSpec:
    """
    Common experiment parameters shared across all simulations.
    """
    balls: int
    radius: float = 240.0
    batches: int = 1  # balls are dropped in this many equal-ish batches
    bands: int = 10   # equal-area radial bands used to check uniformity

    def __post_init__(self) -> None:
        if self.balls < 0:
            raise ValueError("balls must be >= 0")
        if self.radius <= 0:
            raise ValueError("radius must be > 0")
        if self.batches <= 0:
            raise ValueError("batches must be > 0")
        if self.bands <= 0:
            raise ValueError("bands must be > 0")

    @property
    def center(self) -> Point:
        return (self.radius, self.radius)

    @property
    def history_cadence(self) -> int:
        # ~100 history points regardless of run length
        return max(1, self.balls // 100)

    def batch_sizes(self) -> List[int]:
        base, extra = divmod(self.balls, self.batches)
        return [base + (1 if i < extra else 0) for i in range(self.batches)]


@dataclass(frozen=True)
class SummaryStats:
    """
    Basic summary stats for per-band counts.
    """
    min: int
    max: int
    mean: float
    std: float  # population stddev

    @property
    def max_rel_deviation(self) -> float:
        """Largest |count - mean| / mean over the bands (0 when empty)."""
        if self.mean == 0:
            return 0.0
        return max(self.max - self.mean, self.mean - self.min) / self.mean


def summarize_counts(counts: List[int]) -> SummaryStats:
    """
    Compute min/max/mean/std over integer counts (population stddev).
    """
    if not counts:
        raise ValueError("counts must be non-empty")

    n = len(counts)
    mean = sum(counts) / n
    var = sum((c - mean) ** 2 for c in counts) / n

    return SummaryStats(min=min(counts), max=max(counts), mean=mean, std=math.sqrt(var))


def radial_band_counts(points: Sequence[Point], center: Point, radius: float, bands: int) -> List[int]:
    """
    Count points per equal-area ring of the disc.

    Ring k spans radii R*sqrt(k/bands) .. R*sqrt((k+1)/bands), so every ring
    has area pi*R^2/bands. An area-uniform sampler fills them evenly; a
    center-biased one overfills the inner rings.
    """
    if bands <= 0:
        raise ValueError("bands must be > 0")

    cx, cy = center
    counts = [0] * bands
    for x, y in points:
        frac = ((x - cx) ** 2 + (y - cy) ** 2) / (radius * radius)
        k = min(int(frac * bands), bands - 1)
        counts[k] += 1
    return counts


@dataclass
class ExperimentResult:
    """
    Common return type for all simulations.
    """
    method: str
    spec: ExperimentSpec
    stats: SimulationStats
    history: List[HistoryPoint]
    band_counts: List[int]

    band_stats: SummaryStats = field(init=False)
    runtime_s: Optional[float] = None
    meta: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.band_stats = summarize_counts(self.band_counts)

        # Sanity: every ball must have landed and been binned
        expected = self.spec.balls
        if self.stats.total_in_circle != expected:
            raise ValueError(
                f"landed count mismatch: expected {expected}, got {self.stats.total_in_circle}"
            )
        binned = sum(self.band_counts)
        if binned != expected:
            raise ValueError(
                f"band counts sum mismatch: expected {expected}, got {binned}"
            )


class Timer:
    """
    Tiny timing helper for simulations.
    Usage:
        with Timer() as t:
            ...
        elapsed = t.elapsed_s
    """
    def __init__(self) -> None:
        self._start: Optional[float] = None
        self.elapsed_s: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._start is not None:
            self.elapsed_s = time.perf_counter() - self._start


def common_y_range(results: List[ExperimentResult]) -> Tuple[int, int]:
    """
    Shared (0, ymax) across band-count plots so bars compare directly.
    """
    if not results:
        raise ValueError("results must be non-empty")
    return 0, max(r.band_stats.max for r in results)


def format_stats_line(r: ExperimentResult) -> str:
    """
    Human-friendly one-liner for printing in compare tools.
    """
    s = r.stats
    return (
        f"{r.method}: pi~{s.estimated_pi:.6f}, error={s.error * 100:.4f}%, "
        f"square={s.total_in_square}/{s.total_in_circle}, "
        f"band_dev={r.band_stats.max_rel_deviation * 100:.2f}%"
        + (f", runtime={r.runtime_s:.3f}s" if r.runtime_s is not None else "")
    )
