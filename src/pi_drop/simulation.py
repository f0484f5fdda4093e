import logging
import math
import random
from typing import List, Optional

from .animator import DEFAULT_INCREMENT, DEFAULT_START_Y, advance
from .convergence_tracker import (
    DEFAULT_CADENCE,
    DEFAULT_MAX_POINTS,
    ConvergenceTracker,
    HistoryPoint,
    SimulationStats,
)
from .sampler import Point, Sample, SampleStatus, generate_batch, square_half_side

logger = logging.getLogger(__name__)


CANVAS_WIDTH = 600
CANVAS_HEIGHT = 600


class Simulation:
    """
    The whole mutable state of a run, owned by a single update loop.

    User actions (`drop`, `reset`) and the periodic `tick` are the only
    mutators. They are expected to be called from one thread, one at a time.

    Usage:
        sim = Simulation()
        sim.drop(100)
        while sim.falling_count:
            sim.tick()
        print(sim.stats.estimated_pi)
    """

    def __init__(
        self,
        width: float = CANVAS_WIDTH,
        height: float = CANVAS_HEIGHT,
        radius: Optional[float] = None,
        increment: float = DEFAULT_INCREMENT,
        start_y: float = DEFAULT_START_Y,
        history_cadence: int = DEFAULT_CADENCE,
        history_size: int = DEFAULT_MAX_POINTS,
        seed: Optional[int] = None,
    ):
        if width <= 0 or height <= 0:
            raise ValueError("width and height must be > 0")
        if radius is None:
            radius = min(width, height) * 0.4
        if radius <= 0:
            raise ValueError("radius must be > 0")
        if not 0 < increment <= 1:
            raise ValueError("increment must be in (0, 1]")

        self.width = width
        self.height = height
        self.center: Point = (width / 2, height / 2)
        self.radius = float(radius)
        self.increment = increment
        self.start_y = start_y

        self._rng = random.Random(seed)
        self._samples: List[Sample] = []
        self._tracker = ConvergenceTracker(cadence=history_cadence, max_points=history_size)

    # ------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------

    def drop(self, count: int) -> List[Sample]:
        """
        Append `count` new falling balls. 0 is a no-op; negative or
        non-integer counts are rejected before anything changes.
        """
        if isinstance(count, bool) or not isinstance(count, int):
            raise ValueError(f"count must be an int, got {count!r}")
        if count < 0:
            raise ValueError("count must be >= 0")

        batch = generate_batch(count, self.center, self.radius, self._rng)
        self._samples.extend(batch)
        if batch:
            logger.info("Dropped %d balls (%d in flight).", count, self.falling_count)
        return batch

    def tick(self) -> List[Sample]:
        """Advance the animation one step and count whatever landed."""
        landed = advance(self._samples, self.increment)
        for s in landed:
            self._tracker.record_landing(s)
        if landed:
            logger.debug(
                "%d balls landed; total=%d, pi~%.6f",
                len(landed), self._tracker.total_in_circle, self._tracker.estimated_pi,
            )
        return landed

    def run_until_landed(self, max_ticks: Optional[int] = None) -> int:
        """
        Tick until nothing is falling. Returns the number of ticks taken.
        Every ball lands within ceil(1 / increment) ticks of being dropped;
        one extra tick absorbs floating-point drift in the progress sum.
        """
        limit = max_ticks if max_ticks is not None else math.ceil(1 / self.increment) + 1
        ticks = 0
        while self.falling_count and ticks < limit:
            self.tick()
            ticks += 1
        return ticks

    def reset(self) -> None:
        """Discard every ball, in flight or not, along with stats and history."""
        self._samples = []
        self._tracker.reset()
        logger.info("Simulation reset.")

    # ------------------------------------------------------------
    # Introspection (read-only)
    # ------------------------------------------------------------

    @property
    def samples(self) -> List[Sample]:
        return list(self._samples)

    @property
    def falling_count(self) -> int:
        return sum(1 for s in self._samples if s.status is SampleStatus.FALLING)

    @property
    def stats(self) -> SimulationStats:
        return self._tracker.snapshot()

    @property
    def history(self) -> List[HistoryPoint]:
        return self._tracker.history()

    @property
    def square_half_side(self) -> float:
        return square_half_side(self.radius)
