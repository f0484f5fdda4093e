from typing import Iterable, List

from .sampler import Point, Sample, SampleStatus


DEFAULT_INCREMENT = 0.08
# Balls start just above the top edge of the canvas (y grows downwards).
DEFAULT_START_Y = -20.0


def advance(samples: Iterable[Sample], increment: float = DEFAULT_INCREMENT) -> List[Sample]:
    """
    Move every falling sample forward by one tick.

    Progress is clamped to 1, and a sample reaching 1 flips to landed in the
    same step. Landed samples are left alone. Returns the samples that
    landed during this tick, in collection order.
    """
    if not 0 < increment <= 1:
        raise ValueError("increment must be in (0, 1]")

    landed: List[Sample] = []
    for s in samples:
        if s.status is not SampleStatus.FALLING:
            continue
        nxt = s.progress + increment
        if nxt >= 1.0:
            s.progress = 1.0
            s.status = SampleStatus.LANDED
            landed.append(s)
        else:
            s.progress = nxt
    return landed


def visual_position(sample: Sample, start_y: float = DEFAULT_START_Y) -> Point:
    """Where to draw the sample right now."""
    if sample.landed:
        return (sample.x, sample.y)
    return (sample.x, start_y + (sample.y - start_y) * sample.progress)
