import math
import random
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple


Point = Tuple[float, float]

SQUARE_COLOR = "#f472b6"
CIRCLE_COLOR = "#38bdf8"


class SampleStatus(str, Enum):
    FALLING = "falling"
    LANDED = "landed"


@dataclass
class Sample:
    """
    One dropped ball.

    The landing coordinates and the square membership are fixed at creation.
    Only `progress` and `status` change afterwards, and only through the
    animator:

        falling --(progress reaches 1)--> landed

    There is no way back from `landed`.
    """
    x: float
    y: float
    in_square: bool
    progress: float = 0.0
    status: SampleStatus = SampleStatus.FALLING
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def landed(self) -> bool:
        return self.status is SampleStatus.LANDED

    @property
    def color(self) -> str:
        return SQUARE_COLOR if self.in_square else CIRCLE_COLOR


# ------------------------------------------------------------
# Geometry
# ------------------------------------------------------------

def _check_radius(radius: float) -> None:
    if radius <= 0:
        raise ValueError("radius must be > 0")


def square_half_side(radius: float) -> float:
    """
    Half the side of the square inscribed in a circle of this radius.
    The square's diagonal is the circle's diameter, so side = R * sqrt(2).
    """
    return radius * math.sqrt(2) / 2


def sample_point(
    center: Point,
    radius: float,
    rng: Optional[random.Random] = None,
) -> Point:
    """
    Draw one point uniformly over the AREA of the disc.

    Drawing the radius uniformly would pile points up near the center
    (the area of a ring grows with its radius). Taking r = R * sqrt(u)
    makes P(r <= s) = (s / R)^2, which is exactly the area fraction.
    """
    _check_radius(radius)
    rng = rng or random

    theta = rng.random() * 2 * math.pi
    r = radius * math.sqrt(rng.random())
    cx, cy = center
    return (cx + r * math.cos(theta), cy + r * math.sin(theta))


def in_inscribed_square(x: float, y: float, center: Point, radius: float) -> bool:
    """
    Axis-aligned bounding-box test against the inscribed square.
    Points on the boundary count as inside.
    """
    _check_radius(radius)
    half = square_half_side(radius)
    cx, cy = center
    return (cx - half <= x <= cx + half) and (cy - half <= y <= cy + half)


# ------------------------------------------------------------
# Sample creation
# ------------------------------------------------------------

def sample_id(rng: Optional[random.Random] = None) -> str:
    """
    Opaque 128-bit token drawn from `rng`, so seeded runs repeat their ids.
    Counting never relies on ids being unique.
    """
    rng = rng or random
    return uuid.UUID(int=rng.getrandbits(128), version=4).hex


def new_sample(
    center: Point,
    radius: float,
    rng: Optional[random.Random] = None,
) -> Sample:
    x, y = sample_point(center, radius, rng)
    return Sample(
        x=x,
        y=y,
        in_square=in_inscribed_square(x, y, center, radius),
        id=sample_id(rng),
    )


def generate_batch(
    count: int,
    center: Point,
    radius: float,
    rng: Optional[random.Random] = None,
) -> List[Sample]:
    """
    Draw `count` independent samples, in creation order.

    count == 0 is a valid no-op. Arguments are validated before anything is
    drawn so a bad call never yields a partial batch.
    """
    if count < 0:
        raise ValueError("count must be >= 0")
    _check_radius(radius)

    return [new_sample(center, radius, rng) for _ in range(count)]
