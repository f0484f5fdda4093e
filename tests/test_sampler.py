import math
import random

import pytest

from pi_drop.sampler import (
    CIRCLE_COLOR,
    SQUARE_COLOR,
    Sample,
    SampleStatus,
    generate_batch,
    in_inscribed_square,
    new_sample,
    sample_point,
    square_half_side,
)


@pytest.mark.parametrize("radius", [0.5, 1.0, 37.0, 300.0])
def test_points_stay_inside_disc(radius):
    rng = random.Random(1)
    center = (10.0, -4.0)
    for _ in range(5000):
        x, y = sample_point(center, radius, rng)
        assert math.hypot(x - center[0], y - center[1]) <= radius + 1e-9


def test_sampling_is_area_uniform():
    rng = random.Random(7)
    radius = 1.0
    bands = 10
    n = 200_000
    counts = [0] * bands
    for _ in range(n):
        x, y = sample_point((0.0, 0.0), radius, rng)
        k = min(int((x * x + y * y) * bands), bands - 1)
        counts[k] += 1

    # Equal-area rings should each get ~n/bands
    expected = n / bands
    for c in counts:
        assert abs(c - expected) / expected < 0.05


def test_nonpositive_radius_rejected():
    with pytest.raises(ValueError):
        sample_point((0, 0), 0)
    with pytest.raises(ValueError):
        in_inscribed_square(0, 0, (0, 0), -1)


def test_square_half_side():
    assert square_half_side(300) == pytest.approx(300 * math.sqrt(2) / 2)


def test_center_is_in_square():
    assert in_inscribed_square(300, 300, (300, 300), 300)


def test_square_boundary_and_outside():
    half = square_half_side(100)
    assert in_inscribed_square(half, half, (0, 0), 100)
    assert in_inscribed_square(-half, half, (0, 0), 100)
    # On the circle, along the axis: outside the square
    assert not in_inscribed_square(100, 0, (0, 0), 100)
    assert not in_inscribed_square(0, -99, (0, 0), 100)


def test_new_sample_starts_falling():
    s = new_sample((0, 0), 5, random.Random(3))
    assert s.status is SampleStatus.FALLING
    assert s.progress == 0.0
    assert not s.landed
    assert s.in_square == in_inscribed_square(s.x, s.y, (0, 0), 5)


def test_sample_color_follows_membership():
    assert Sample(x=0, y=0, in_square=True).color == SQUARE_COLOR
    assert Sample(x=0, y=0, in_square=False).color == CIRCLE_COLOR


def test_sample_ids_are_full_width_tokens():
    batch = generate_batch(1000, (0, 0), 1, random.Random(0))
    assert all(len(s.id) == 32 for s in batch)
    assert len({s.id for s in batch}) == 1000


def test_seeded_ids_are_reproducible():
    a = generate_batch(20, (0, 0), 1, random.Random(5))
    b = generate_batch(20, (0, 0), 1, random.Random(5))
    assert [s.id for s in a] == [s.id for s in b]


def test_generate_batch_sizes():
    rng = random.Random(0)
    assert generate_batch(0, (0, 0), 1, rng) == []
    assert len(generate_batch(17, (0, 0), 1, rng)) == 17


def test_generate_batch_rejects_negative_count():
    with pytest.raises(ValueError):
        generate_batch(-1, (0, 0), 1)


def test_seeded_batches_are_reproducible():
    a = generate_batch(5, (0, 0), 2, random.Random(11))
    b = generate_batch(5, (0, 0), 2, random.Random(11))
    assert [(s.x, s.y) for s in a] == [(s.x, s.y) for s in b]
