"""Unit tests for content-density font scaling."""

import pytest

from rework.contexts.layout.font_scaler import (
    MIN_BODY_SIZE,
    MIN_SCALE_FACTOR,
    MIN_SMALL_SIZE,
    MIN_TITLE_SIZE,
    is_at_floor,
    scale,
    scale_factor_for,
    tighten,
)


@pytest.mark.unit
@pytest.mark.parametrize(
    "length, factor",
    [(0, 1.0), (1000, 1.0), (1001, 0.9), (1500, 0.9), (1501, 0.85), (2000, 0.85), (2001, 0.75), (50000, 0.75)],
)
def test_density_tiers(length, factor):
    """Test the step function thresholds."""
    assert scale_factor_for(length) == pytest.approx(factor)


@pytest.mark.unit
def test_sizes_from_base():
    """Test title/body/small ratios at full scale."""
    sizes = scale(500, 12)
    assert sizes.title_size == pytest.approx(14.4)
    assert sizes.body_size == pytest.approx(12.0)
    assert sizes.small_size == pytest.approx(9.6)
    assert sizes.scale_factor == pytest.approx(1.0)


@pytest.mark.unit
def test_dense_content_scales_down():
    """Test the densest tier at base 12."""
    sizes = scale(2500, 12)
    assert sizes.body_size == pytest.approx(9.0)
    assert sizes.title_size == pytest.approx(10.8)
    assert sizes.small_size == pytest.approx(7.2)


@pytest.mark.unit
def test_minimum_sizes_enforced():
    """Test legibility floors for a small base size."""
    sizes = scale(5000, 8)
    assert sizes.title_size == MIN_TITLE_SIZE
    assert sizes.body_size == MIN_BODY_SIZE
    assert sizes.small_size == MIN_SMALL_SIZE


@pytest.mark.unit
@pytest.mark.parametrize("base", [9, 11, 12, 14])
def test_monotonic_in_content_length(base):
    """Test that more content never yields a larger font."""
    sizes = [scale(length, base) for length in range(0, 4000, 50)]
    for smaller, larger in zip(sizes, sizes[1:]):
        assert larger.body_size <= smaller.body_size
        assert larger.title_size <= smaller.title_size
        assert larger.small_size <= smaller.small_size


@pytest.mark.unit
def test_tighten_steps_to_next_tier():
    """Test tighten walks 1.0 -> 0.9 -> 0.85 -> 0.75 -> 0.7 and stops at the floor."""
    sizes = scale(0, 12)
    factors = []
    for _ in range(6):
        sizes = tighten(sizes, 12)
        factors.append(round(sizes.scale_factor, 4))

    assert factors == [0.9, 0.85, 0.75, 0.7, 0.7, 0.7]
    assert is_at_floor(sizes)


@pytest.mark.unit
def test_tighten_never_below_floor():
    """Test that tightening keeps body size at or above the floor factor."""
    sizes = scale(3000, 12)
    tightened = tighten(tighten(sizes, 12), 12)
    assert tightened.scale_factor >= MIN_SCALE_FACTOR
    assert tightened.body_size == pytest.approx(12 * MIN_SCALE_FACTOR)
