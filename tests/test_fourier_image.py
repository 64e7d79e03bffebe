"""Tests for the FourierImage orchestrator."""

import copy

import numpy as np
import pytest

from image_fourier.errors import StateError, ValidationError
from image_fourier.fourier_image import FourierImage
from image_fourier.grid import normalize
from image_fourier.image import Image

A = 32 / 15
B = 8 / 15
EXPECTED_TRANSFORM = np.array(
    [
        [0, 0, -A, 0],
        [0, 0, -A - A * 1j, 0],
        [-B, -B - B * 1j, 8, -B + B * 1j],
        [0, 0, -A + A * 1j, 0],
    ],
    dtype=np.complex128,
)


@pytest.fixture
def image_data():
    return normalize(np.arange(1, 17, dtype=np.float64).reshape(4, 4))


@pytest.fixture
def image_1ch(image_data):
    image = FourierImage(image_data)
    image.apply_transform()
    return image


@pytest.fixture
def image_3ch(image_data):
    image = FourierImage([image_data, image_data, image_data])
    image.apply_transform()
    return image


@pytest.fixture
def image_no_transform(image_data):
    return FourierImage(image_data)


def test_initial_state(image_no_transform):
    assert not image_no_transform.has_transform
    assert image_no_transform.height == 4
    assert image_no_transform.width == 4
    assert image_no_transform.channels == 1


def test_apply_transform_single_channel(image_1ch):
    assert image_1ch.has_transform
    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_apply_transform_three_channels(image_3ch):
    """Identical RGB channels reduce to the same grayscale grid."""
    assert image_3ch.channels == 3
    np.testing.assert_allclose(image_3ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_apply_transform_two_channels_averages(image_data):
    image = FourierImage([image_data, np.zeros_like(image_data)])
    image.apply_transform()

    np.testing.assert_allclose(image.get_transform(), EXPECTED_TRANSFORM / 2, atol=1e-10)


def test_apply_transform_recomputes(image_1ch):
    """A second forward transform overwrites earlier filtering."""
    image_1ch.apply_low_pass_filter(0)
    image_1ch.apply_transform()

    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_apply_inverse_transform(image_1ch, image_data):
    inverse = image_1ch.apply_inverse_transform()

    assert isinstance(inverse, FourierImage)
    assert inverse is not image_1ch
    np.testing.assert_allclose(inverse.get_data(0), image_data, atol=1e-10)


def test_apply_inverse_transform_carries_transform(image_1ch):
    """The inverse result keeps the frequency content that produced it."""
    image_1ch.apply_high_pass_filter(0.5)
    filtered = image_1ch.get_transform()

    inverse = image_1ch.apply_inverse_transform()

    np.testing.assert_array_equal(inverse.get_transform(), filtered)
    np.testing.assert_array_equal(image_1ch.get_transform(), filtered)


def test_apply_inverse_transform_result_is_independent(image_1ch):
    inverse = image_1ch.apply_inverse_transform()
    inverse.apply_low_pass_filter(0)

    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_apply_inverse_transform_output_is_normalized(image_1ch):
    image_1ch.apply_low_pass_filter(0.5)

    inverse = image_1ch.apply_inverse_transform()

    data = inverse.get_data(0)
    assert data.min() >= 0.0
    assert data.max() <= 1.0


def test_apply_inverse_transform_before_transform_raises(image_no_transform):
    with pytest.raises(StateError, match="No transform"):
        image_no_transform.apply_inverse_transform()


@pytest.mark.parametrize(
    "accessor",
    ["get_transform", "get_magnitude", "get_phase", "get_real", "get_imaginary"],
)
def test_getters_before_transform_raise(image_no_transform, accessor):
    with pytest.raises(StateError, match="No transform"):
        getattr(image_no_transform, accessor)()


def test_get_transform_returns_copy(image_1ch):
    transform = image_1ch.get_transform()
    transform[:] = 0

    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_get_magnitude(image_1ch):
    np.testing.assert_allclose(image_1ch.get_magnitude(), np.abs(EXPECTED_TRANSFORM), atol=1e-10)


def test_get_magnitude_log(image_1ch):
    expected = np.log(np.abs(EXPECTED_TRANSFORM) + 1e-8)
    np.testing.assert_allclose(image_1ch.get_magnitude(log=True), expected, atol=1e-6)


def test_get_phase(image_no_transform):
    # Phase of near-zero coefficients is noise, so compare against the exact transform
    image_no_transform.set_transform(EXPECTED_TRANSFORM)

    np.testing.assert_allclose(image_no_transform.get_phase(), np.angle(EXPECTED_TRANSFORM), atol=1e-10)


def test_get_real_and_imaginary(image_1ch):
    np.testing.assert_allclose(image_1ch.get_real(), EXPECTED_TRANSFORM.real, atol=1e-10)
    np.testing.assert_allclose(image_1ch.get_imaginary(), EXPECTED_TRANSFORM.imag, atol=1e-10)


def test_magnitude_and_phase_consistent_with_parts(image_1ch):
    real = image_1ch.get_real()
    imag = image_1ch.get_imaginary()

    np.testing.assert_allclose(image_1ch.get_magnitude(), np.abs(real + 1j * imag))
    np.testing.assert_allclose(image_1ch.get_phase(), np.arctan2(imag, real))


def test_set_transform(image_no_transform):
    image_no_transform.set_transform(EXPECTED_TRANSFORM)

    assert image_no_transform.has_transform
    np.testing.assert_allclose(image_no_transform.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_set_transform_stores_copy(image_no_transform):
    source = EXPECTED_TRANSFORM.copy()
    image_no_transform.set_transform(source)
    source[:] = 0

    np.testing.assert_allclose(image_no_transform.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_set_transform_invalid_size_raises(image_no_transform):
    with pytest.raises(ValidationError, match="Invalid transform size"):
        image_no_transform.set_transform(np.zeros((3, 3), dtype=np.complex128))

    with pytest.raises(ValidationError, match="Invalid transform size"):
        image_no_transform.set_transform(np.zeros(16, dtype=np.complex128))

    assert not image_no_transform.has_transform


def test_set_transform_non_square_uses_height_and_width():
    image = FourierImage(np.zeros((2, 5)))

    image.set_transform(np.ones((2, 5)))
    with pytest.raises(ValidationError):
        image.set_transform(np.ones((5, 2)))


@pytest.mark.parametrize(
    "call",
    [
        lambda image: image.apply_low_pass_filter(1),
        lambda image: image.apply_high_pass_filter(1),
        lambda image: image.apply_band_pass_filter(1, 2),
    ],
)
def test_filters_before_transform_raise(image_no_transform, call):
    with pytest.raises(StateError):
        call(image_no_transform)


def test_filter_invalid_cutoffs_raise(image_1ch):
    with pytest.raises(ValidationError):
        image_1ch.apply_low_pass_filter(-1)
    with pytest.raises(ValidationError):
        image_1ch.apply_high_pass_filter(-1)
    with pytest.raises(ValidationError):
        image_1ch.apply_band_pass_filter(-1, 1)
    with pytest.raises(ValidationError):
        image_1ch.apply_band_pass_filter(1, -1)
    with pytest.raises(ValidationError):
        image_1ch.apply_band_pass_filter(2, 1)


def test_low_pass_zero_cutoff_returns_zero_transform(image_1ch):
    image_1ch.apply_low_pass_filter(0)

    np.testing.assert_allclose(image_1ch.get_transform(), 0, atol=1e-10)


def test_high_pass_zero_cutoff_returns_original_transform(image_1ch):
    image_1ch.apply_high_pass_filter(0)

    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_band_pass_same_cutoffs_returns_zero_transform(image_1ch):
    image_1ch.apply_band_pass_filter(1, 1)

    np.testing.assert_allclose(image_1ch.get_transform(), 0, atol=1e-10)


def test_low_pass_keeps_dc_on_odd_grid():
    """On odd grids the filter center is the DC term, so a low-pass keeps it."""
    image = FourierImage(np.ones((5, 5)))
    image.apply_transform()

    image.apply_low_pass_filter(0.5)

    transform = image.get_transform()
    assert transform[2, 2] == pytest.approx(25.0)
    np.testing.assert_allclose(np.delete(transform.ravel(), 12), 0, atol=1e-10)


def test_apply_filter_dispatch(image_data):
    low = FourierImage(image_data)
    low.apply_transform()
    low.apply_filter("low", low_cutoff=0.5, high_cutoff=0.0)
    np.testing.assert_allclose(low.get_transform(), 0, atol=1e-10)

    high = FourierImage(image_data)
    high.apply_transform()
    high.apply_filter("high", low_cutoff=0.0, high_cutoff=0.9)
    np.testing.assert_allclose(high.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)

    band = FourierImage(image_data)
    band.apply_transform()
    band.apply_filter("band", low_cutoff=0.5, high_cutoff=0.5)
    np.testing.assert_allclose(band.get_transform(), 0, atol=1e-10)


def test_apply_filter_unknown_type_raises(image_1ch):
    with pytest.raises(ValidationError, match="Invalid filter type"):
        image_1ch.apply_filter("notch", 0.1, 0.5)


def test_display_images_are_normalized(image_1ch):
    magnitude = image_1ch.magnitude_image(log=True).get_data(0)
    phase = image_1ch.phase_image().get_data(0)

    for grid in (magnitude, phase):
        assert grid.shape == (4, 4)
        assert grid.min() == pytest.approx(0.0)
        assert grid.max() == pytest.approx(1.0)


def test_constructor_copies_image(image_data):
    source = Image(image_data)
    image = FourierImage(source)

    assert image.image == source
    assert image.image is not source


def test_copy_is_independent(image_1ch):
    clone = copy.copy(image_1ch)
    deep = copy.deepcopy(image_1ch)
    assert clone == image_1ch
    assert deep == image_1ch

    clone.apply_low_pass_filter(0)

    assert clone != image_1ch
    np.testing.assert_allclose(image_1ch.get_transform(), EXPECTED_TRANSFORM, atol=1e-10)


def test_equality_considers_transform_state(image_data, image_1ch):
    assert FourierImage(image_data) == FourierImage(image_data)
    assert FourierImage(image_data) != image_1ch


def test_reduce_channels_delegates(image_3ch, image_data):
    gray = image_3ch.reduce_channels()

    assert gray.channels == 1
    np.testing.assert_allclose(gray.get_data(0), image_data, atol=1e-12)
