"""Tests for image preparation."""

import numpy as np
import pytest

from sstvtx.encoder.color import rgb_freqs, yryby_freqs
from sstvtx.encoder.exceptions import InputSizeMismatch, UnsupportedFormatOperation
from sstvtx.encoder.modes import FAMILY_LAYOUTS, MARTIN_1, ColorModel, Family, FormatDescriptor
from sstvtx.encoder.prepare import as_pixel_array, prepare_image


def make_descriptor(family=Family.MARTIN, lines=2, width=3):
    """Helper to create a small FormatDescriptor for testing."""
    return FormatDescriptor(
        name='Test',
        family=family,
        num_scan_lines=lines,
        vert_resolution=width,
        blanking_interval=0.001,
        scan_line_length=0.01,
        sync_pulse_length=0.005,
        vis_code=(False, True, False, True, True, False, False),
    )


def solid_image(lines, width, rgb):
    image = np.zeros((lines, width, 4), dtype=np.uint8)
    image[..., :3] = rgb
    image[..., 3] = 255
    return image


class TestPixelArray:
    """Tests for buffer validation."""

    def test_accepts_flat_bytes(self):
        descriptor = make_descriptor()
        data = bytes(range(2 * 3 * 4))
        array = as_pixel_array(data, descriptor)
        assert array.shape == (2, 3, 4)
        assert array[1, 0, 0] == 12

    def test_accepts_flat_list(self):
        descriptor = make_descriptor()
        array = as_pixel_array([7] * 24, descriptor)
        assert array.shape == (2, 3, 4)

    def test_accepts_shaped_array(self):
        descriptor = make_descriptor()
        image = solid_image(2, 3, (1, 2, 3))
        assert as_pixel_array(image, descriptor) is image

    @pytest.mark.parametrize('size', [0, 23, 25, 48])
    def test_flat_size_mismatch(self, size):
        with pytest.raises(InputSizeMismatch):
            as_pixel_array(bytes(size), make_descriptor())

    def test_shape_mismatch(self):
        with pytest.raises(InputSizeMismatch):
            as_pixel_array(solid_image(3, 2, (0, 0, 0)), make_descriptor())

    def test_rgb_without_alpha_rejected(self):
        with pytest.raises(InputSizeMismatch):
            as_pixel_array(np.zeros((2, 3, 3), dtype=np.uint8), make_descriptor())


class TestPrepareImage:
    """Tests for per-family channel tracks."""

    def test_shape_and_read_only(self):
        prepared = prepare_image(make_descriptor(), solid_image(2, 3, (0, 0, 0)))
        assert prepared.shape == (2, 3, 3)
        assert not prepared.flags.writeable

    @pytest.mark.parametrize('family', list(Family))
    def test_every_family_prepares(self, family):
        prepared = prepare_image(make_descriptor(family), solid_image(2, 3, (90, 160, 30)))
        assert prepared.shape == (2, 3, len(FAMILY_LAYOUTS[family].channel_order))
        assert np.all((prepared >= 1500) & (prepared <= 2300))

    def test_every_color_model_has_a_family(self):
        assert {layout.color_model for layout in FAMILY_LAYOUTS.values()} == set(ColorModel)

    def test_martin_channel_order(self):
        prepared = prepare_image(make_descriptor(), solid_image(2, 3, (255, 0, 0)))
        # green, blue, red
        assert np.allclose(prepared[:, 0], 1500)
        assert np.allclose(prepared[:, 1], 1500)
        assert np.allclose(prepared[:, 2], 2300, atol=0.01)

    def test_wrasse_channel_order(self):
        prepared = prepare_image(make_descriptor(Family.WRASSE), solid_image(2, 3, (255, 0, 0)))
        assert np.allclose(prepared[:, 0], 2300, atol=0.01)
        assert np.allclose(prepared[:, 1:], 1500)

    def test_matches_scalar_encoding(self):
        rng = np.random.default_rng(7)
        image = rng.integers(0, 256, size=(2, 3, 4), dtype=np.uint8)
        flat = image.reshape(-1).tolist()
        prepared = prepare_image(make_descriptor(Family.SCOTTIE), image)
        red, green, blue = rgb_freqs(flat, 1, 2, 3)
        assert prepared[1, 0, 2] == pytest.approx(green)
        assert prepared[1, 1, 2] == pytest.approx(blue)
        assert prepared[1, 2, 2] == pytest.approx(red)

    def test_pd_luma_is_per_line(self):
        image = np.zeros((2, 3, 4), dtype=np.uint8)
        image[0, :, :3] = (200, 50, 50)
        image[1, :, :3] = (20, 100, 220)
        flat = image.reshape(-1).tolist()
        prepared = prepare_image(make_descriptor(Family.PD), image)
        assert prepared[0, 0, 0] == pytest.approx(yryby_freqs(flat, 0, 0, 3)[0])
        assert prepared[1, 0, 0] == pytest.approx(yryby_freqs(flat, 1, 0, 3)[0])

    def test_pd_chroma_averaged_over_pair(self):
        image = np.zeros((4, 3, 4), dtype=np.uint8)
        image[0, :, :3] = (200, 50, 50)
        image[1, :, :3] = (20, 100, 220)
        image[2, :, :3] = (0, 255, 0)
        image[3, :, :3] = (0, 255, 0)
        flat = image.reshape(-1).tolist()
        prepared = prepare_image(make_descriptor(Family.PD, lines=4), image)

        _, ry_a, by_a = yryby_freqs(flat, 0, 0, 3)
        _, ry_b, by_b = yryby_freqs(flat, 1, 0, 3)
        assert prepared[0, 1, 0] == pytest.approx((ry_a + ry_b) / 2)
        assert prepared[0, 2, 0] == pytest.approx((by_a + by_b) / 2)
        assert prepared[1, 1, 0] == pytest.approx((ry_a + ry_b) / 2)

        # Second pair is uniform, so averaging leaves it unchanged
        _, ry_c, _ = yryby_freqs(flat, 2, 0, 3)
        assert prepared[2, 1, 0] == pytest.approx(ry_c)

    def test_input_not_mutated(self):
        image = solid_image(2, 3, (10, 20, 30))
        copy = image.copy()
        prepare_image(make_descriptor(Family.PD), image)
        assert np.array_equal(image, copy)

    def test_repeated_calls_return_fresh_arrays(self):
        image = solid_image(2, 3, (10, 20, 30))
        descriptor = make_descriptor()
        first = prepare_image(descriptor, image)
        second = prepare_image(descriptor, image)
        assert first is not second
        assert np.array_equal(first, second)

    def test_familyless_descriptor(self):
        with pytest.raises(UnsupportedFormatOperation):
            prepare_image(make_descriptor(family=None), solid_image(2, 3, (0, 0, 0)))

    def test_real_mode_size_check(self):
        with pytest.raises(InputSizeMismatch):
            prepare_image(MARTIN_1, solid_image(2, 3, (0, 0, 0)))
