"""
Tests for bounded image re-encoding.
"""

import os
from io import BytesIO
from unittest.mock import MagicMock, patch

import pytest
from PIL import Image

from jobportal.core import imaging
from jobportal.core.imaging import ImageDecodeError, degrade_until, shrink


def _image_bytes(size, noisy=False, mode="RGB", fmt="PNG") -> bytes:
    if noisy:
        image = Image.frombytes("RGB", size, os.urandom(size[0] * size[1] * 3))
    else:
        colors = {"L": 128, "RGB": (40, 90, 160), "RGBA": (40, 90, 160, 100)}
        image = Image.new(mode, size, colors[mode])
    out = BytesIO()
    image.save(out, format=fmt)
    return out.getvalue()


class TestDegradeUntil:
    """Tests for degrade_until."""

    def test_stops_at_first_accepted(self):
        produce = MagicMock(side_effect=lambda p: p)

        result = degrade_until(70, 10, produce, lambda r: r <= 60, max_iterations=5)

        assert result == 60
        assert [c.args[0] for c in produce.call_args_list] == [70, 60]

    def test_returns_last_when_never_accepted(self):
        produce = MagicMock(side_effect=lambda p: p)

        result = degrade_until(70, 10, produce, lambda r: False, max_iterations=3)

        assert result == 50
        assert produce.call_count == 3

    def test_never_produces_non_positive_parameter(self):
        produce = MagicMock(side_effect=lambda p: p)

        result = degrade_until(15, 10, produce, lambda r: False, max_iterations=5)

        assert result == 5
        assert [c.args[0] for c in produce.call_args_list] == [15, 5]

    def test_single_iteration(self):
        produce = MagicMock(side_effect=lambda p: p)

        assert degrade_until(70, 10, produce, lambda r: False, max_iterations=1) == 70
        assert produce.call_count == 1

    @pytest.mark.parametrize(
        "initial,step,iterations",
        [(0, 10, 3), (70, 0, 3), (70, -5, 3), (70, 10, 0)],
    )
    def test_invalid_arguments(self, initial, step, iterations):
        with pytest.raises(ValueError):
            degrade_until(initial, step, lambda p: p, lambda r: True, iterations)


class TestShrink:
    """Tests for shrink."""

    def test_small_image_encoded_once(self):
        raw = _image_bytes((32, 32))

        with patch.object(imaging, "_encode_jpeg", wraps=imaging._encode_jpeg) as encode:
            result = shrink(raw, target_max_bytes=150 * 1024)

        assert encode.call_count == 1
        assert encode.call_args.args[1] == 70
        assert result[:2] == b"\xff\xd8"

    def test_large_image_tries_falling_quality(self):
        raw = _image_bytes((256, 256), noisy=True)

        with patch.object(imaging, "_encode_jpeg", wraps=imaging._encode_jpeg) as encode:
            result = shrink(raw, target_max_bytes=100)

        assert [c.args[1] for c in encode.call_args_list] == [70, 60, 50]
        # over budget, still the last attempt is returned
        assert len(result) >= 100
        decoded = imaging._decode(raw)
        assert result == imaging._encode_jpeg(decoded, 50)
        assert result != imaging._encode_jpeg(decoded, 70)

    def test_transparent_image_is_flattened(self):
        raw = _image_bytes((16, 16), mode="RGBA")

        result = shrink(raw)

        assert Image.open(BytesIO(result)).mode == "RGB"

    def test_grayscale_is_kept(self):
        result = shrink(_image_bytes((16, 16), mode="L"))

        assert Image.open(BytesIO(result)).mode == "L"

    def test_undecodable_input(self):
        with pytest.raises(ImageDecodeError):
            shrink(b"definitely not an image")
