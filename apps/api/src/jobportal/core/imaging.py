"""
Image Re-encoding

Best-effort shrinking of uploaded images toward a byte budget.

The budget is a soft target: shrink() re-encodes at falling JPEG quality for
a fixed number of attempts and returns the last buffer it produced, which may
still be over budget. No I/O happens here; callers persist the result.
"""

from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO
from typing import TypeVar

from PIL import Image, ImageOps, UnidentifiedImageError

T = TypeVar("T")

DEFAULT_TARGET_BYTES = 150 * 1024
DEFAULT_START_QUALITY = 70
DEFAULT_QUALITY_STEP = 10
DEFAULT_MAX_ITERATIONS = 3


class ImageDecodeError(ValueError):
    """The uploaded bytes are not a readable image."""


@dataclass(frozen=True)
class EncodeAttempt:
    buffer: bytes
    quality: int

    @property
    def size_bytes(self) -> int:
        return len(self.buffer)


def degrade_until(
    initial: int,
    step: int,
    produce: Callable[[int], T],
    accept: Callable[[T], bool],
    max_iterations: int,
) -> T:
    """
    Produce results at a falling parameter until one is accepted.

    Calls produce(initial), then produce(initial - step), ... stopping as soon
    as accept() returns True, after max_iterations calls, or when the next
    parameter would be non-positive. Returns the last result produced.
    """
    if initial <= 0:
        raise ValueError("initial must be positive")
    if step <= 0:
        raise ValueError("step must be positive")
    if max_iterations < 1:
        raise ValueError("max_iterations must be at least 1")

    param = initial
    result = produce(param)

    for _ in range(max_iterations - 1):
        if accept(result):
            break
        param -= step
        if param <= 0:
            break
        result = produce(param)

    return result


def _decode(raw: bytes) -> Image.Image:
    try:
        image = Image.open(BytesIO(raw))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ImageDecodeError("File is not a readable image") from e

    # JPEG output drops EXIF, so bake the orientation into the pixels
    image = ImageOps.exif_transpose(image)

    if image.mode in ("RGBA", "LA", "P"):
        image = image.convert("RGBA")
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image, mask=image.getchannel("A"))
        return background
    if image.mode not in ("RGB", "L"):
        return image.convert("RGB")
    return image


def _encode_jpeg(image: Image.Image, quality: int) -> bytes:
    out = BytesIO()
    image.save(out, format="JPEG", quality=quality, optimize=True)
    return out.getvalue()


def shrink(
    raw: bytes,
    target_max_bytes: int = DEFAULT_TARGET_BYTES,
    start_quality: int = DEFAULT_START_QUALITY,
    step: int = DEFAULT_QUALITY_STEP,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
) -> bytes:
    """
    Re-encode an image as JPEG, lowering quality until it fits the budget.

    Each attempt encodes the decoded original, so quality loss does not
    compound between attempts.

    Args:
        raw: Uploaded image bytes in any format Pillow can read
        target_max_bytes: Stop once an encoding is strictly smaller than this
        start_quality: JPEG quality of the first attempt
        step: Quality decrease between attempts
        max_iterations: Maximum number of encodings

    Returns:
        JPEG bytes from the last attempt (possibly still over budget)

    Raises:
        ImageDecodeError: raw is not a readable image
    """
    image = _decode(raw)

    attempt = degrade_until(
        initial=start_quality,
        step=step,
        produce=lambda quality: EncodeAttempt(_encode_jpeg(image, quality), quality),
        accept=lambda candidate: candidate.size_bytes < target_max_bytes,
        max_iterations=max_iterations,
    )
    return attempt.buffer
