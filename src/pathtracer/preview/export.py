"""Image export for rendered pixel buffers.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from pathtracer.preview.export import save_png
    >>> pixels = tracer.render(np.random.default_rng(7))
    >>> save_png(pixels, "output.png")
"""

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def save_png(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> Path:
    """Save an 8-bit RGB buffer as a PNG file.

    Write failures are not retried; the Pillow or OS error reaches the
    caller unchanged.

    Args:
        pixels: Array of shape (height, width, 3) with dtype uint8.
        filepath: Output file path.

    Returns:
        The path written.

    Raises:
        ValueError: If pixels is not a (height, width, 3) uint8 array.
        OSError: If the file cannot be written.
    """
    pixels = np.asarray(pixels)
    if pixels.ndim != 3 or pixels.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) array, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {pixels.dtype}")

    path = Path(filepath)
    PILImage.fromarray(pixels).save(path, format="PNG")
    logger.info("Saved %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)
    return path


def load_png(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load a PNG file as an 8-bit RGB buffer.

    Args:
        filepath: Path of the image.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.
    """
    with PILImage.open(filepath) as image:
        return np.asarray(image.convert("RGB"), dtype=np.uint8)
