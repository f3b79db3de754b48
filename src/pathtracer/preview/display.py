"""Matplotlib-based preview display for rendered images.

Matplotlib is imported only when a preview is shown, so rendering and
export work on machines without a display backend.
"""

import numpy as np
import numpy.typing as npt


def show_image(
    pixels: npt.NDArray[np.uint8],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4.5),
    block: bool = True,
) -> None:
    """Display an 8-bit RGB buffer in a Matplotlib window.

    Args:
        pixels: Array of shape (height, width, 3) with dtype uint8.
        title: Window title. Defaults to the image size.
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    height, width = pixels.shape[:2]

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(pixels)
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {width}x{height}")

    plt.tight_layout()
    plt.show(block=block)
