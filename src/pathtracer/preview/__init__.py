"""Preview module for output and visualization.

Components:
    display: Matplotlib-based preview display
    export: PNG export via Pillow

Example:
    >>> from pathtracer.preview import save_png, show_image
    >>> pixels = tracer.render(np.random.default_rng(7))
    >>> save_png(pixels, "output.png")
    >>> show_image(pixels)
"""

from pathtracer.preview.display import show_image
from pathtracer.preview.export import load_png, save_png

__all__ = [
    "show_image",
    "save_png",
    "load_png",
]
