"""Tests for the preview module.

Tests cover:
- PNG export of 8-bit buffers
- Input validation
- Write failures reaching the caller

Note: Tests avoid displaying actual windows by not calling show_image.
"""

import numpy as np
import pytest
from PIL import Image as PILImage


class TestSavePng:
    """Test PNG export."""

    def test_save_png_writes_exact_pixels(self, tmp_path):
        from pathtracer.preview.export import save_png

        pixels = np.arange(4 * 6 * 3, dtype=np.uint8).reshape(4, 6, 3)
        output_path = tmp_path / "out.png"

        returned = save_png(pixels, output_path)

        assert returned == output_path
        with PILImage.open(output_path) as image:
            assert image.size == (6, 4)
            assert image.mode == "RGB"
            assert np.array_equal(np.asarray(image), pixels)

    def test_load_png(self, tmp_path):
        from pathtracer.preview.export import load_png, save_png

        pixels = np.full((3, 5, 3), 200, dtype=np.uint8)
        save_png(pixels, tmp_path / "grey.png")

        assert np.array_equal(load_png(tmp_path / "grey.png"), pixels)

    def test_save_png_accepts_str_path(self, tmp_path):
        from pathtracer.preview.export import save_png

        save_png(np.zeros((2, 2, 3), dtype=np.uint8), str(tmp_path / "black.png"))

        assert (tmp_path / "black.png").exists()

    def test_wrong_shape_rejected(self, tmp_path):
        from pathtracer.preview.export import save_png

        with pytest.raises(ValueError, match="shape"):
            save_png(np.zeros((4, 4), dtype=np.uint8), tmp_path / "bad.png")

    def test_wrong_dtype_rejected(self, tmp_path):
        from pathtracer.preview.export import save_png

        with pytest.raises(ValueError, match="uint8"):
            save_png(np.zeros((4, 4, 3), dtype=np.float32), tmp_path / "bad.png")

    def test_missing_directory_raises(self, tmp_path):
        """Test write failures propagate to the caller."""
        from pathtracer.preview.export import save_png

        with pytest.raises(OSError):
            save_png(np.zeros((2, 2, 3), dtype=np.uint8), tmp_path / "missing" / "out.png")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
