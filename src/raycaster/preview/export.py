"""Image export utilities for rendered images.

This module is the image sink: it converts the renderer's float grid to
8-bit RGB and writes it to disk. The conversion is a plain truncating cast,
``int(value * 255)``, with no gamma or tone mapping, so a rendered value of
``1.0`` becomes 255 and ``0.999`` becomes 254.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from raycaster.core.integrator import render
    >>> from raycaster.preview.export import save_png
    >>>
    >>> image = render(scene)
    >>> save_png(image, "output.png")
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_uint8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert a [0, 1] float image to uint8.

    Values are clipped to [0, 1] first so out-of-range input saturates
    instead of wrapping.

    Args:
        image: Image array of shape (H, W, 3).

    Returns:
        8-bit image array of shape (H, W, 3).

    Raises:
        ValueError: If the array is not an (H, W, 3) image.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")

    clipped = np.clip(image.astype(np.float32), 0.0, 1.0)
    return (clipped * 255).astype(np.uint8)


def save_png(image: npt.NDArray[np.float32], filepath: str | Path) -> Path:
    """Save a rendered image as a PNG file.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1].
        filepath: Output file path (should end in .png).

    Returns:
        The path that was written.
    """
    path = Path(filepath)
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(path)
    return path
