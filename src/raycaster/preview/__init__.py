"""Preview module for rendered image output.

Components:
    export: Float image to 8-bit conversion and PNG export
    display: Matplotlib preview windows

Example:
    >>> from raycaster import render
    >>> from raycaster.preview import save_png
    >>>
    >>> save_png(render(scene), "output.png")
"""

from raycaster.preview.display import compute_rmse, show_comparison, show_image
from raycaster.preview.export import image_to_uint8, save_png

__all__ = [
    "image_to_uint8",
    "save_png",
    "compute_rmse",
    "show_image",
    "show_comparison",
]
