"""Matplotlib-based preview display for rendered images.

The renderer already clamps every channel into [0, 1], so images are shown
as-is with no tone mapping or gamma correction.

Example:
    >>> from raycaster.core.integrator import render
    >>> from raycaster.preview.display import show_image
    >>>
    >>> image = render(scene)
    >>> show_image(image, title="Demo scene")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt


def compute_rmse(image_a: npt.NDArray[np.float32], image_b: npt.NDArray[np.float32]) -> float:
    """Root mean squared error between two images of the same shape.

    Raises:
        ValueError: If the shapes differ.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(f"Shape mismatch: {image_a.shape} vs {image_b.shape}")
    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))


def show_image(
    image: npt.NDArray[np.float32],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 6),
    block: bool = True,
) -> None:
    """Display a rendered image in a Matplotlib window.

    Args:
        image: Image array of shape (H, W, 3) with values in [0, 1].
        title: Window title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)

    ax.imshow(np.clip(image, 0.0, 1.0))
    ax.axis("off")
    ax.set_title(title if title is not None else f"Render Preview - {image.shape[1]}x{image.shape[0]}")

    plt.tight_layout()
    plt.show(block=block)


def show_comparison(
    image_a: npt.NDArray[np.float32],
    image_b: npt.NDArray[np.float32],
    *,
    labels: tuple[str, str] = ("A", "B"),
    diff_scale: float = 10.0,
    figsize: tuple[float, float] = (16, 5),
    block: bool = True,
) -> float:
    """Display two renders side by side with their amplified difference.

    Useful for checking a scene edit or a parameter change by eye.

    Returns:
        RMSE between the two images.
    """
    import matplotlib.pyplot as plt

    rmse = compute_rmse(image_a, image_b)
    diff_amplified = np.clip(
        np.abs(image_a.astype(np.float64) - image_b.astype(np.float64)) * diff_scale, 0.0, 1.0
    )

    fig, axes = plt.subplots(1, 3, figsize=figsize)

    axes[0].imshow(np.clip(image_a, 0.0, 1.0))
    axes[0].set_title(labels[0])
    axes[0].axis("off")

    axes[1].imshow(np.clip(image_b, 0.0, 1.0))
    axes[1].set_title(labels[1])
    axes[1].axis("off")

    axes[2].imshow(diff_amplified)
    axes[2].set_title(f"Difference ({diff_scale}x) - RMSE: {rmse:.6f}")
    axes[2].axis("off")

    plt.tight_layout()
    plt.show(block=block)

    return rmse
