#!/usr/bin/env python3
"""Render a scene to a PNG file.

This script renders either the built-in demo scene (three spheres over a
floor lit by red, green and blue lights) or a scene described in a JSON
file, and saves the result as a PNG.

Usage:
    python -m examples.render_scene [options]

Options:
    --scene PATH        JSON scene file (default: built-in demo scene)
    --width WIDTH       Override the image width in pixels
    --height HEIGHT     Override the image height in pixels
    --fov FOV           Override the field of view in degrees
    --output OUTPUT     Output file path (default: render.png)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --show              Open a preview window after saving
    --quiet             Suppress progress output
    --verbose           Enable debug logging

Example:
    python -m examples.render_scene --width 320 --height 240 --output demo.png
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

import taichi as ti


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render a scene with the direct-illumination ray caster.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene file (default: built-in demo scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=None,
        help="Override the image width in pixels",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Override the image height in pixels",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Override the field of view in degrees",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="render.png",
        help="Output file path (default: render.png)",
    )
    parser.add_argument(
        "--arch",
        choices=("cpu", "gpu"),
        default="cpu",
        help="Taichi backend; the backend must support 64-bit floats (default: cpu)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a preview window after saving",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def render_scene(
    scene_path: str | None = None,
    width: int | None = None,
    height: int | None = None,
    fov: float | None = None,
    output_path: str = "render.png",
    quiet: bool = False,
    show: bool = False,
) -> Path:
    """Load or build a scene, render it and save it to file.

    Args:
        scene_path: JSON scene file, or None for the demo scene.
        width: Optional width override.
        height: Optional height override.
        fov: Optional field of view override.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.
        show: If True, display the image in a Matplotlib window.

    Returns:
        Path to the saved image file.

    Raises:
        ValueError: If the scene is not landscape (width <= height).
    """
    # Lazy imports to allow Taichi initialization first
    from raycaster.core.integrator import Renderer
    from raycaster.preview.export import save_png
    from raycaster.scene.config import load_scene
    from raycaster.scene.demo import create_demo_scene

    if scene_path is None:
        scene = create_demo_scene()
    else:
        scene = load_scene(scene_path)

    overrides = {
        key: value
        for key, value in (("width", width), ("height", height), ("fov", fov))
        if value is not None
    }
    if overrides:
        scene = dataclasses.replace(scene, **overrides)

    if not quiet:
        source = scene_path or "demo scene"
        print(
            f"Rendering {source} ({scene.width}x{scene.height}, "
            f"{len(scene.scene_objects)} objects, {len(scene.lights)} lights)..."
        )

    start_time = time.time()

    renderer = Renderer(scene)
    image = renderer.render()

    output_file = save_png(image, output_path)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {total_time:.2f}s")

    if show:
        from raycaster.preview.display import show_image

        show_image(image, title=f"{scene_path or 'Demo scene'} ({scene.width}x{scene.height})")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    arch = ti.gpu if args.arch == "gpu" else ti.cpu
    ti.init(arch=arch, default_fp=ti.f64)

    try:
        render_scene(
            scene_path=args.scene,
            width=args.width,
            height=args.height,
            fov=args.fov,
            output_path=args.output,
            quiet=args.quiet,
            show=args.show,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
