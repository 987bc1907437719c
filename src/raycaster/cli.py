"""Command-line renderer.

Renders the reference scene (or a JSON scene file) and writes the image.

Usage:
    raycaster OUTPUT [options]
    python -m raycaster OUTPUT [options]

Options:
    --scene FILE        JSON scene description (default: reference scene)
    --width WIDTH       Image width in pixels (default: 1920)
    --height HEIGHT     Image height in pixels (default: 1080)
    --fov DEGREES       Override the camera's horizontal field of view
    --tone-map METHOD   clip, reinhard or exposure (default: clip)
    --exposure VALUE    Exposure for the exposure tone map (default: 1.0)
    --dpi DPI           Pixel density stored in the image (default: 80)
    --arch {cpu,gpu}    Taichi backend (default: cpu)
    --quiet             Suppress progress output
    --verbose           Enable info-level logging

Exit status is 0 on success, 2 on usage errors and 1 when the scene is
invalid or the output cannot be written.

Example:
    raycaster spheres.bmp --width 640 --height 360
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

import taichi as ti

from raycaster.camera.pinhole import PinholeCamera
from raycaster.core.renderer import render_scene
from raycaster.core.tonemap import ToneMapMethod
from raycaster.preview.export import DEFAULT_DPI, save_image
from raycaster.scene.loader import load_scene
from raycaster.scene.reference import REFERENCE_HEIGHT, REFERENCE_WIDTH, create_reference_scene
from raycaster.scene.scene import Scene

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="raycaster",
        description="Render spheres lit by a directional light.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "output",
        type=str,
        help="Output image path (format from extension, BMP if unknown)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene description (default: reference scene)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=REFERENCE_WIDTH,
        help=f"Image width in pixels (default: {REFERENCE_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=REFERENCE_HEIGHT,
        help=f"Image height in pixels (default: {REFERENCE_HEIGHT})",
    )
    parser.add_argument(
        "--fov",
        type=float,
        default=None,
        help="Override the horizontal field of view in degrees",
    )
    parser.add_argument(
        "--tone-map",
        choices=[m.name.lower() for m in ToneMapMethod],
        default="clip",
        help="Tone mapping method (default: clip)",
    )
    parser.add_argument(
        "--exposure",
        type=float,
        default=1.0,
        help="Exposure for the exposure tone map (default: 1.0)",
    )
    parser.add_argument(
        "--dpi",
        type=int,
        default=DEFAULT_DPI,
        help=f"Pixel density stored in the image (default: {DEFAULT_DPI})",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable info-level logging",
    )
    return parser


def _init_taichi(arch: str) -> None:
    """Initialize the Taichi runtime on the requested backend."""
    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu)


def _with_fov(scene: Scene, fov: float) -> Scene:
    """Replace the scene camera with one using the given field of view."""
    camera = scene.camera
    scene.camera = PinholeCamera.from_fov(
        center=camera.center,
        forward=camera.forward,
        up=camera.up,
        width=camera.width,
        height=camera.height,
        fov=fov,
    )
    return scene


def run(args: argparse.Namespace) -> Path:
    """Build the scene, render it and save the image.

    Returns:
        Path to the saved image file.
    """
    if args.width <= 0 or args.height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {args.width}x{args.height}")

    image_size = (args.width, args.height)
    if args.scene is not None:
        scene = load_scene(args.scene, image_size=image_size)
    else:
        scene = create_reference_scene(args.width, args.height)

    if args.fov is not None:
        scene = _with_fov(scene, args.fov)

    if not args.quiet:
        print(f"Rendering {len(scene.spheres)} sphere(s) at {args.width}x{args.height}...")

    start_time = time.time()
    framebuffer = render_scene(
        scene,
        args.width,
        args.height,
        tone_map=args.tone_map,
        exposure=args.exposure,
    )
    output_file = save_image(framebuffer, args.output, dpi=args.dpi)

    if not args.quiet:
        print(f"Saved to: {output_file.absolute()}")
        print(f"Total time: {time.time() - start_time:.2f}s")

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    _init_taichi(args.arch)

    try:
        run(args)
        return 0
    except (OSError, ValueError) as e:
        logger.debug("Render failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
