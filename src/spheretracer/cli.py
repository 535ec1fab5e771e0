"""Command-line interface for rendering a preset scene.

Usage:
    spheretracer [options]
    python -m spheretracer [options]

Options:
    --width WIDTH           Image width in pixels (default: 400)
    --height HEIGHT         Image height in pixels (default: width / aspect ratio)
    --aspect-ratio RATIO    Width / height used when --height is omitted (default: 16/9)
    --samples SAMPLES       Number of samples per pixel (default: 100)
    --max-depth DEPTH       Maximum number of bounces per path (default: 50)
    --seed SEED             Random seed (default: 0)
    --scene NAME            Scene preset: default or showcase (default: default)
    --output OUTPUT         Output path, "-" for PPM on stdout (default: -)
    --quiet                 Suppress progress output

Example:
    spheretracer --width 200 --samples 20 > image.ppm
    spheretracer --scene showcase --output showcase.png
"""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from typing import TextIO

import taichi as ti

from spheretracer.config import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SAMPLES_PER_PIXEL,
    DEFAULT_SEED,
    DEFAULT_WIDTH,
    RenderSettings,
)

STDOUT_OUTPUT = "-"
SCENE_NAMES = ("default", "showcase")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="spheretracer",
        description="Render a scene of spheres with a path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=None,
        help="Image height in pixels (default: width / aspect ratio)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=float,
        default=DEFAULT_ASPECT_RATIO,
        help="Width / height used when --height is omitted (default: 16/9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES_PER_PIXEL,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES_PER_PIXEL})",
    )
    parser.add_argument(
        "--max-depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum number of bounces per path (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=DEFAULT_SEED,
        help=f"Random seed (default: {DEFAULT_SEED})",
    )
    parser.add_argument(
        "--scene",
        choices=SCENE_NAMES,
        default="default",
        help="Scene preset (default: default)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default=STDOUT_OUTPUT,
        help='Output path; ".png" writes PNG, "-" writes PPM to stdout (default: -)',
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> RenderSettings:
    """Create RenderSettings from parsed arguments.

    Raises:
        ValueError: If the arguments describe invalid settings.
    """
    common = {
        "samples_per_pixel": args.samples,
        "max_depth": args.max_depth,
        "seed": args.seed,
    }
    if args.height is None:
        return RenderSettings.from_aspect_ratio(args.width, args.aspect_ratio, **common)
    return RenderSettings(width=args.width, height=args.height, **common)


def render_to_output(
    settings: RenderSettings,
    scene_name: str = "default",
    output_path: str = STDOUT_OUTPUT,
    quiet: bool = False,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> None:
    """Render a preset scene and write the image.

    Taichi must already be initialized.

    Args:
        settings: Render settings.
        scene_name: Name of the scene preset.
        output_path: Output path, or "-" to write PPM text to stdout.
        quiet: If True, suppress progress output.
        stdout: Stream for PPM output (defaults to sys.stdout).
        stderr: Stream for progress output (defaults to sys.stderr).
    """
    # Lazy imports to allow Taichi initialization first
    from spheretracer.core.renderer import Renderer
    from spheretracer.preview.export import save_image, write_ppm
    from spheretracer.scene.presets import create_scene

    stdout = stdout if stdout is not None else sys.stdout
    stderr = stderr if stderr is not None else sys.stderr

    create_scene(scene_name)
    renderer = Renderer(settings)

    start_time = time.time()

    def progress_callback(rows_done: int, total_rows: int) -> None:
        if not quiet:
            print(
                f"\rScanlines remaining: {total_rows - rows_done} ",
                end="",
                file=stderr,
                flush=True,
            )

    image = renderer.render(callback=progress_callback)

    if output_path == STDOUT_OUTPUT:
        write_ppm(image, stdout)
        stdout.flush()
    else:
        save_image(image, output_path)

    if not quiet:
        total_time = time.time() - start_time
        print("\nDone.", file=stderr)
        print(f"Total time: {total_time:.2f}s", file=stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    try:
        settings = build_settings(args)
        ti.init(arch=ti.cpu)
        render_to_output(
            settings,
            scene_name=args.scene,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
