#!/usr/bin/env python3
"""
PathForge - A Python Path Tracing Renderer

Main entry point for rendering scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

import numpy as np

from pathforge.renderer import Renderer, RenderSettings
from pathforge.scene_parser import SceneParseError, load_scene
from pathforge.scenes import SCENES, create_random_scene


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='PathForge - A Python Path Tracing Renderer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene demo --output render.png
  python main.py --scene random --width 1200 --height 800 --samples 500 --output cover.png
  python main.py --scene scenes/glass.yaml --seed 42 --output glass.ppm
        '''
    )

    parser.add_argument('--scene', type=str, default='demo',
                        help="Built-in scene (demo, random) or a YAML/JSON scene file (default: demo)")
    parser.add_argument('--width', type=int, default=None, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, default=None, help='Image height (default: 225)')
    parser.add_argument('--samples', type=int, default=None, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, default=None, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, default=None, help='Number of threads (0=auto, default: 1)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--quiet', action='store_true', help='Do not report scanline progress')
    parser.add_argument('--verbose', action='store_true', help='Enable debug logging')
    return parser


def _override(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    """Apply command-line overrides on top of scene-file settings."""
    overrides = {
        'width': args.width,
        'height': args.height,
        'samples_per_pixel': args.samples,
        'max_depth': args.depth,
        'num_threads': args.threads,
        'seed': args.seed,
    }
    values = {
        'width': settings.width,
        'height': settings.height,
        'samples_per_pixel': settings.samples_per_pixel,
        'max_depth': settings.max_depth,
        'num_threads': settings.num_threads,
        'seed': settings.seed,
        't_min': settings.t_min,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})
    return RenderSettings(**values)


def main(argv=None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    print("=" * 60)
    print("PathForge Path Tracer")
    print("=" * 60)

    # Create scene
    print(f"\nCreating scene: {args.scene}")
    try:
        if args.scene in SCENES:
            settings = _override(RenderSettings(), args)
            if args.scene == 'random':
                world, camera = create_random_scene(
                    settings.aspect_ratio, np.random.default_rng(settings.seed)
                )
            else:
                world, camera = SCENES[args.scene](settings.aspect_ratio)
        else:
            world, camera, file_settings = load_scene(args.scene)
            settings = _override(file_settings, args)
    except (SceneParseError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  Objects in scene: {len(world)}")
    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")

    renderer = Renderer(settings)

    if not args.quiet:
        def progress_callback(remaining: int):
            print(f'\rScanlines remaining: {remaining} ', end='', file=sys.stderr, flush=True)

        renderer.set_progress_callback(progress_callback)

    # Render
    print("\nRendering...")
    start_time = time.time()

    image = renderer.render_ldr(world, camera)

    elapsed = time.time() - start_time
    if not args.quiet:
        print(file=sys.stderr)
    print(f"Render completed in {elapsed:.2f} seconds")

    # Ensure output directory exists
    output_path = Path(args.output)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        renderer.save_image(image, str(output_path))
    except (OSError, ValueError) as e:
        print(f"Error: could not write {output_path}: {e}", file=sys.stderr)
        return 1

    print(f"\nSaved to: {output_path}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
