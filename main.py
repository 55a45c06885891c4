#!/usr/bin/env python3
"""
facetrace - a brute-force ray caster

Main entry point for rendering the built-in scenes.
"""

import argparse
import logging
import sys

from facetrace.camera import MAX_THREADS
from facetrace.errors import UnknownSceneError
from facetrace.renderer import Renderer, RenderSettings
from facetrace.scenes import SCENE_GENERATORS


def thread_count(value: str) -> int:
    """argparse type for --threads: an integer in [1, 1024)."""
    try:
        count = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid thread count: {value!r}")
    if not 1 <= count < MAX_THREADS:
        raise argparse.ArgumentTypeError(
            f"thread-count has to be a positive integer in [1, {MAX_THREADS})")
    return count


def positive_float(value: str) -> float:
    try:
        result = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if result <= 0:
        raise argparse.ArgumentTypeError("must be positive")
    return result


def build_parser() -> argparse.ArgumentParser:
    scene_names = '\n'.join(f'  {name}' for name in SCENE_GENERATORS)
    parser = argparse.ArgumentParser(
        prog='facetrace',
        description='facetrace - a brute-force ray caster',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f'''
scene names:
{scene_names}

Examples:
  python main.py basic
  python main.py --threads 8 --scale 0.2 --output sphere.png sphere
        '''
    )

    parser.add_argument('scene', nargs='?', help='Scene to render')
    parser.add_argument('--threads', type=thread_count, default=12,
                        help=f'Number of render threads in [1, {MAX_THREADS}) (default: 12)')
    parser.add_argument('--output', type=str, default='output/render.bmp',
                        help='Output filename (default: output/render.bmp)')
    parser.add_argument('--scale', type=positive_float, default=1.0,
                        help='Multiply the scene\'s image size by this factor (default: 1.0)')
    parser.add_argument('--trace', action='store_true',
                        help='Log every incidence test (slow, very verbose)')
    parser.add_argument('--list', action='store_true', help='List scene names and exit')
    parser.add_argument('-v', '--verbose', action='store_true', help='Debug logging')
    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list:
        for name in SCENE_GENERATORS:
            print(name)
        return 0

    if args.scene is None:
        parser.print_usage(sys.stderr)
        return 1

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or args.trace) else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s',
    )

    settings = RenderSettings(
        scene=args.scene,
        thread_count=args.threads,
        output=args.output,
        scale=args.scale,
        trace=args.trace,
    )
    renderer = Renderer(settings)

    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    try:
        bitmap = renderer.render()
    except UnknownSceneError as e:
        print(e, file=sys.stderr)
        parser.print_help(sys.stderr)
        return 1
    print()

    renderer.save_image(bitmap)
    print(f"Finished rendering: {settings.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
