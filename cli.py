"""
Command-line interface: run one named operation on one or two images
"""

import argparse
import logging
import sys
from typing import List, Optional

import yaml

from image_codec import load_image, save_image
from img_errors import ImageOpsError
from operations import OPERATIONS, run_operation
from settings import load_config

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ops = "\n".join(f"  {op.name:<20}{op.description}" for op in OPERATIONS.values())
    parser = argparse.ArgumentParser(
        prog='img-ops',
        description='Pixel-matrix image operations',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Operations:
{ops}

Examples:
  img-ops add a.png b.png -o sum.png
  img-ops blend a.png b.png --factor 0.3 -o mix.png
  img-ops gaussian photo.jpg --size 5 --sigma 1.4 -o soft.png
        """
    )

    parser.add_argument('operation', choices=sorted(OPERATIONS), metavar='OPERATION',
                        help='Operation to run (see list below)')
    parser.add_argument('inputs', nargs='+', metavar='INPUT',
                        help='Input image file(s)')
    parser.add_argument('--output', '-o', required=True,
                        help='Output image file (format from extension, PNG by default)')

    # Operation parameters
    parser.add_argument('--factor', '-f', type=float, default=None,
                        help='Blend, scale or divide factor')
    parser.add_argument('--size', type=int, default=None,
                        help='Mask size (positive odd integer)')
    parser.add_argument('--sigma', type=float, default=None,
                        help='Gaussian standard deviation')
    parser.add_argument('--rank', type=int, default=None,
                        help='Order-statistic rank (0 = minimum)')
    parser.add_argument('--width', type=int, default=None,
                        help='Resize target width')
    parser.add_argument('--height', type=int, default=None,
                        help='Resize target height')

    # Configuration
    parser.add_argument('--config', '-c', default=None,
                        help='Configuration YAML file (default: built-in settings)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Suppress non-error output')
    return parser


def _level_from_name(name) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logging(args, default_level: str = 'INFO') -> None:
    """Configure the root logger from CLI flags, falling back to default_level."""
    if args.quiet:
        level = logging.ERROR
    elif args.verbose:
        level = logging.DEBUG
    else:
        level = _level_from_name(default_level)

    # stderr is reserved for the single error line main() prints
    logging.basicConfig(
        stream=sys.stdout,
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args)

    try:
        config = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    if not (args.quiet or args.verbose):
        logging.getLogger().setLevel(_level_from_name(config["logging"]["level"]))

    try:
        images = [load_image(p, config['limits']['max_input_bytes']) for p in args.inputs]
        result = run_operation(
            args.operation, images, config,
            factor=args.factor, size=args.size, sigma=args.sigma,
            rank=args.rank, width=args.width, height=args.height,
        )
        save_image(result, args.output)
    except ImageOpsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info(f"Wrote {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
