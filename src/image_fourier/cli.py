"""Command-line entry point.

Usage:
    image-fourier fourier --input image.png --output filtered.png
    image-fourier fourier --input image.png --output filtered.png --filter-type band \\
        --low-cutoff 0.2 --high-cutoff 0.6
    image-fourier fourier --input image.png --output filtered.png --config params.json
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import matplotlib

# Figures are only ever written to disk
matplotlib.use("Agg")

from image_fourier.errors import FourierError
from image_fourier.fourier_image import FILTER_TYPES, FourierImage
from image_fourier.parameters import FourierParameters, load_parameters
from image_fourier.visualization import plot_fourier_overview

logger = logging.getLogger(__name__)

__all__ = ['FourierArgumentParser', 'build_parser', 'resolve_parameters', 'run_fourier', 'main']


class FourierArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit with status 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = FourierArgumentParser(
        prog="image-fourier",
        description="Educational image processing: direct 2D DFT and frequency-domain filtering",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log pipeline progress (INFO level)",
    )
    subparsers = parser.add_subparsers(dest="mode", required=True)

    fourier = subparsers.add_parser(
        "fourier",
        help="Filter an image in the frequency domain",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The transform is computed directly (no FFT): O(N^3) for an N x N image.
Keep inputs to a few hundred pixels per side.

Filter types:
  low   keep frequencies inside HIGH_CUTOFF
  high  remove frequencies inside LOW_CUTOFF
  band  keep frequencies between LOW_CUTOFF and HIGH_CUTOFF
        """,
    )
    fourier.add_argument("--input", required=True, help="Path to the input image")
    fourier.add_argument("--output", required=True, help="Path for the filtered image")
    fourier.add_argument(
        "--config",
        default=None,
        help="JSON parameter file (FILTER_TYPE, LOW_CUTOFF, HIGH_CUTOFF, ...)",
    )
    fourier.add_argument(
        "--filter-type",
        choices=FILTER_TYPES,
        default=None,
        help="Filter type (default: low)",
    )
    fourier.add_argument(
        "--low-cutoff",
        type=float,
        default=None,
        help="Lower cutoff, relative to half the smaller side (default: 0.5)",
    )
    fourier.add_argument(
        "--high-cutoff",
        type=float,
        default=None,
        help="Upper cutoff, relative to half the smaller side (default: 0.9)",
    )
    fourier.add_argument(
        "--progress",
        dest="show_fourier_progress",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Show progress bars while transforming (default: on)",
    )
    fourier.add_argument(
        "--show-images",
        dest="show_fourier_transform_images",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Also save a magnitude/phase overview next to the output (default: on)",
    )
    return parser


def resolve_parameters(args: argparse.Namespace) -> FourierParameters:
    """Combine defaults, the optional parameter file and command-line overrides."""
    params = load_parameters(args.config) if args.config else FourierParameters()

    overrides = {
        name: getattr(args, name)
        for name in (
            "filter_type",
            "low_cutoff",
            "high_cutoff",
            "show_fourier_progress",
            "show_fourier_transform_images",
        )
        if getattr(args, name) is not None
    }
    if overrides:
        params = FourierParameters(**{**params.to_dict(), **overrides})
    return params


def run_fourier(args: argparse.Namespace) -> Path:
    """
    Run the fourier mode: transform, filter, invert, save.

    Returns:
        Path of the filtered image
    """
    params = resolve_parameters(args)
    logger.info(f"Fourier parameters: {params}")

    fourier = FourierImage.load(args.input)
    logger.info(f"Loaded {args.input}: {fourier.width}x{fourier.height}, {fourier.channels} channel(s)")

    fourier.apply_transform(show_progress=params.show_fourier_progress)
    fourier.apply_filter(params.filter_type, params.low_cutoff, params.high_cutoff)
    result = fourier.apply_inverse_transform(show_progress=params.show_fourier_progress)

    output_path = result.save(args.output)
    print(f"Filtered image saved to: {output_path}")

    if params.show_fourier_transform_images:
        overview_path = output_path.with_name(f"{output_path.stem}_fourier.png")
        plot_fourier_overview(
            fourier,
            result,
            output_path=overview_path,
            title=f"{Path(args.input).name}: {params.filter_type}-pass filter",
        )
        print(f"Fourier overview saved to: {overview_path}")

    return output_path


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments, run the selected mode and return the exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        if args.mode == "fourier":
            run_fourier(args)
    except (FourierError, OSError, ValueError) as e:
        logger.error(f"{args.mode} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
