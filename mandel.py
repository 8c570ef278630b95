import os
import sys
import time
import warnings
from dataclasses import dataclass
from pathlib import Path

_VERBOSE_FLAGS = {"--verbose", "-v"}
_cli_verbose = any(arg in _VERBOSE_FLAGS for arg in sys.argv[1:])
_env_log_level = os.environ.get("TF_CPP_MIN_LOG_LEVEL")
_suppress_messages = (not _cli_verbose) and _env_log_level != "0"

if _suppress_messages and _env_log_level is None:
    os.environ["TF_CPP_MIN_LOG_LEVEL"] = "3"

if _suppress_messages:
    warnings.filterwarnings(
        "ignore",
        message=r"Protobuf gencode version .* is exactly one major version older than the runtime version .*",
        category=UserWarning,
        module="google.protobuf",
    )

VERBOSE = _cli_verbose


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


import tensorflow as tf

if _suppress_messages:
    tf.get_logger().setLevel("ERROR")
    for handler in tf.get_logger().handlers:
        handler.setLevel("ERROR")

from argparse import ArgumentParser

from mandelbands import (
    BACKENDS,
    RasterBounds,
    parse_bounds,
    parse_complex,
    partition,
    render_bands,
    write_image,
)

import numpy as np

USAGE_EXAMPLE = "mandel.py mandel.png 1000x750 -1.20,0.35 -1,0.20 8"


@dataclass(frozen=True)
class RenderConfig:
    output: Path
    bounds: RasterBounds
    upper_left: complex
    lower_right: complex
    threads: int
    backend: str
    image_format: str | None


POSITIONALS = ("FILE", "PIXELS", "UPPERLEFT", "LOWERRIGHT", "THREADS")


def build_parser():
    # The positionals are collected from the leftovers of parse_known_args:
    # argparse takes coordinates such as "-1.20,0.35" for unknown options.
    parser = ArgumentParser(
        prog="mandel.py",
        usage="%(prog)s [-h] [--backend {python,tensorflow}] [--format FORMAT] [-v] " + " ".join(POSITIONALS),
        description="Render a grayscale image of the Mandelbrot set using several threads.",
        epilog=(
            "positional arguments: FILE is the image to write, PIXELS its size as WIDTHxHEIGHT, "
            "UPPERLEFT and LOWERRIGHT the corners as RE,IM and THREADS the number of horizontal bands. "
            f"Example: {USAGE_EXAMPLE}"
        ),
    )

    parser.add_argument('--backend', choices=BACKENDS, default='python',
                        help='per-pixel "python" loop or vectorised "tensorflow" loop inside each band.')
    parser.add_argument('--format', type=str, dest='format', default=None, metavar='FORMAT',
                        help='file format for the image. Any format supported by Pillow. Default: taken from FILE, else "png".')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Enable verbose logging, including TensorFlow diagnostics.')

    return parser


def resolve_render_config(opt, positionals: list[str], parser: ArgumentParser) -> RenderConfig:
    unknown = [arg for arg in positionals if arg.startswith("--")]
    if unknown:
        parser.error(f"unrecognized arguments: {' '.join(unknown)}")
    if len(positionals) != len(POSITIONALS):
        parser.error(f"expected {len(POSITIONALS)} positional arguments, got {len(positionals)}")

    file_arg, pixels_arg, upper_left_arg, lower_right_arg, threads_arg = positionals

    bounds = parse_bounds(pixels_arg)
    if bounds is None or bounds.width <= 0 or bounds.height <= 0:
        parser.error(f"error parsing image dimensions '{pixels_arg}'")

    upper_left = parse_complex(upper_left_arg)
    if upper_left is None:
        parser.error(f"error parsing upper left value '{upper_left_arg}'")

    lower_right = parse_complex(lower_right_arg)
    if lower_right is None:
        parser.error(f"error parsing lower right value '{lower_right_arg}'")

    try:
        threads = int(threads_arg)
    except ValueError:
        threads = 0
    if threads <= 0:
        parser.error(f"error parsing number of threads '{threads_arg}'")

    image_format = (opt.format or "").lower().lstrip(".") or None

    return RenderConfig(
        output=Path(file_arg).expanduser(),
        bounds=bounds,
        upper_left=upper_left,
        lower_right=lower_right,
        threads=threads,
        backend=opt.backend,
        image_format=image_format,
    )


def main(argv=None):
    parser = build_parser()
    opt, positionals = parser.parse_known_args(argv)

    global VERBOSE
    VERBOSE = VERBOSE or bool(opt.verbose)

    config = resolve_render_config(opt, positionals, parser)
    log("TensorFlow version: %s" % tf.__version__)

    bounds = config.bounds
    bands = partition(bounds, config.upper_left, config.lower_right, config.threads)
    for index, band in enumerate(bands):
        log("band {0}: rows {1}-{2} ({3} rows) from {4} to {5}".format(
            index, band.start_row, band.stop_row, band.row_count,
            band.sub_viewport.upper_left, band.sub_viewport.lower_right))

    start = time.perf_counter()
    pixels = np.zeros(bounds.size, dtype=np.uint8)
    render_bands(pixels, bounds, bands, backend=config.backend)
    log("rendered {0}x{1} pixels on {2} threads in {3:.3f}s".format(
        bounds.width, bounds.height, config.threads, time.perf_counter() - start))

    try:
        write_image(pixels, bounds, config.output, config.image_format)
    except (OSError, ValueError) as exc:
        print(f"error writing image file: {exc}", file=sys.stderr)
        return 1

    log("wrote %s" % config.output)
    return 0


if __name__ == '__main__':
    sys.exit(main())
