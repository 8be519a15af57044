#!/usr/bin/env python3
"""
Applies a Sobel filter to an image.

Usage: sobel_filter.py INPUT OUTPUT [--method loop|vectorized|parallel]
"""
import argparse
import sys

import numpy as np
from PIL import Image, UnidentifiedImageError

import SobelParallel
import SobelSeq

__version__ = "0.1.0"

METHODS = ("loop", "vectorized", "parallel")


class ImageDecodeError(Exception):
    pass


class ImageEncodeError(Exception):
    pass


def load_grayscale(path):
    """Open an image and reduce it to a single luma channel (uint8, H x W)."""
    try:
        with Image.open(path) as img:
            return np.array(img.convert("L"))
    except FileNotFoundError as e:
        raise ImageDecodeError(f"Input file not found: {path}") from e
    except UnidentifiedImageError as e:
        raise ImageDecodeError(f"Unrecognized image format: {path}") from e
    except OSError as e:
        raise ImageDecodeError(f"Failed to open input image file {path}: {e}") from e


def save_grayscale(grid, path):
    """Save a grayscale grid; the format comes from the file extension."""
    try:
        Image.fromarray(np.ascontiguousarray(grid, dtype=np.uint8)).save(path)
    except ValueError as e:
        raise ImageEncodeError(f"Unsupported output format for {path}: {e}") from e
    except OSError as e:
        raise ImageEncodeError(f"Failed to save image to output file {path}: {e}") from e


def run_filter(grid, method="loop", n_jobs=-1, block_rows=None):
    if method == "loop":
        return SobelSeq.apply_filter(grid)
    if method == "vectorized":
        return SobelSeq.apply_filter_vectorized(grid)
    if method == "parallel":
        return SobelParallel.apply_filter(grid, n_jobs=n_jobs, block_rows=block_rows)
    raise ValueError(f"Unknown method: {method}")


def build_parser():
    parser = argparse.ArgumentParser(description="Applies a Sobel filter to an image")
    parser.add_argument("input", metavar="INPUT", help="Input image file to filter")
    parser.add_argument("output", metavar="OUTPUT", help="Output file for the filtered image")
    parser.add_argument("--method", choices=METHODS, default="loop",
                        help="Filter implementation (default: loop)")
    parser.add_argument("--n-jobs", type=int, default=-1,
                        help="Workers for --method parallel (-1 uses all cores)")
    parser.add_argument("--block-rows", type=int, default=None,
                        help="Rows per parallel block (default: automatic)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    try:
        arr = load_grayscale(args.input)
        print(f"Processing image: {arr.shape[0]}x{arr.shape[1]} pixels")
        result = run_filter(arr, args.method, n_jobs=args.n_jobs, block_rows=args.block_rows)
        save_grayscale(result, args.output)
    except (ImageDecodeError, ImageEncodeError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Saved: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
