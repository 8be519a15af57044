#!/usr/bin/env python3
"""
Sequential Sobel edge filter.
Per-pixel reference driver plus a vectorized variant (sliding window view + einsum).
"""
import math
import time
import cProfile
import pstats
import io

import numpy as np
from PIL import Image

# Sobel kernels (first index follows the x offset of the window)
SOBEL_KERNEL_X = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=float)
SOBEL_KERNEL_Y = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=float)
SOBEL_KERNEL_X.flags.writeable = False
SOBEL_KERNEL_Y.flags.writeable = False

# Fixed divisor, not derived from the kernels
SOBEL_NORMALIZATION = 8.0


def _clamp(value, low, high):
    return max(low, min(value, high))


def get_pixel_extended(grid, x, y):
    """Read grid[y, x] as a value in [0, 1], clamping (x, y) to the nearest edge pixel."""
    h, w = grid.shape
    return float(grid[_clamp(y, 0, h - 1), _clamp(x, 0, w - 1)]) / 255.0


def put_pixel_extended(grid, x, y, value):
    """Write a [0, 1] value into grid[y, x] as uint8.

    Coordinates are clamped like get_pixel_extended. The 8-bit conversion
    saturates into [0, 255] and then truncates toward zero (no rounding).
    """
    h, w = grid.shape
    grid[_clamp(y, 0, h - 1), _clamp(x, 0, w - 1)] = int(_clamp(value * 255.0, 0.0, 255.0))


def build_window(grid, x, y):
    """3x3 window of normalized samples centered on (x, y)."""
    return [
        [get_pixel_extended(grid, x + dx, y + dy) for dy in (-1, 0, 1)]
        for dx in (-1, 0, 1)
    ]


def convolve(kernel, window):
    acc = 0.0
    for kernel_row, window_row in zip(kernel, window):
        for k, v in zip(kernel_row, window_row):
            acc += float(k) * v
    return acc / SOBEL_NORMALIZATION


def gradient_magnitude(gx, gy):
    return math.sqrt(gx * gx + gy * gy)


def sobel_pixel(grid, x, y):
    """Edge strength at (x, y), before the 8-bit conversion."""
    window = build_window(grid, x, y)
    gx = convolve(SOBEL_KERNEL_X, window)
    gy = convolve(SOBEL_KERNEL_Y, window)
    return gradient_magnitude(gx, gy)


def check_grid(grid):
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ValueError(f"Expected a 2-D grayscale grid, got shape {grid.shape}")
    if grid.dtype == np.uint8:
        return grid
    if not (np.issubdtype(grid.dtype, np.integer) or grid.dtype == np.bool_):
        raise ValueError(f"Expected 8-bit integer samples, got dtype {grid.dtype}")
    return np.clip(grid, 0, 255).astype(np.uint8)


def apply_filter(grid):
    """Apply the Sobel operator to a whole grayscale image.

    Returns a new uint8 array with the same shape; the input is left untouched.
    """
    grid = check_grid(grid)
    out = grid.copy()
    h, w = grid.shape

    # Classic double loop over each output pixel
    for y in range(h):
        for x in range(w):
            put_pixel_extended(out, x, y, sobel_pixel(grid, x, y))

    return out


def apply_filter_vectorized(grid):
    """Same operator computed on all windows at once."""
    grid = check_grid(grid)
    h, w = grid.shape
    if h == 0 or w == 0:
        return grid.copy()

    # Edge padding is clamp-to-edge extension
    padded = np.pad(grid.astype(float) / 255.0, 1, mode="edge")
    # windows[y, x] is indexed [dy, dx], so the kernels are transposed
    windows = np.lib.stride_tricks.sliding_window_view(padded, (3, 3))
    gx = np.einsum("ijkl,lk->ij", windows, SOBEL_KERNEL_X) / SOBEL_NORMALIZATION
    gy = np.einsum("ijkl,lk->ij", windows, SOBEL_KERNEL_Y) / SOBEL_NORMALIZATION
    mag = np.sqrt(gx ** 2 + gy ** 2)

    return np.clip(mag * 255.0, 0, 255).astype(np.uint8)


def apply_filter_timed(grid, vectorized=False):
    """Run the filter and return (result, elapsed_seconds) measured inside this module."""
    fn = apply_filter_vectorized if vectorized else apply_filter
    t0 = time.perf_counter()
    out = fn(grid)
    t1 = time.perf_counter()
    return out, (t1 - t0)


if __name__ == "__main__":
    # Configuration
    input_path = "place.png"
    output_path = "output_sobel.png"

    img = Image.open(input_path).convert("L")
    arr = np.array(img)

    profiler = cProfile.Profile()
    profiler.enable()

    result = apply_filter(arr)

    profiler.disable()

    Image.fromarray(result).save(output_path)
    print(f"Saved: {output_path}")

    s = io.StringIO()
    stats = pstats.Stats(profiler, stream=s).sort_stats('cumulative')
    stats.print_stats(20)
    print("\n=== Profiling Results ===")
    print(s.getvalue())
