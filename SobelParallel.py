#!/usr/bin/env python3
"""
Parallel Sobel edge filter using joblib.
Rows are split into blocks; every block reads the shared input and owns its own output rows.
"""
import multiprocessing
import time

import numpy as np
from PIL import Image
from joblib import Parallel, delayed, effective_n_jobs

from SobelSeq import check_grid, put_pixel_extended, sobel_pixel


def process_rows(grid, start_y, end_y):
    """Filter rows [start_y, end_y) of the image."""
    h, w = grid.shape
    out = np.zeros((end_y - start_y, w), dtype=np.uint8)

    for y in range(start_y, end_y):
        for x in range(w):
            put_pixel_extended(out, x, y - start_y, sobel_pixel(grid, x, y))

    return start_y, end_y, out


def make_row_blocks(height, block_rows):
    if block_rows < 1:
        raise ValueError(f"block_rows must be >= 1, got {block_rows}")
    return [(i, min(i + block_rows, height)) for i in range(0, height, block_rows)]


def default_block_rows(height, n_jobs):
    n_cores = effective_n_jobs(n_jobs)
    # Aim for ~4 blocks per core for better load balancing
    total_blocks = n_cores * 4
    return max(1, -(-height // total_blocks))


def apply_filter(grid, n_jobs=-1, block_rows=None, prefer=None):
    grid = check_grid(grid)
    out = grid.copy()
    h, w = grid.shape
    if h == 0 or w == 0:
        return out

    if block_rows is None:
        block_rows = default_block_rows(h, n_jobs)
    blocks = make_row_blocks(h, block_rows)

    results = Parallel(n_jobs=n_jobs, prefer=prefer)(
        delayed(process_rows)(grid, start_y, end_y) for start_y, end_y in blocks
    )

    # Assemble results into output array
    for start_y, end_y, block_result in results:
        out[start_y:end_y, :] = block_result

    return out


def apply_filter_timed(grid, n_jobs=-1, block_rows=None, prefer=None):
    """Run apply_filter() and return (result, elapsed_seconds) measured inside this module."""
    t0 = time.perf_counter()
    out = apply_filter(grid, n_jobs=n_jobs, block_rows=block_rows, prefer=prefer)
    t1 = time.perf_counter()
    return out, (t1 - t0)


if __name__ == "__main__":
    # Configuration
    input_path = "banana.png"
    output_path = "output_sobel_parallel.png"
    n_jobs = -1  # -1 uses all available cores
    block_rows = None  # None = automatic, or set manually (e.g., 16, 64)

    img = Image.open(input_path).convert("L")
    arr = np.array(img)

    print(f"Processing image: {arr.shape[0]}x{arr.shape[1]} pixels")
    print(f"CPU cores: {multiprocessing.cpu_count()}")

    result = apply_filter(arr, n_jobs=n_jobs, block_rows=block_rows)

    Image.fromarray(result).save(output_path)
    print(f"Saved: {output_path}")
