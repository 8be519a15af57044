#!/usr/bin/env python3
"""
Benchmark script to compare the Sobel filter implementations.
"""
import numpy as np
from PIL import Image
import multiprocessing
import matplotlib.pyplot as plt

import SobelSeq
import SobelParallel

IMPLEMENTATIONS = ('loop', 'vectorized', 'parallel')


def make_test_image(size, seed=0):
    """Deterministic grayscale test image: gradient, a bright square and some noise."""
    rng = np.random.default_rng(seed)
    _, xx = np.mgrid[0:size, 0:size]
    img = (xx * 255.0 / max(size - 1, 1)) * 0.5
    q = size // 4
    img[q:3 * q, q:3 * q] = 255
    img += rng.normal(0, 8, (size, size))
    return np.clip(img, 0, 255).astype(np.uint8)


def _time_runs(fn, n_runs):
    times = []
    result = None
    for i in range(n_runs):
        result, elapsed = fn()
        times.append(elapsed)
        print(f"Run {i+1}: {elapsed:.4f} seconds")
    avg = float(np.mean(times))
    print(f"Average: {avg:.4f} ± {np.std(times):.4f} seconds")
    return result, avg


def benchmark_filter(arr, n_runs=3, n_jobs=-1):
    """Run benchmark comparing all versions. Returns {name: (result, avg_seconds)}."""
    print(f"Image size: {arr.shape[0]}x{arr.shape[1]} pixels")
    print(f"Number of runs: {n_runs}")
    print(f"CPU cores: {multiprocessing.cpu_count()}")
    print("=" * 70)

    results = {}

    print("\n1. SEQUENTIAL VERSION (per-pixel loop)")
    print("-" * 70)
    results['loop'] = _time_runs(
        lambda: SobelSeq.apply_filter_timed(arr), n_runs)

    print("\n2. VECTORIZED VERSION (sliding window + einsum)")
    print("-" * 70)
    results['vectorized'] = _time_runs(
        lambda: SobelSeq.apply_filter_timed(arr, vectorized=True), n_runs)

    print("\n3. PARALLEL VERSION (row blocks)")
    print("-" * 70)
    results['parallel'] = _time_runs(
        lambda: SobelParallel.apply_filter_timed(arr, n_jobs=n_jobs), n_runs)

    # Summary
    base = results['loop'][1]
    print("\n" + "=" * 70)
    print("SUMMARY")
    print("=" * 70)
    for name in IMPLEMENTATIONS:
        avg = results[name][1]
        speedup = base / avg if avg > 0 else float('inf')
        print(f"{name:<12} {avg:.4f}s  ({speedup:.2f}x)")

    # Verify results against the per-pixel loop
    print("\n" + "=" * 70)
    print("VERIFICATION")
    print("=" * 70)
    ref = results['loop'][0].astype(float)
    for name in ('vectorized', 'parallel'):
        diff = np.abs(ref - results[name][0].astype(float)).max() if ref.size else 0.0
        print(f"Max difference (loop vs {name}):  {diff}")

    return results


def plot_benchmark_results(results, out_path='benchmark_sobel.png'):
    """Bar chart of average execution time per implementation."""
    names = [n for n in IMPLEMENTATIONS if n in results]
    times_ms = [results[n][1] * 1000 for n in names]
    colors = {'loop': '#87CEEB', 'vectorized': '#2E86AB', 'parallel': '#A23B72'}

    fig, ax = plt.subplots(figsize=(8, 5))
    bars = ax.bar(names, times_ms, color=[colors[n] for n in names], alpha=0.8)
    for bar in bars:
        height = bar.get_height()
        ax.text(bar.get_x() + bar.get_width()/2., height, f'{height:.1f}',
                ha='center', va='bottom', fontsize=8)

    ax.set_ylabel('Time (ms)', fontsize=11, fontweight='bold')
    ax.set_title('Sobel Filter Benchmark', fontsize=12, fontweight='bold')
    ax.grid(True, alpha=0.3, axis='y')
    fig.savefig(out_path, dpi=100, bbox_inches='tight')
    plt.close(fig)
    return out_path


if __name__ == "__main__":
    # Configuration
    input_path = None  # None = synthetic image
    image_size = 256
    n_runs = 3

    print("=" * 70)
    print("SOBEL BENCHMARK: Sequential vs Vectorized vs Parallel")
    print("=" * 70)

    if input_path is None:
        arr = make_test_image(image_size)
    else:
        arr = np.array(Image.open(input_path).convert("L"))

    results = benchmark_filter(arr, n_runs=n_runs)

    for name in IMPLEMENTATIONS:
        Image.fromarray(results[name][0]).save(f"output_{name}.png")
    print(f"\n✓ Chart saved to {plot_benchmark_results(results)}")
