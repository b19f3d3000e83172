import sys
import os
import time
import argparse

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_visualizer.main import benchmark_solvers, print_benchmark

# ==========================================
# GLOBAL CONFIGURATION
# Square maze sizes raced by default. The core has no upper bound; the
# viewer stops at 50.
# ==========================================
DEFAULT_SIZES = [5, 10, 25, 50, 100]


def run_benchmark():
    parser = argparse.ArgumentParser(description="Solver Benchmark")
    parser.add_argument("--sizes", type=int, nargs="+", default=DEFAULT_SIZES, help="Square maze sizes to race")
    parser.add_argument("--runs", type=int, default=20, help="Mazes per size")
    parser.add_argument("--seed", type=int, default=0, help="Base Random Seed")
    args = parser.parse_args()

    print(f"=== MAZE SOLVER BENCHMARK ===")
    print(f"Sizes: {', '.join(str(s) for s in args.sizes)} | Runs per size: {args.runs}")
    print("-" * 50)

    for size in args.sizes:
        t0 = time.time()
        rows = benchmark_solvers(size, size, args.runs, seed=args.seed)
        print(f"\n[{size}x{size}] ({time.time() - t0:.2f}s wall)")
        print_benchmark(rows)


if __name__ == "__main__":
    run_benchmark()
