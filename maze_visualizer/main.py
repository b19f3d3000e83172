import argparse
import sys
import os
import logging
from typing import Dict, List, Optional

# Ensure project root is in path so we can import 'maze_visualizer' package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_visualizer.config import MazeConfig
from maze_visualizer.core.stats import ALGORITHMS, ALGORITHM_NAMES

logger = logging.getLogger("maze_visualizer")


def setup_logging(verbose: bool):
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )


def add_maze_args(parser: argparse.ArgumentParser):
    parser.add_argument("--width", type=int, default=25, help="Maze Width (5-50)")
    parser.add_argument("--height", type=int, default=25, help="Maze Height (5-50)")
    parser.add_argument("--seed", type=int, default=None, help="Random Seed")


def add_endpoint_args(parser: argparse.ArgumentParser):
    parser.add_argument("--start", type=int, nargs=2, metavar=("X", "Y"), default=None, help="Start cell (default: top-left)")
    parser.add_argument("--end", type=int, nargs=2, metavar=("X", "Y"), default=None, help="End cell (default: bottom-right)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Maze Visualizer: generate perfect mazes and watch A*, BFS and DFS solve them")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Generate Command
    gen_parser = subparsers.add_parser("generate", help="Generate a maze and print it")
    add_maze_args(gen_parser)

    # Solve Command
    solve_parser = subparsers.add_parser("solve", help="Generate a maze, solve it and print the result")
    add_maze_args(solve_parser)
    solve_parser.add_argument("--algo", type=str, default="astar", choices=ALGORITHMS, help="Solver algorithm")
    add_endpoint_args(solve_parser)

    # Visual Command
    visual_parser = subparsers.add_parser("visual", help="Open the interactive viewer")
    add_maze_args(visual_parser)
    visual_parser.add_argument("--algo", type=str, default="astar", choices=ALGORITHMS, help="Initial solver algorithm")
    add_endpoint_args(visual_parser)
    visual_parser.add_argument("--gen-speed", type=int, default=10, help="Generation steps per frame (1-50, lower = slower)")
    visual_parser.add_argument("--solve-speed", type=int, default=50, help="Solving animation speed (1-100, higher = faster)")
    visual_parser.add_argument("--record", action="store_true", help="Record the session to mp4")

    # Benchmark Command
    bench_parser = subparsers.add_parser("benchmark", help="Race the solvers over several mazes")
    add_maze_args(bench_parser)
    bench_parser.add_argument("--runs", type=int, default=10, help="Number of mazes to average over")

    return parser


def config_from_args(args) -> MazeConfig:
    config = MazeConfig(width=args.width, height=args.height, seed=args.seed)
    if hasattr(args, "algo"):
        config.algorithm = args.algo
    if getattr(args, "start", None):
        config.start_point = tuple(args.start)
    if getattr(args, "end", None):
        config.end_point = tuple(args.end)
    if hasattr(args, "gen_speed"):
        config.generation_speed = args.gen_speed
        config.solving_speed = args.solve_speed
        config.record = args.record
    return config.clamp()


def benchmark_solvers(width: int, height: int, runs: int, seed: Optional[int] = None) -> List[Dict]:
    """
    Solves `runs` mazes with every algorithm and returns one averaged row per
    algorithm. Maze i uses seed (seed + i) so every algorithm sees the same mazes.
    """
    from maze_visualizer.algo.dfs import generate_maze
    from maze_visualizer.algo.solvers import solve

    base = seed if seed is not None else 0
    totals = {name: {"path": 0, "explored": 0, "time": 0.0, "efficiency": 0} for name in ALGORITHMS}

    for i in range(runs):
        grid = generate_maze(width, height, seed=base + i)
        start, end = (0, 0), (width - 1, height - 1)
        for name in ALGORITHMS:
            # Solvers reset the search fields themselves, so the grid is reused
            stats = solve(grid, start, end, algorithm=name, seed=base + i).stats
            totals[name]["path"] += stats.path_length
            totals[name]["explored"] += stats.explored_nodes
            totals[name]["time"] += stats.execution_time
            totals[name]["efficiency"] += stats.efficiency

    return [
        {
            "algorithm": name,
            "path_length": t["path"] / runs,
            "explored_nodes": t["explored"] / runs,
            "time_ms": t["time"] / runs,
            "efficiency": t["efficiency"] / runs,
        }
        for name, t in totals.items()
    ]


def print_benchmark(rows: List[Dict]):
    print(f"\n{'ALGORITHM':<22} | {'PATH LEN':<9} | {'EXPLORED':<9} | {'TIME (ms)':<10} | {'EFF %':<6}")
    print("-" * 68)
    for row in rows:
        print(f"{ALGORITHM_NAMES[row['algorithm']]:<22} | {row['path_length']:<9.1f} | "
              f"{row['explored_nodes']:<9.1f} | {row['time_ms']:<10.3f} | {row['efficiency']:<6.1f}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        return

    config = config_from_args(args)
    logger.info(f"Running command: {args.command}")

    if args.command == "generate":
        from maze_visualizer.algo.dfs import generate_maze
        from maze_visualizer.viz.text import render_text

        logger.info(f"Generating {config.width}x{config.height} maze...")
        grid = generate_maze(config.width, config.height, seed=config.seed)
        print(render_text(grid))

    elif args.command == "solve":
        from maze_visualizer.algo.dfs import generate_maze
        from maze_visualizer.algo.solvers import solve
        from maze_visualizer.viz.text import render_text

        grid = generate_maze(config.width, config.height, seed=config.seed)
        grid.set_roles(config.start, config.end)
        logger.info(f"Solving with {config.algorithm.upper()} from {config.start} to {config.end}...")
        result = solve(grid, config.start, config.end, algorithm=config.algorithm, seed=config.seed)

        print(render_text(grid))
        stats = result.stats
        if result.found:
            print(f"\nDone. Path Length: {stats.path_length}")
        else:
            print("\nNo solution found.")
        print(f"Explored: {stats.explored_nodes} | Time: {stats.execution_time:.2f}ms | Efficiency: {stats.efficiency}%")

    elif args.command == "visual":
        from maze_visualizer.session import MazeSession
        from maze_visualizer.viz.renderer import Renderer

        logger.info("Visual mode enabled - Opening window...")
        session = MazeSession(config.width, config.height, seed=config.seed)
        renderer = Renderer(session, config)
        renderer.init_window()
        renderer.request_generation()
        renderer.run_loop()

    elif args.command == "benchmark":
        if args.runs < 1:
            parser.error("--runs must be at least 1")
        logger.info(f"Running Solver Benchmark ({config.width}x{config.height}, {args.runs} mazes)...")
        print_benchmark(benchmark_solvers(config.width, config.height, args.runs, config.seed))


if __name__ == "__main__":
    main()
