import io
import unittest
import sys
import os
from contextlib import redirect_stdout

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_visualizer.config import MazeConfig
from maze_visualizer.core.grid import Grid, remove_wall_between
from maze_visualizer.algo.solvers import solve_bfs
from maze_visualizer.viz.text import render_text
from maze_visualizer.main import benchmark_solvers, build_parser, config_from_args, main


class TestTextRendering(unittest.TestCase):
    def test_single_cell(self):
        grid = Grid(1, 1)
        grid[0][0].is_start = True
        self.assertEqual(render_text(grid), "+---+\n| S |\n+---+")

    def test_passages_and_path(self):
        grid = Grid(2, 2)
        remove_wall_between(grid[0][0], grid[0][1])
        remove_wall_between(grid[0][1], grid[1][1])
        grid[0][0].is_start = True
        grid[1][1].is_end = True
        solve_bfs(grid, (0, 0), (1, 1))

        expected = "\n".join([
            "+---+---+",
            "| S   * |",
            "+---+   +",
            "|   | E |",
            "+---+---+",
        ])
        self.assertEqual(render_text(grid), expected)


class TestConfig(unittest.TestCase):
    def test_clamp(self):
        config = MazeConfig(width=2, height=80, generation_speed=0, solving_speed=500).clamp()
        self.assertEqual((config.width, config.height), (5, 50))
        self.assertEqual(config.generation_speed, 1)
        self.assertEqual(config.solving_speed, 100)
        self.assertEqual(config.end, (4, 49))

    def test_unknown_algorithm(self):
        with self.assertRaises(ValueError):
            MazeConfig(algorithm="greedy").clamp()

    def test_from_args(self):
        args = build_parser().parse_args(["visual", "--width", "12", "--algo", "dfs", "--solve-speed", "80"])
        config = config_from_args(args)
        self.assertEqual(config.width, 12)
        self.assertEqual(config.height, 25)
        self.assertEqual(config.algorithm, "dfs")
        self.assertEqual(config.solving_speed, 80)
        self.assertFalse(config.record)

    def test_endpoint_clamp(self):
        config = MazeConfig(width=6, height=6, start_point=(-2, 3), end_point=(9, 9)).clamp()
        self.assertEqual(config.start, (0, 3))
        self.assertEqual(config.end, (5, 5))

    def test_endpoints_from_args(self):
        args = build_parser().parse_args(["solve", "--width", "8", "--start", "2", "3", "--end", "7", "0"])
        config = config_from_args(args)
        self.assertEqual(config.start, (2, 3))
        self.assertEqual(config.end, (7, 0))


class TestCli(unittest.TestCase):
    def run_main(self, argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(argv)
        return out.getvalue()

    def test_generate(self):
        text = self.run_main(["generate", "--width", "5", "--height", "5", "--seed", "3"])
        self.assertIn("S", text)
        self.assertIn("E", text)
        self.assertEqual(text.count("\n"), 11)

    def test_solve(self):
        text = self.run_main(["solve", "--width", "6", "--height", "5", "--seed", "3", "--algo", "bfs"])
        self.assertIn("Path Length:", text)
        self.assertIn("Efficiency:", text)

    def test_solve_with_endpoints(self):
        text = self.run_main(["solve", "--width", "5", "--height", "5", "--seed", "3",
                              "--start", "2", "2", "--end", "4", "0"])
        maze = text.split("\n\n")[0].split("\n")
        # Cell (x, y) sits on text row 2y+1, column 4x+2
        self.assertEqual(maze[5][10], "S")
        self.assertEqual(maze[1][18], "E")
        self.assertEqual(text.count("S"), 1)
        self.assertIn("Path Length:", text)

    def test_benchmark_rows(self):
        rows = benchmark_solvers(8, 8, runs=3, seed=10)
        by_algo = {row["algorithm"]: row for row in rows}
        self.assertEqual(set(by_algo), {"astar", "bfs", "dfs"})
        # Perfect mazes have one route, so every solver reports the same length
        self.assertEqual(by_algo["astar"]["path_length"], by_algo["bfs"]["path_length"])
        self.assertEqual(by_algo["dfs"]["path_length"], by_algo["bfs"]["path_length"])
        for row in rows:
            self.assertGreaterEqual(row["explored_nodes"], row["path_length"])


if __name__ == '__main__':
    unittest.main()
