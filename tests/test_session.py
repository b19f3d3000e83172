import math
import unittest
import sys
import os
from unittest import mock

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from maze_visualizer.core.errors import MazeContractError
from maze_visualizer.core.events import GenerationFrame, SolveFrame, PHASE_EXPLORE
from maze_visualizer.core.grid import Grid
from maze_visualizer.algo.solvers import MazeSolver
from maze_visualizer.session import MazeSession


class TestSession(unittest.TestCase):
    def test_full_cycle(self):
        session = MazeSession(seed=5)
        self.assertTrue(session.generate(8, 6, speed=3))
        self.assertTrue(session.is_generated)
        self.assertFalse(session.is_generating)
        self.assertEqual((session.width, session.height), (8, 6))
        self.assertEqual(session.end, (7, 5))
        self.assertTrue(session.grid[0][0].is_start)

        self.assertTrue(session.solve("bfs", speed=100))
        self.assertTrue(session.is_solved)
        self.assertFalse(session.is_solving)
        self.assertIsNotNone(session.stats)
        self.assertEqual(session.stats.algorithm, "bfs")
        self.assertEqual(session.stats.path_length, len(session.current_path))
        self.assertEqual(session.current_path[0].coord, (0, 0))
        self.assertEqual(session.current_path[-1].coord, (7, 5))
        self.assertIsNone(session.currently_exploring)
        self.assertEqual(session.queued_cells, [])
        # Session ends up on the live grid, not a snapshot
        self.assertIs(session.current_path[0], session.grid[0][0])

        self.assertTrue(session.reset())
        self.assertFalse(session.is_solved)
        self.assertIsNone(session.stats)
        self.assertEqual(session.current_path, [])
        self.assertFalse(any(c.is_path for c in session.grid.cells()))
        self.assertTrue(all(c.distance == math.inf for c in session.grid.cells()))

        # Solvable again after a reset
        self.assertTrue(session.solve("astar"))
        self.assertTrue(session.is_solved)

    def test_solve_requires_generated_maze(self):
        session = MazeSession()
        self.assertFalse(session.solve("astar"))
        self.assertFalse(session.is_solving)

    def test_no_second_solve_until_reset(self):
        session = MazeSession(seed=1)
        session.generate(5, 5)
        self.assertTrue(session.solve("dfs"))
        self.assertFalse(session.solve("bfs"))
        self.assertEqual(session.stats.algorithm, "dfs")

    def test_reentrant_requests_are_dropped(self):
        session = MazeSession(seed=2)
        self.assertTrue(session.begin_generation(6, 6, speed=1))
        self.assertIsInstance(session.advance(), GenerationFrame)

        self.assertFalse(session.begin_generation(10, 10))
        self.assertFalse(session.begin_solve("bfs"))
        self.assertFalse(session.reset())
        self.assertEqual(session.width, 6)

        while session.advance() is not None:
            pass
        self.assertTrue(session.is_generated)

        self.assertTrue(session.begin_solve("bfs"))
        self.assertFalse(session.begin_solve("astar"))
        self.assertFalse(session.reset())

    def test_stepping_mirrors_frames(self):
        session = MazeSession(seed=3)
        session.generate(5, 5)
        session.begin_solve("astar", speed=50)

        frame = session.advance()
        self.assertIsInstance(frame, SolveFrame)
        self.assertIs(session.grid, frame.grid)
        self.assertEqual(session.currently_exploring.coord, (0, 0))
        self.assertEqual(session.explored_cells, [])

        frame = session.advance()
        self.assertEqual(len(session.explored_cells), 1)
        self.assertTrue(session.is_solving)

        while session.advance() is not None:
            pass
        self.assertTrue(session.is_solved)
        self.assertIsNone(session.advance())

    def test_invalid_request_keeps_state(self):
        session = MazeSession(seed=4)
        session.generate(5, 5)
        grid = session.grid

        with self.assertRaises(ValueError):
            session.generate(0, 5)
        with self.assertRaises(ValueError):
            session.solve("greedy")

        self.assertIs(session.grid, grid)
        self.assertTrue(session.is_generated)
        self.assertFalse(session.is_generating)
        self.assertFalse(session.is_solving)

    def test_generation_during_solve_starts_over(self):
        session = MazeSession(seed=6)
        session.generate(5, 5)
        session.begin_solve("bfs")
        session.advance()

        self.assertTrue(session.begin_generation(7, 7))
        self.assertFalse(session.is_solving)
        self.assertEqual(session.explored_cells, [])
        while session.advance() is not None:
            pass
        self.assertEqual(session.grid.width, 7)
        self.assertIsNone(session.stats)

    def test_cancel(self):
        session = MazeSession(seed=7)
        session.generate(6, 6)
        session.begin_solve("dfs")
        session.advance()
        session.cancel()

        self.assertFalse(session.busy)
        self.assertFalse(session.is_solved)
        self.assertIsNone(session.advance())
        # Walls are untouched, a fresh solve works
        self.assertTrue(session.solve("bfs"))
        self.assertTrue(session.current_path)

    def test_session_frames_are_live(self):
        session = MazeSession(seed=8)
        with mock.patch.object(Grid, "snapshot", autospec=True, side_effect=Grid.snapshot) as snapshot:
            session.generate(30, 30, speed=1)
            session.begin_solve("bfs", speed=100)
            frame = session.advance()
            self.assertIs(frame.grid, session.grid)
            while session.advance() is not None:
                pass
        self.assertEqual(snapshot.call_count, 0)
        self.assertTrue(session.current_path)

    def test_custom_endpoints(self):
        session = MazeSession(seed=9)
        session.generate(6, 5)
        self.assertTrue(session.solve("bfs", start=(2, 1), end=(4, 3)))

        self.assertEqual((session.start, session.end), ((2, 1), (4, 3)))
        self.assertEqual(session.current_path[0].coord, (2, 1))
        self.assertEqual(session.current_path[-1].coord, (4, 3))
        self.assertEqual([c.coord for c in session.grid.cells() if c.is_start], [(2, 1)])
        self.assertEqual([c.coord for c in session.grid.cells() if c.is_end], [(4, 3)])

        # Roles survive a reset and are reused by the next solve
        session.reset()
        self.assertTrue(session.solve("astar"))
        self.assertEqual(session.current_path[-1].coord, (4, 3))

        # A new maze puts the roles back on the corners
        session.generate(5, 5)
        self.assertEqual((session.start, session.end), ((0, 0), (4, 4)))

    def test_out_of_bounds_endpoint_keeps_state(self):
        session = MazeSession(seed=10)
        session.generate(5, 5)
        with self.assertRaises(IndexError):
            session.begin_solve("bfs", end=(5, 0))
        self.assertFalse(session.is_solving)
        self.assertEqual(session.end, (4, 4))
        self.assertTrue(session.grid[4][4].is_end)

    def test_failing_operation_releases_session(self):
        def broken_search(solver, start, end):
            yield SolveFrame(solver.grid, [], start, [], PHASE_EXPLORE, 1)
            raise MazeContractError("Parent chain loops back on itself")

        session = MazeSession(seed=11)
        session.generate(5, 5)
        with mock.patch.object(MazeSolver, "_search", broken_search):
            session.begin_solve("bfs")
            session.advance()
            with self.assertLogs("maze_visualizer.session", level="ERROR"):
                with self.assertRaises(MazeContractError):
                    session.advance()

        self.assertFalse(session.busy)
        self.assertFalse(session.is_solved)
        self.assertIsNone(session.currently_exploring)
        self.assertTrue(session.reset())
        self.assertTrue(session.solve("bfs"))


if __name__ == '__main__':
    unittest.main()
