"""
Tests for I/O and visualization utilities.

Tests distance-matrix parsing, test-case loading, CSV output and plotting.
"""

import csv
import unittest
import tempfile
import shutil
from pathlib import Path

import numpy as np

from ga_core.data_models import GenerationStats
from ga_core.io_utils import (
    load_distance_matrix,
    load_test_cases,
    save_results,
    save_history,
    format_solution,
    RESULT_FIELDS,
)
from ga_core.visualization_utils import plot_convergence, plot_board


TEST_CASES_DIR = Path(__file__).resolve().parents[2] / "TSP_Test_Cases"


class TestDistanceMatrixLoading(unittest.TestCase):
    """Test plain-text distance matrix parsing."""

    def setUp(self):
        """Create temporary directory for test files."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def write(self, name, text):
        path = self.temp_dir / name
        path.write_text(text)
        return path

    def test_load_with_comments_and_blank_lines(self):
        """Test comment lines are skipped and blank lines ignored."""
        path = self.write("m.txt", "# header\n0 1 2\nanything\n0 2 9\n\n1 0 6\n15 7 0\n\n")

        matrix = load_distance_matrix(path)

        self.assertEqual(matrix.shape, (3, 3))
        self.assertTrue(np.issubdtype(matrix.dtype, np.integer))
        np.testing.assert_array_equal(matrix, [[0, 2, 9], [1, 0, 6], [15, 7, 0]])

    def test_custom_comment_lines(self):
        """Test a different number of leading comment lines."""
        path = self.write("m.txt", "only one comment\n0 4\n4 0\n")

        matrix = load_distance_matrix(path, comment_lines=1)

        np.testing.assert_array_equal(matrix, [[0, 4], [4, 0]])

    def test_non_square_rejected(self):
        """Test a ragged or rectangular matrix is rejected."""
        path = self.write("m.txt", "#\n#\n#\n0 1 2\n1 0 3\n")
        with self.assertRaises(ValueError):
            load_distance_matrix(path)

    def test_bad_token_rejected(self):
        """Test non-integer entries are rejected."""
        path = self.write("m.txt", "#\n#\n#\n0 x\n1 0\n")
        with self.assertRaises(ValueError) as ctx:
            load_distance_matrix(path)
        self.assertIn("line 4", str(ctx.exception))

    def test_empty_matrix_rejected(self):
        """Test a file with only comments is rejected."""
        path = self.write("m.txt", "#\n#\n#\n")
        with self.assertRaises(ValueError):
            load_distance_matrix(path)

    def test_missing_file(self):
        """Test a missing file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_distance_matrix(self.temp_dir / "missing.txt")


class TestTestCaseLoading(unittest.TestCase):
    """Test loading the bundled TSP test cases."""

    def test_load_bundled_cases(self):
        """Test every bundled case is a square zero-diagonal matrix."""
        sizes = [5, 10, 15, 20, 25]
        matrices = load_test_cases(TEST_CASES_DIR, sizes)

        self.assertEqual(len(matrices), len(sizes))
        for size, matrix in zip(sizes, matrices):
            self.assertEqual(matrix.shape, (size, size))
            np.testing.assert_array_equal(np.diag(matrix), np.zeros(size, dtype=int))

    def test_order_follows_sizes(self):
        """Test matrices come back in the requested order."""
        matrices = load_test_cases(TEST_CASES_DIR, [10, 5])
        self.assertEqual([m.shape[0] for m in matrices], [10, 5])

    def test_missing_folder(self):
        """Test a missing folder raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_test_cases(TEST_CASES_DIR / "nope", [5])

    def test_missing_size(self):
        """Test a size without a file raises FileNotFoundError."""
        with self.assertRaises(FileNotFoundError):
            load_test_cases(TEST_CASES_DIR, [7])


class TestCSVOutput(unittest.TestCase):
    """Test results and history CSV writers."""

    def setUp(self):
        """Create temporary directory for test files."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def test_save_results(self):
        """Test result rows are written with the fixed header."""
        row = {
            'case': 'TSP_5', 'size': 5, 'cost': 25, 'fitness': 0.04,
            'best_generation': 3, 'generations': 50, 'population_size': 500,
            'seed': 42, 'solution': '0 1 2 3 4', 'ignored': 'x',
        }
        path = save_results([row], self.temp_dir / "results.csv")

        with open(path, newline='') as f:
            reader = csv.DictReader(f)
            rows = list(reader)
            self.assertEqual(reader.fieldnames, RESULT_FIELDS)

        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0]['case'], 'TSP_5')
        self.assertEqual(rows[0]['cost'], '25')
        self.assertNotIn('ignored', rows[0])

    def test_save_results_overwrite_protection(self):
        """Test existing files are kept unless overwrite is requested."""
        path = self.temp_dir / "results.csv"
        save_results([], path)

        with self.assertRaises(FileExistsError):
            save_results([], path)

        save_results([{'case': 'again'}], path, overwrite=True)
        self.assertIn('again', path.read_text())

    def test_save_history(self):
        """Test one CSV row per generation."""
        history = [
            GenerationStats(generation=1, best_fitness=2.0, mean_fitness=1.0, best_so_far_fitness=2.0),
            GenerationStats(generation=2, best_fitness=1.5, mean_fitness=1.2, best_so_far_fitness=2.0),
        ]
        path = save_history(history, self.temp_dir / "sub" / "history.csv")

        with open(path, newline='') as f:
            rows = list(csv.DictReader(f))

        self.assertEqual(len(rows), 2)
        self.assertEqual(rows[1]['generation'], '2')
        self.assertEqual(float(rows[1]['best_so_far_fitness']), 2.0)

        with self.assertRaises(FileExistsError):
            save_history(history, path)

    def test_format_solution(self):
        """Test genes are space separated."""
        self.assertEqual(format_solution((3, 0, 2)), "3 0 2")
        self.assertEqual(format_solution(np.array([1, 3, 0, 2])), "1 3 0 2")


class TestVisualization(unittest.TestCase):
    """Test plots are written to disk."""

    def setUp(self):
        """Create temporary directory for test files."""
        self.temp_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up temporary directory."""
        shutil.rmtree(self.temp_dir)

    def test_plot_convergence(self):
        """Test the convergence plot is saved."""
        history = [
            GenerationStats(generation=g, best_fitness=g / 10, mean_fitness=g / 20, best_so_far_fitness=g / 10)
            for g in range(1, 11)
        ]
        path = plot_convergence(history, self.temp_dir / "plots" / "convergence.png", best_generation=10)

        self.assertTrue(path.exists())
        self.assertGreater(path.stat().st_size, 0)

    def test_plot_board(self):
        """Test the board plot is saved."""
        path = plot_board([1, 3, 0, 2], self.temp_dir / "board.png", title="4-Queens")

        self.assertTrue(path.exists())
        self.assertGreater(path.stat().st_size, 0)


if __name__ == '__main__':
    unittest.main()
