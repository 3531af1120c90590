#!/usr/bin/env python3
"""
Test runner for the GA search system
"""

import io
import unittest
import sys
import tempfile
from contextlib import redirect_stdout
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

def run_all_tests():
    """Run all test modules"""
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    # Import test modules
    try:
        from tests import test_problems
        from tests.test_ga_core import (
            test_genetic_algorithm,
            test_operators,
            test_io_utils,
            test_cli,
        )

        # Add test modules to suite
        for module in (test_problems, test_genetic_algorithm, test_operators, test_io_utils, test_cli):
            suite.addTests(loader.loadTestsFromModule(module))

        # Run tests
        runner = unittest.TextTestRunner(verbosity=2)
        result = runner.run(suite)

        return result.wasSuccessful()

    except ImportError as e:
        print(f"Failed to import test modules: {e}")
        return False


def run_integration_test():
    """Run a basic integration test"""
    print("\n" + "=" * 50)
    print("INTEGRATION TEST")
    print("=" * 50)

    try:
        from ga_core.cli import run_from_config_dict

        with tempfile.TemporaryDirectory() as temp_dir:
            config = {
                'mode': 'nqueens',
                'random_seed': 1,
                'progress_interval': 0,
                'ga': {
                    'max_generations': 100,
                    'population_size': 500,
                    'mutation_rate': 0.1,
                    'elitism': 0.2,
                },
                'problem': {'size': 6},
                'output': {'root': str(Path(temp_dir) / 'run'), 'save_plots': True},
            }

            print("Solving 6-Queens...")
            with redirect_stdout(io.StringIO()):
                result = run_from_config_dict(config)

            output_root = Path(config['output']['root'])
            outputs_written = all(
                (output_root / name).exists()
                for name in ('results.csv', 'history_nqueens_6.csv',
                             'convergence_nqueens_6.png', 'board_nqueens_6.png')
            )

        print(f"Attacking pairs: {result['cost']}")
        print(f"Best generation: {result['best_generation']}")
        print(f"Outputs written: {outputs_written}")

        # Check basic success criteria
        success = result['cost'] == 0 and outputs_written

        if success:
            print("✓ Integration test PASSED")
        else:
            print("✗ Integration test FAILED")

        return success

    except Exception as e:
        print(f"✗ Integration test FAILED: {e}")
        import traceback
        traceback.print_exc()
        return False


if __name__ == "__main__":
    print("Running GA Search Tests")
    print("=" * 60)

    # Run unit tests
    print("Running unit tests...")
    unit_success = run_all_tests()

    # Run integration test
    integration_success = run_integration_test()

    # Summary
    print("\n" + "=" * 60)
    print("TEST SUMMARY")
    print("=" * 60)
    print(f"Unit tests: {'PASSED' if unit_success else 'FAILED'}")
    print(f"Integration test: {'PASSED' if integration_success else 'FAILED'}")

    overall_success = unit_success and integration_success
    print(f"Overall: {'PASSED' if overall_success else 'FAILED'}")

    sys.exit(0 if overall_success else 1)
