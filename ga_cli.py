#!/usr/bin/env python3
"""
GA Search CLI - YAML-driven entry point.

All run parameters live in a run configuration file; a few flags override
the file for one run without editing it.

Usage:
    python3 ga_cli.py run_config.yaml [--seed N] [--overwrite] [--plots]
    python3 ga_cli.py --config run_config.yaml

Examples:
    # Solve the TSP test cases
    python3 ga_cli.py configs/tsp_run.yaml

    # Solve 8-Queens with another seed, reusing the output directory
    python3 ga_cli.py configs/nqueens_run.yaml --seed 123 --overwrite
"""

import sys
import argparse
from pathlib import Path

# Add project root to path if needed
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def build_parser():
    """Create the argument parser"""
    parser = argparse.ArgumentParser(
        description="GA Search - run a YAML run configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1],
    )
    parser.add_argument('config', nargs='?', help='Run configuration YAML file')
    parser.add_argument('--config', '-c', dest='config_option', metavar='PATH',
                        help='Run configuration YAML file (alternative to the positional argument)')
    parser.add_argument('--seed', type=int, default=None,
                        help="Override 'random_seed'")
    parser.add_argument('--overwrite', action='store_true',
                        help="Override 'output.overwrite' to true")
    parser.add_argument('--plots', action='store_true',
                        help="Override 'output.save_plots' to true")
    return parser


def collect_overrides(args):
    """Run configuration entries set from flags"""
    overrides = {}
    if args.seed is not None:
        overrides['random_seed'] = args.seed

    output = {}
    if args.overwrite:
        output['overwrite'] = True
    if args.plots:
        output['save_plots'] = True
    if output:
        overrides['output'] = output

    return overrides


def main(argv=None):
    """Main entry point for GA CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config_path = args.config_option or args.config
    if config_path is None:
        parser.print_help()
        sys.exit(1)

    try:
        from ga_core.cli import run_from_config
        run_from_config(config_path, overrides=collect_overrides(args))
    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
