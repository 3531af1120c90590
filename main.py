#!/usr/bin/env python3
"""
GA Search - Genetic Algorithm for TSP and N-Queens

Flag-driven entry point. Builds a run configuration from command-line
arguments and runs it through the same pipeline as ga_cli.py.
"""

import sys
import argparse
import time
from pathlib import Path

# Add current directory to path for imports
sys.path.append(str(Path(__file__).parent))

from ga_core.cli import run_from_config_dict


def build_parser():
    """Create the argument parser with `tsp` and `nqueens` subcommands"""
    parser = argparse.ArgumentParser(
        description="GA Search - Genetic Algorithm for TSP and N-Queens",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 main.py tsp                                   # TSP_5 ... TSP_25 from TSP_Test_Cases/
  python3 main.py tsp --sizes 5 10 --seed 42            # Selected test cases, reproducible
  python3 main.py tsp --no-scale --generations 100      # Same parameters for every size
  python3 main.py nqueens --size 8                      # 8-Queens
  python3 main.py nqueens --size 12 --plots             # With convergence + board plots
        """
    )
    subparsers = parser.add_subparsers(dest='mode', required=True)

    tsp = subparsers.add_parser('tsp', help='Solve TSP test cases')
    tsp.add_argument('--folder', '-f', default='TSP_Test_Cases',
                     help='Folder with TSP_<size>.txt files (default: TSP_Test_Cases)')
    tsp.add_argument('--sizes', type=int, nargs='+', default=[5, 10, 15, 20, 25], metavar='N',
                     help='City counts to solve (default: 5 10 15 20 25)')
    tsp.add_argument('--comment-lines', type=int, default=3, metavar='N',
                     help='Leading comment lines per file (default: 3)')
    tsp.add_argument('--no-scale', action='store_true',
                     help='Do not scale generations/population with city count')
    _add_ga_arguments(tsp, generations=50, population=500)

    nqueens = subparsers.add_parser('nqueens', help='Solve N-Queens')
    nqueens.add_argument('--size', '-s', type=int, default=8, metavar='N',
                         help='Number of queens (default: 8)')
    _add_ga_arguments(nqueens, generations=100, population=1000)

    return parser


def _add_ga_arguments(parser, generations, population):
    """Add GA parameter flags shared by both modes"""
    parser.add_argument('--generations', '-g', type=int, default=generations, metavar='N',
                        help=f'Maximum number of generations (default: {generations})')
    parser.add_argument('--population', '-p', type=int, default=population, metavar='N',
                        help=f'Population size (default: {population})')
    parser.add_argument('--mutation-rate', '-m', type=float, default=0.1,
                        help='Mutation probability per child (default: 0.1)')
    parser.add_argument('--elitism', '-e', type=float, default=0.2,
                        help='Fraction of the population kept as elites (default: 0.2)')
    parser.add_argument('--seed', type=int, default=None,
                        help='Random seed (default: random)')
    parser.add_argument('--output', '-o', default=None, metavar='DIR',
                        help='Output directory (default: output/<mode>_TIMESTAMP)')
    parser.add_argument('--overwrite', action='store_true',
                        help='Allow writing into an existing output directory')
    parser.add_argument('--plots', action='store_true',
                        help='Save convergence (and board) plots')


def build_run_config(args):
    """Translate parsed arguments into a run configuration dictionary"""
    output_root = args.output or f"output/{args.mode}_{int(time.time())}"

    config = {
        'mode': args.mode,
        'random_seed': args.seed,
        'ga': {
            'max_generations': args.generations,
            'population_size': args.population,
            'mutation_rate': args.mutation_rate,
            'elitism': args.elitism,
        },
        'output': {
            'root': output_root,
            'overwrite': args.overwrite,
            'save_plots': args.plots,
        },
    }

    if args.mode == 'tsp':
        config['ga']['scale_with_size'] = not args.no_scale
        config['input'] = {
            'folder': args.folder,
            'sizes': args.sizes,
            'comment_lines': args.comment_lines,
            'file_pattern': 'TSP_{size}.txt',
        }
    else:
        config['problem'] = {'size': args.size}

    return config


def main(argv=None):
    """Main entry point with command-line argument parsing"""
    args = build_parser().parse_args(argv)

    try:
        run_from_config_dict(build_run_config(args))
    except KeyboardInterrupt:
        print("\nInterrupted by user")
        sys.exit(1)
    except Exception as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
