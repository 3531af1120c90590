"""
Orchestration module for the genetic algorithm.

Implements the TSP and N-Queens run workflows: load the problem, build the
initial population, evolve, report and save results.
"""

from typing import Any, Dict, List, Optional, Tuple
from pathlib import Path
import numpy as np

from local_search.nqueens import NQueens
from local_search.tsp import TSP

from .data_models import GAConfig, Individual
from .genetic_algorithm import GeneticAlgorithm
from .io_utils import (
    DEFAULT_COMMENT_LINES,
    DEFAULT_FILE_PATTERN,
    format_solution,
    load_test_cases,
    save_history,
    save_results,
)
from .operators import NQueensOperators, TSPOperators


# Larger tours need longer runs and bigger populations. Entries apply in
# ascending order of `min_cities`; later entries override earlier ones.
DEFAULT_TSP_SCHEDULE = [
    {'min_cities': 15, 'max_generations': 80, 'population_size': 1500},
    {'min_cities': 20, 'max_generations': 180, 'population_size': 2500},
    {'min_cities': 25, 'max_generations': 200, 'population_size': 3000},
]

DEFAULT_PROGRESS_INTERVAL = 10


def scale_ga_parameters(
    num_cities: int,
    base: Dict[str, Any],
    schedule: Optional[List[Dict[str, int]]] = None
) -> Dict[str, Any]:
    """
    Adjust generation budget and population size to the problem size.

    Args:
        num_cities: Number of cities in the test case
        base: GA section of the run config (max_generations, population_size, ...)
        schedule: Scaling entries; DEFAULT_TSP_SCHEDULE when omitted

    Returns:
        Copy of `base` with max_generations/population_size overridden by
        every schedule entry whose `min_cities` is at most `num_cities`

    Example:
        scale_ga_parameters(20, {'max_generations': 50, 'population_size': 500})
        -> {'max_generations': 180, 'population_size': 2500}
    """
    if schedule is None:
        schedule = DEFAULT_TSP_SCHEDULE

    params = dict(base)
    for entry in sorted(schedule, key=lambda e: e['min_cities']):
        if num_cities >= entry['min_cities']:
            for key in ('max_generations', 'population_size'):
                if key in entry:
                    params[key] = entry[key]
    return params


def setup_rng(run_config: Dict) -> Tuple[int, np.random.Generator]:
    """
    Create the run's random number generator.

    Uses run_config['random_seed'] when given, otherwise draws a seed so the
    run can be reproduced from the printed value.

    Returns:
        Tuple of (seed, rng)
    """
    seed = run_config.get('random_seed')
    if seed is None:
        seed = int(np.random.randint(0, 2**31))
    print(f"Random seed: {seed}")
    return seed, np.random.default_rng(seed)


def prepare_output_root(output_config: Dict) -> Path:
    """
    Create the output directory.

    Raises:
        FileExistsError: If the directory exists and overwrite is not enabled
    """
    output_root = Path(output_config['root'])
    overwrite = output_config.get('overwrite', False)

    if output_root.exists() and not overwrite:
        raise FileExistsError(
            f"Output directory already exists: {output_root}\n"
            f"Set 'output.overwrite: true' in config to overwrite"
        )

    output_root.mkdir(parents=True, exist_ok=overwrite)
    print(f"Output directory: {output_root}\n")
    return output_root


def evolve_with_progress(
    ga: GeneticAlgorithm,
    population: List[Individual],
    progress_interval: int = DEFAULT_PROGRESS_INTERVAL
) -> Individual:
    """
    Run `ga.evolve`, printing progress every `progress_interval` generations.

    Returns:
        Top individual of the final population
    """
    max_generations = ga.config.max_generations

    def report(generation: int, current: List[Individual]) -> None:
        if progress_interval and (generation % progress_interval == 0 or generation == max_generations):
            print(
                f"  Generation {generation}/{max_generations}: "
                f"best fitness {current[0].fitness_score:.6g}, "
                f"best so far {ga.best.individual.fitness_score:.6g}"
            )

    return ga.evolve(population, on_generation=report)


def _save_case_outputs(
    ga: GeneticAlgorithm,
    case_name: str,
    output_root: Path,
    overwrite: bool,
    save_plots: bool
) -> Path:
    """Write the generation history (and convergence plot) of one case."""
    history_path = save_history(ga.history, output_root / f"history_{case_name}.csv", overwrite=overwrite)

    if save_plots:
        from .visualization_utils import plot_convergence
        plot_path = plot_convergence(
            ga.history,
            output_root / f"convergence_{case_name}.png",
            title=f"Convergence - {case_name}",
            best_generation=ga.best_generation,
        )
        print(f"  Plot: {plot_path}")

    return history_path


def run_tsp_mode(run_config: Dict) -> List[Dict[str, Any]]:
    """
    Solve every TSP test case listed in the run configuration.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Setup RNG (run_config['random_seed'] or a drawn seed)
        2. Load distance matrices from input.folder for each of input.sizes
        3. Create output directory: run_config['output']['root']
        4. For each matrix:
           a. Scale GA parameters to the city count (if enabled)
           b. Generate a random initial population of tours
           c. Evolve and report the best tour, its length and generation
           d. Save the generation history (and plot)
        5. Save results.csv and print summary

    Returns:
        List of result rows, one per test case
    """
    print("=" * 70)
    print("TSP MODE")
    print("=" * 70)

    seed, rng = setup_rng(run_config)

    input_config = run_config['input']
    folder = input_config['folder']
    sizes = input_config['sizes']
    print(f"Loading test cases from: {folder}")
    matrices = load_test_cases(
        folder,
        sizes,
        file_pattern=input_config.get('file_pattern', DEFAULT_FILE_PATTERN),
        comment_lines=input_config.get('comment_lines', DEFAULT_COMMENT_LINES),
    )
    print(f"Loaded {len(matrices)} test cases: {[len(m) for m in matrices]} cities")

    output_config = run_config['output']
    output_root = prepare_output_root(output_config)
    overwrite = output_config.get('overwrite', False)
    save_plots = output_config.get('save_plots', False)

    ga_section = run_config['ga']
    scale = ga_section.get('scale_with_size', True)
    progress_interval = run_config.get('progress_interval', DEFAULT_PROGRESS_INTERVAL)

    results = []
    for distance_matrix in matrices:
        num_cities = len(distance_matrix)
        params = (
            scale_ga_parameters(num_cities, ga_section, ga_section.get('schedule'))
            if scale else dict(ga_section)
        )
        config = GAConfig.from_dict(params)
        population_size = params['population_size']

        print(f"{num_cities} cities:")
        print(
            f"  Generations: {config.max_generations}, population: {population_size}, "
            f"mutation: {config.mutation_rate}, elitism: {config.elitism_fraction}"
        )

        problem = TSP(distance_matrix)
        operators = TSPOperators(problem)
        ga = GeneticAlgorithm(config, operators, rng)

        best = evolve_with_progress(
            ga, operators.generate_initial_population(population_size, rng), progress_interval
        )
        cost = problem.cost(best.chromosome)

        print(f"  best generation: {ga.best_generation}")
        print("  Best solution: ", end="")
        problem.render(best.chromosome)
        print(f"  total distance is: {cost}")

        case_name = f"tsp_{num_cities}"
        _save_case_outputs(ga, case_name, output_root, overwrite, save_plots)
        results.append({
            'case': case_name,
            'size': num_cities,
            'cost': cost,
            'fitness': best.fitness_score,
            'best_generation': ga.best_generation,
            'generations': config.max_generations,
            'population_size': population_size,
            'seed': seed,
            'solution': format_solution(best.chromosome),
        })
        print()

    results_path = save_results(results, output_root / 'results.csv', overwrite=overwrite)

    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    for row in results:
        print(f"  {row['size']:>4} cities: distance {row['cost']} (best generation {row['best_generation']})")
    print(f"Results: {results_path}")

    return results


def run_nqueens_mode(run_config: Dict) -> Dict[str, Any]:
    """
    Solve one N-Queens instance.

    Args:
        run_config: Run configuration dict from YAML

    Algorithm:
        1. Setup RNG
        2. Build NQueens(problem.size) and a random initial population
        3. Evolve and print the best board and its conflict count
        4. Save results.csv, the generation history (and plots)

    Returns:
        Result row for the instance
    """
    print("=" * 70)
    print("N-QUEENS MODE")
    print("=" * 70)

    seed, rng = setup_rng(run_config)

    n = run_config['problem']['size']
    output_config = run_config['output']
    output_root = prepare_output_root(output_config)
    overwrite = output_config.get('overwrite', False)
    save_plots = output_config.get('save_plots', False)

    ga_section = run_config['ga']
    config = GAConfig.from_dict(ga_section)
    population_size = ga_section['population_size']
    print(
        f"{n} queens: generations {config.max_generations}, population {population_size}, "
        f"mutation {config.mutation_rate}, elitism {config.elitism_fraction}"
    )

    problem = NQueens(n)
    operators = NQueensOperators(problem)
    ga = GeneticAlgorithm(config, operators, rng)

    best = evolve_with_progress(
        ga,
        operators.generate_initial_population(population_size, rng),
        run_config.get('progress_interval', DEFAULT_PROGRESS_INTERVAL),
    )
    cost = problem.cost(best.chromosome)

    print(f"best generation: {ga.best_generation}")
    print("Best solution:")
    problem.render(best.chromosome)
    print(f"Best cost (# of attacking pairs) is: {cost}")

    case_name = f"nqueens_{n}"
    _save_case_outputs(ga, case_name, output_root, overwrite, save_plots)
    if save_plots:
        from .visualization_utils import plot_board
        board_path = plot_board(
            best.chromosome,
            output_root / f"board_{case_name}.png",
            title=f"{n}-Queens, {cost} attacking pairs",
        )
        print(f"Board: {board_path}")

    result = {
        'case': case_name,
        'size': n,
        'cost': cost,
        'fitness': best.fitness_score,
        'best_generation': ga.best_generation,
        'generations': config.max_generations,
        'population_size': population_size,
        'seed': seed,
        'solution': format_solution(best.chromosome),
    }
    results_path = save_results([result], output_root / 'results.csv', overwrite=overwrite)

    print()
    print("=" * 70)
    print("SUMMARY")
    print("=" * 70)
    print(f"Queens: {n}, attacking pairs: {cost}, best generation: {ga.best_generation}")
    print(f"Results: {results_path}")

    return result
