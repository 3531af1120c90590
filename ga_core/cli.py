"""
CLI module for the genetic algorithm.

Handles run configuration loading, validation, and mode dispatching.
"""

from typing import Any, Dict, Optional
from pathlib import Path
import yaml

from .data_models import ConfigurationError, GAConfig
from .io_utils import DEFAULT_COMMENT_LINES


VALID_MODES = ['tsp', 'nqueens']


class ConfigValidationError(Exception):
    """Raised when run configuration is invalid."""
    pass


def load_run_config(config_path: str) -> Dict[str, Any]:
    """
    Load run configuration from YAML file.

    Args:
        config_path: Path to run configuration YAML file

    Returns:
        Dictionary containing run configuration

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    config_file = Path(config_path)

    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_file, 'r') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigValidationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        raise ConfigValidationError("Configuration file is empty")

    if not isinstance(config, dict):
        raise ConfigValidationError("Configuration file must contain a mapping")

    return config


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _validate_ga_parameters(params: Dict[str, Any], context: str) -> None:
    """Build a GAConfig from `params`, reporting range errors as validation errors."""
    try:
        GAConfig.from_dict(params)
    except ConfigurationError as e:
        raise ConfigValidationError(f"Invalid GA parameters ({context}): {e}")


def validate_run_config(config: Dict[str, Any]) -> None:
    """
    Validate run configuration structure.

    GA parameter ranges are checked here too, through GAConfig, so a bad
    config fails before any output is written.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    # Check mode field
    if 'mode' not in config:
        raise ConfigValidationError("Missing required field: 'mode'")

    mode = config['mode']
    if mode not in VALID_MODES:
        raise ConfigValidationError(
            f"Invalid mode: '{mode}'. Must be one of: {', '.join(VALID_MODES)}"
        )

    # Check common required fields
    for field in ['ga', 'output']:
        if field not in config:
            raise ConfigValidationError(f"Missing required field: '{field}'")
        if not isinstance(config[field], dict):
            raise ConfigValidationError(f"'{field}' must be a dictionary")

    if 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    population_size = config['ga'].get('population_size')
    if not _is_positive_int(population_size):
        raise ConfigValidationError(
            f"'ga.population_size' must be a positive integer, got: {population_size}"
        )

    seed = config.get('random_seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool) or seed < 0):
        raise ConfigValidationError(f"'random_seed' must be a non-negative integer, got: {seed}")

    _validate_ga_parameters(config['ga'], 'ga')

    # Mode-specific validation
    if mode == 'tsp':
        _validate_tsp_config(config)
    elif mode == 'nqueens':
        _validate_nqueens_config(config)


def _validate_tsp_config(config: Dict[str, Any]) -> None:
    """
    Validate TSP mode configuration.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'input' not in config or not isinstance(config['input'], dict):
        raise ConfigValidationError("TSP mode requires an 'input' dictionary")

    input_config = config['input']

    if 'folder' not in input_config:
        raise ConfigValidationError("TSP mode requires 'input.folder' field")

    folder = Path(input_config['folder'])
    if not folder.is_dir():
        raise ConfigValidationError(f"Test case folder not found: {folder}")

    sizes = input_config.get('sizes')
    if not isinstance(sizes, list) or not sizes:
        raise ConfigValidationError("TSP mode requires a non-empty 'input.sizes' list")

    for size in sizes:
        if not _is_positive_int(size):
            raise ConfigValidationError(f"'input.sizes' entries must be positive integers, got: {size}")

    if len(set(sizes)) != len(sizes):
        raise ConfigValidationError(f"'input.sizes' contains duplicates: {sizes}")

    comment_lines = input_config.get('comment_lines', DEFAULT_COMMENT_LINES)
    if not isinstance(comment_lines, int) or isinstance(comment_lines, bool) or comment_lines < 0:
        raise ConfigValidationError(
            f"'input.comment_lines' must be a non-negative integer, got: {comment_lines}"
        )

    pattern = input_config.get('file_pattern', '{size}')
    if '{size}' not in pattern:
        raise ConfigValidationError(
            f"'input.file_pattern' must contain a '{{size}}' placeholder, got: {pattern}"
        )

    schedule = config['ga'].get('schedule')
    if schedule is not None:
        if not isinstance(schedule, list):
            raise ConfigValidationError("'ga.schedule' must be a list")
        for entry in schedule:
            if not isinstance(entry, dict) or not _is_positive_int(entry.get('min_cities')):
                raise ConfigValidationError(
                    f"Each 'ga.schedule' entry needs a positive integer 'min_cities', got: {entry}"
                )
            if 'population_size' in entry and not _is_positive_int(entry['population_size']):
                raise ConfigValidationError(
                    f"'population_size' in 'ga.schedule' must be a positive integer, got: {entry}"
                )
            if 'max_generations' in entry and not _is_positive_int(entry['max_generations']):
                raise ConfigValidationError(
                    f"'max_generations' in 'ga.schedule' must be a positive integer, got: {entry}"
                )


def _validate_nqueens_config(config: Dict[str, Any]) -> None:
    """
    Validate N-Queens mode configuration.

    Args:
        config: Run configuration dictionary

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'problem' not in config or not isinstance(config['problem'], dict):
        raise ConfigValidationError("N-Queens mode requires a 'problem' dictionary")

    size = config['problem'].get('size')
    if not _is_positive_int(size):
        raise ConfigValidationError(
            f"'problem.size' must be a positive integer, got: {size}"
        )


def run_from_config_dict(config: Dict[str, Any]) -> Any:
    """
    Validate a run configuration and execute the appropriate mode.

    Returns:
        Result of the mode function (list of rows for TSP, one row for N-Queens)

    Raises:
        ConfigValidationError: If config is invalid
    """
    print("Validating configuration...")
    validate_run_config(config)

    mode = config['mode']
    print(f"Mode: {mode}\n")

    # Dispatch to appropriate mode
    if mode == 'tsp':
        from .orchestration import run_tsp_mode
        result = run_tsp_mode(config)
    elif mode == 'nqueens':
        from .orchestration import run_nqueens_mode
        result = run_nqueens_mode(config)
    else:
        # Should never reach here due to validation
        raise ConfigValidationError(f"Invalid mode: {mode}")

    print("\nRun completed successfully!")
    return result


def apply_overrides(config: Dict[str, Any], overrides: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Merge command-line overrides into a run configuration.

    Nested dictionaries are merged key by key; any other value replaces the
    configured one.

    Returns:
        New configuration dictionary (the input is not modified)
    """
    merged = dict(config)
    for key, value in (overrides or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = apply_overrides(merged[key], value)
        else:
            merged[key] = value
    return merged


def run_from_config(config_path: str, overrides: Optional[Dict[str, Any]] = None) -> Any:
    """
    Load run configuration and execute appropriate mode.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file
        overrides: Optional entries replacing those of the file

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config is invalid
    """
    print(f"Loading configuration from: {config_path}")
    config = apply_overrides(load_run_config(config_path), overrides)
    if overrides:
        print(f"Overrides: {overrides}")
    return run_from_config_dict(config)
