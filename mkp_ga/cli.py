"""
CLI module for the genetic MKP search.

Handles run configuration loading, validation, and run execution.

Run configuration layout:

    instance: instances/sample_10x2.txt
    search:                      # optional, see mkp.config_loader
      population_size: 100
      selection_count: 25
      iterations: 50
    mutation:                    # optional
      first_flip_probability: 0.125
    output:                      # optional
      root: output/run_001
      overwrite: false
      save_plots: false
"""

from typing import Any, Dict, Optional
from pathlib import Path
import numpy as np
import yaml

from mkp.config_loader import ConfigurationError, SearchSettings, settings_from_config
from mkp.instance_loader import load_instance
from mkp.knapsack import Knapsack
from mkp.statistics import ResultSummary, print_report
from .io_utils import prepare_output_root, save_history_csv, save_summary
from .selection import create_selector
from .simulator import run_search


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
        raise ConfigValidationError("Configuration root must be a mapping")

    return config


def validate_run_config(config: Dict[str, Any]) -> SearchSettings:
    """
    Validate run configuration structure.

    Args:
        config: Run configuration dictionary

    Returns:
        Validated search settings

    Raises:
        ConfigValidationError: If configuration is invalid
    """
    if 'instance' not in config:
        raise ConfigValidationError("Missing required field: 'instance'")

    instance_path = Path(str(config['instance']))
    if not instance_path.exists():
        raise ConfigValidationError(f"Instance file not found: {instance_path}")

    for section in ('search', 'mutation', 'output'):
        if section in config and not isinstance(config[section], dict):
            raise ConfigValidationError(f"'{section}' must be a dictionary")

    if 'output' in config and 'root' not in config['output']:
        raise ConfigValidationError("Missing required field: 'output.root'")

    try:
        return settings_from_config(config)
    except (ConfigurationError, TypeError) as e:
        raise ConfigValidationError(str(e)) from e


def execute_run(config: Dict[str, Any], settings: SearchSettings) -> ResultSummary:
    """
    Load the instance, run the search and write outputs.

    Args:
        config: Validated run configuration
        settings: Search settings from validate_run_config

    Returns:
        ResultSummary of the run
    """
    print("=" * 70)
    print("GENETIC MKP SEARCH")
    print("=" * 70)

    instance_path = config['instance']
    print(f"Loading instance from: {instance_path}")
    knapsack = load_instance(instance_path)
    print(f"Items: {len(knapsack)}, dimensions: {knapsack.dimensions}")

    # Setup RNG
    seed = settings.random_seed
    if seed is None:
        seed = int(np.random.default_rng().integers(0, 2**31))
    print(f"Random seed: {seed}")
    rng = np.random.default_rng(seed)

    output_config = config.get('output')
    output_root = None
    if output_config:
        output_root = prepare_output_root(
            output_config['root'], output_config.get('overwrite', False)
        )
        print(f"Output directory: {output_root}")

    print(f"Population: {settings.population_size}, selection: {settings.selection_count}, "
          f"iterations: {settings.iterations}, selector: {settings.selector}")
    print()

    selector = create_selector(
        settings.selector, settings.selection_count, settings.tournament_size
    )

    summary = run_search(
        knapsack,
        settings.population_size,
        settings.selection_count,
        settings.iterations,
        selector=selector,
        replacement=settings.replacement,
        rng=rng,
        config=settings.mutation_config(),
        verbose=True,
    )

    print()
    print_report(summary)

    if output_root is not None:
        overwrite = output_config.get('overwrite', False)
        summary_path = save_summary(
            summary,
            output_root / 'summary.yaml',
            overwrite=overwrite,
            metadata={
                'instance': str(instance_path),
                'seed': seed,
                'settings': settings.to_dict(),
            }
        )
        history_path = save_history_csv(
            summary.best_history, output_root / 'history.csv', overwrite=overwrite
        )
        print(f"Summary: {summary_path}")
        print(f"History: {history_path}")

        if output_config.get('save_plots', False):
            import matplotlib
            matplotlib.use('Agg')
            from mkp.visualization import plot_run_summary

            plot_path = output_root / 'run_plot.png'
            plot_run_summary(summary, save_path=str(plot_path))
            print(f"Plot: {plot_path}")

    return summary


def check_run_config(config: Dict[str, Any], settings: SearchSettings) -> Knapsack:
    """
    Parse the instance and print what a run would do, without searching.

    Returns:
        The parsed instance

    Raises:
        InstanceFormatError: If the instance file is malformed
    """
    knapsack = load_instance(config['instance'])

    print(f"Instance: {config['instance']} "
          f"({len(knapsack)} items, {knapsack.dimensions} dimensions)")
    if knapsack.known_optimum:
        print(f"Known optimum: {knapsack.known_optimum}")
    for name, value in settings.to_dict().items():
        print(f"  {name}: {value}")
    if 'output' in config:
        print(f"Output directory: {config['output']['root']}")

    return knapsack


def run_from_config(
    config_path: str,
    instance: Optional[str] = None,
    check_only: bool = False
) -> Optional[ResultSummary]:
    """
    Load run configuration and execute the search.

    This is the main entry point called by ga_cli.py.

    Args:
        config_path: Path to run configuration YAML file
        instance: Instance path replacing the file's 'instance' entry
        check_only: Validate the run file and instance, then stop

    Returns:
        ResultSummary of the run, or None when check_only is set

    Raises:
        FileNotFoundError: If config or instance file doesn't exist
        ConfigValidationError: If config is invalid
        Various exceptions from instance loading and the search
    """
    print(f"Loading configuration from: {config_path}")
    config = load_run_config(config_path)

    if instance is not None:
        config['instance'] = instance

    print(f"Validating configuration...")
    settings = validate_run_config(config)

    if check_only:
        check_run_config(config, settings)
        print("\nConfiguration is valid")
        return None

    summary = execute_run(config, settings)

    print("\nRun completed successfully!")
    return summary
