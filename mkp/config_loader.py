"""
Configuration Loading System

Loads YAML configuration files and converts the search section into the
settings used by the genetic MKP search.

Expected layout (every key optional):

    search:
      population_size: 100
      selection_count: 25
      iterations: 50
      tournament_size: 16
      selector: tournament      # tournament | maximize
      replacement: random       # random | worst
      random_seed: null         # null or "random" -> fresh seed
    mutation:
      first_flip_probability: 0.125
      second_flip_probability: 0.0625
"""

import yaml
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

SELECTORS = ('tournament', 'maximize')
REPLACEMENTS = ('random', 'worst')


class ConfigurationError(Exception):
    """Raised when configuration is invalid"""
    pass


@dataclass
class SearchSettings:
    """Parameters of one genetic search run."""
    population_size: int = 100
    selection_count: int = 25
    iterations: int = 50
    tournament_size: int = 16
    selector: str = 'tournament'
    replacement: str = 'random'
    random_seed: Optional[int] = None
    first_flip_probability: float = 0.125
    second_flip_probability: float = 0.0625

    def mutation_config(self) -> Dict[str, Any]:
        """GA configuration dict in the shape mutate() reads."""
        return {
            'mutation': {
                'first_flip_probability': self.first_flip_probability,
                'second_flip_probability': self.second_flip_probability,
            }
        }

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def load_config(config_path: str = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file"""
    try:
        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file: {e}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_path}")
    return config


def settings_from_config(config: Dict[str, Any], **overrides) -> SearchSettings:
    """
    Create validated search settings from a configuration dictionary

    Args:
        config: Configuration dictionary (as returned by load_config)
        **overrides: Values that take precedence over the file (None is ignored)

    Returns:
        SearchSettings

    Raises:
        ConfigurationError: If the resulting settings are invalid
    """
    search_config = config.get("search", {}) or {}
    mutation_config = config.get("mutation", {}) or {}

    unknown = set(search_config) - set(SearchSettings.__dataclass_fields__)
    if unknown:
        raise ConfigurationError(f"Unknown search settings: {sorted(unknown)}")

    values = dict(search_config)
    if "first_flip_probability" in mutation_config:
        values["first_flip_probability"] = mutation_config["first_flip_probability"]
    if "second_flip_probability" in mutation_config:
        values["second_flip_probability"] = mutation_config["second_flip_probability"]

    values.update({key: value for key, value in overrides.items() if value is not None})

    # Handle random seed configuration
    seed = values.get("random_seed")
    if seed == "random":
        values["random_seed"] = None
    elif isinstance(seed, str) and seed.isdigit():
        values["random_seed"] = int(seed)

    settings = SearchSettings(**values)
    validate_settings(settings)
    return settings


def validate_settings(settings: SearchSettings) -> None:
    """
    Reject degenerate search settings before any search starts

    Raises:
        ConfigurationError: Listing every problem found
    """
    issues = []

    if not _is_int(settings.population_size) or settings.population_size < 2:
        issues.append(f"population_size must be an integer >= 2, got {settings.population_size}")

    if not _is_int(settings.selection_count) or settings.selection_count < 1:
        issues.append(f"selection_count must be a positive integer, got {settings.selection_count}")
    elif _is_int(settings.population_size) and settings.selection_count > settings.population_size:
        issues.append(
            f"selection_count ({settings.selection_count}) exceeds "
            f"population_size ({settings.population_size})"
        )

    if not _is_int(settings.iterations) or settings.iterations < 0:
        issues.append(f"iterations must be a non-negative integer, got {settings.iterations}")

    if settings.selector not in SELECTORS:
        issues.append(f"selector must be one of {SELECTORS}, got '{settings.selector}'")

    if settings.selector == 'tournament':
        if not _is_int(settings.tournament_size) or settings.tournament_size < 1:
            issues.append(f"tournament_size must be a positive integer, got {settings.tournament_size}")
        elif _is_int(settings.population_size) and settings.tournament_size > settings.population_size:
            issues.append(
                f"tournament_size ({settings.tournament_size}) exceeds "
                f"population_size ({settings.population_size})"
            )

    if settings.replacement not in REPLACEMENTS:
        issues.append(f"replacement must be one of {REPLACEMENTS}, got '{settings.replacement}'")

    if settings.random_seed is not None and not _is_int(settings.random_seed):
        issues.append(f"random_seed must be an integer, null or 'random', got {settings.random_seed}")

    for name in ("first_flip_probability", "second_flip_probability"):
        probability = getattr(settings, name)
        if not isinstance(probability, (int, float)) or not 0 <= probability <= 1:
            issues.append(f"{name} must be within [0, 1], got {probability}")

    if issues:
        raise ConfigurationError("Invalid search settings:\n  - " + "\n  - ".join(issues))


def validate_config(config: Dict[str, Any]) -> List[str]:
    """
    Validate configuration and return list of issues

    Returns:
        List of validation error messages (empty if valid)
    """
    try:
        settings_from_config(config)
    except ConfigurationError as e:
        return [line.strip(" -") for line in str(e).splitlines()[1:]] or [str(e)]
    except TypeError as e:
        return [str(e)]
    return []


def print_config_summary(config_path: str = "config.yaml"):
    """Print a summary of the configuration"""
    try:
        config = load_config(config_path)

        print("=" * 50)
        print("CONFIGURATION SUMMARY")
        print("=" * 50)

        print(f"Instance: {config.get('instance', 'N/A')}")

        issues = validate_config(config)
        if issues:
            values = {**SearchSettings().to_dict(), **(config.get("search", {}) or {})}
        else:
            values = settings_from_config(config).to_dict()

        print("\nSearch:")
        for name, value in values.items():
            print(f"  {name}: {value}")

        if issues:
            print(f"\nValidation Issues ({len(issues)}):")
            for issue in issues:
                print(f"  - {issue}")
        else:
            print("\nConfiguration is valid")

        print("=" * 50)

    except ConfigurationError as e:
        print(f"Configuration Error: {e}")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
