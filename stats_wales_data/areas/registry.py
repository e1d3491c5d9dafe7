"""Dataset registry: reads datasets.yaml into InputFileSource entries."""

from functools import lru_cache
from pathlib import Path

import yaml
from pydantic import ValidationError

from stats_wales_data.areas.exceptions import ConfigurationError
from stats_wales_data.areas.schema import InputFileSource

DATASETS_YAML = Path(__file__).parent / "datasets.yaml"

# Loaded before every other dataset so areas carry their names.
AREAS_DATASET = "areas"


def load_datasets_config(path: Path | str | None = None) -> dict:
    """Load the raw dataset configuration."""
    path = Path(path) if path else DATASETS_YAML
    with open(path, encoding="utf-8") as f:
        config = yaml.safe_load(f)
    if not isinstance(config, dict):
        raise ConfigurationError(f"Dataset configuration in {path} is not a mapping")
    return config


def parse_datasets(config: dict) -> dict[str, InputFileSource]:
    datasets = {}
    for code, entry in config.items():
        try:
            datasets[code] = InputFileSource(code=code, **entry)
        except (ValidationError, TypeError) as e:
            raise ConfigurationError(f"Invalid dataset {code!r}: {e}") from e
    return datasets


@lru_cache(maxsize=1)
def get_all_datasets() -> dict[str, InputFileSource]:
    """Every built-in dataset keyed by code, in file order."""
    return parse_datasets(load_datasets_config())


def get_dataset(code: str) -> InputFileSource:
    try:
        return get_all_datasets()[code]
    except KeyError:
        raise ConfigurationError(f"No dataset matches key: {code}") from None
