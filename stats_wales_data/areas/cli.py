"""CLI for importing StatsWales datasets and printing the merged result.

Usage:
    python -m stats_wales_data.areas.cli --dir datasets
    python -m stats_wales_data.areas.cli -d popden -a W06000011 -y 2010-2015
    python -m stats_wales_data.areas.cli -d trains,complete-pop -m rail,pop --json
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import BaseModel
from rich.console import Console

from stats_wales_data.areas import AreaStore
from stats_wales_data.areas.exceptions import (
    ConfigurationError,
    InvalidFormatError,
    StatsWalesError,
)
from stats_wales_data.areas.input import InputFile
from stats_wales_data.areas.registry import (
    AREAS_DATASET,
    get_all_datasets,
    get_dataset,
)
from stats_wales_data.areas.schema import InputFileSource

logger = logging.getLogger(__name__)

console = Console()

IMPORT_ALL = "all"


class RunConfig(BaseModel):
    """Everything one run needs, gathered from the command line."""

    data_dir: Path = Path("datasets")
    datasets: list[InputFileSource] = []
    areas: frozenset[str] = frozenset()
    measures: frozenset[str] = frozenset()
    years: tuple[int, int] = (0, 0)
    json_output: bool = False


def _split_codes(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated arguments into one list."""
    codes = []
    for value in values or []:
        codes.extend(code.strip() for code in value.split(",") if code.strip())
    return codes


def parse_datasets_arg(values: list[str] | None) -> list[InputFileSource]:
    """Resolve dataset codes, importing everything when none or "all" given.

    Raises:
        ConfigurationError: a code matches no known dataset.
    """
    available = {
        code: dataset
        for code, dataset in get_all_datasets().items()
        if code != AREAS_DATASET
    }
    codes = _split_codes(values)
    import_all = not codes
    for code in codes:
        if code.lower() == IMPORT_ALL:
            import_all = True
        elif code not in available:
            raise ConfigurationError(f"No dataset matches key: {code}")

    if import_all:
        return list(available.values())
    return [available[code] for code in dict.fromkeys(codes)]


def parse_filter_arg(values: list[str] | None) -> frozenset[str]:
    """Areas or measures to import; empty means all of them."""
    codes = _split_codes(values)
    if any(code.lower() == IMPORT_ALL for code in codes):
        return frozenset()
    return frozenset(codes)


def parse_years_arg(value: str | None) -> tuple[int, int]:
    """Parse "0", "YYYY" or "YYYY-ZZZZ" into an inclusive year range.

    Raises:
        InvalidFormatError: the argument has any other shape.
    """
    if value is None:
        return (0, 0)
    parts = value.strip().split("-")
    if len(parts) > 2 or not all(
        part.isdigit() and (part == "0" or len(part) == 4) for part in parts
    ):
        raise InvalidFormatError("Invalid input for years argument")
    years = [int(part) for part in parts]
    if len(years) == 1:
        return (years[0], years[0])
    return (years[0], years[1])


def _load_source(
    store: AreaStore, config: RunConfig, dataset: InputFileSource
) -> bool:
    path = config.data_dir / dataset.file
    try:
        with InputFile(path) as stream:
            store.populate(
                stream,
                dataset.format,
                dataset.columns,
                areas_filter=config.areas,
                measures_filter=config.measures,
                years_filter=config.years,
            )
    except FileNotFoundError as e:
        logger.warning("Skipping %s: %s", dataset.code, e)
        return False
    except (StatsWalesError, OSError) as e:
        logger.error("Failed to import %s from %s: %s", dataset.code, path, e)
        return False
    logger.info("Imported %s (%s)", dataset.code, dataset.name)
    return True


def load_areas(store: AreaStore, config: RunConfig) -> bool:
    """Load the authority code catalogue, which names every area."""
    return _load_source(store, config, get_dataset(AREAS_DATASET))


def load_datasets(store: AreaStore, config: RunConfig) -> int:
    """Load each selected dataset, carrying on past any that fail.

    Returns:
        The number of datasets imported successfully.
    """
    return sum(_load_source(store, config, dataset) for dataset in config.datasets)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stats-wales",
        description="Parse official Welsh Government statistics data files",
    )
    parser.add_argument(
        "--dir",
        default="datasets",
        help="Directory holding the input data files",
    )
    parser.add_argument(
        "-d",
        "--datasets",
        action="append",
        help="Dataset code(s) to import, comma-separated (omit or 'all' for all)",
    )
    parser.add_argument(
        "-a",
        "--areas",
        action="append",
        help="Authority code(s) to import, comma-separated (omit or 'all' for all)",
    )
    parser.add_argument(
        "-m",
        "--measures",
        action="append",
        help="Measure code(s) to import, comma-separated (omit or 'all' for all)",
    )
    parser.add_argument(
        "-y",
        "--years",
        default="0",
        help="A year (YYYY) or inclusive range of years (YYYY-ZZZZ), 0 for all",
    )
    parser.add_argument(
        "-j",
        "--json",
        action="store_true",
        help="Print the output as JSON instead of tables",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output"
    )
    return parser


def run(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = RunConfig(
            data_dir=Path(args.dir),
            datasets=parse_datasets_arg(args.datasets),
            areas=parse_filter_arg(args.areas),
            measures=parse_filter_arg(args.measures),
            years=parse_years_arg(args.years),
            json_output=args.json,
        )
    except StatsWalesError as e:
        console.print(str(e), style="red", markup=False, highlight=False)
        return 1

    store = AreaStore()
    load_areas(store, config)
    load_datasets(store, config)
    logger.info("Loaded %d areas", store.size())

    output = store.to_json(indent=2) + "\n" if config.json_output else str(store)
    console.print(
        output, markup=False, highlight=False, emoji=False, soft_wrap=True, end=""
    )
    return 0


def main():
    sys.exit(run())


if __name__ == "__main__":
    main()
