#!/usr/bin/env python3
"""
Column mapping suggestion for TradeLens imports.

Prints the smart mapping inferred from a CSV's headers and optionally saves
it as YAML so it can be edited and passed to import_trades.py --mapping.

Usage:
    python scripts/suggest_mapping.py broker.csv
    python scripts/suggest_mapping.py broker.csv --output mapping.yaml
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import click

from tradelens.csv_import import FIELDS_BY_KEY, get_smart_mapping_defaults, read_csv_headers
from tradelens.logging import configure_logging, get_logger
from tradelens.utils import save_yaml

# Configure logging (console=False since we use click.echo for user output)
configure_logging(level='INFO', console=False, file=False)
logger = get_logger('scripts.suggest_mapping')

EXIT_SUCCESS = 0
EXIT_READ_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2


@click.command()
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--output', '-o', default=None, type=click.Path(dir_okay=False, path_type=Path),
              help='Write the mapping to this YAML file')
def main(csv_file, output):
    """Suggest a TradeLens column mapping for CSV_FILE."""
    try:
        result = read_csv_headers(csv_file)
    except (FileNotFoundError, ValueError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        sys.exit(EXIT_CONFIGURATION_ERROR)

    if not result.ok:
        click.echo(f"✗ {result.error}", err=True)
        sys.exit(EXIT_READ_FAILED)

    mapping = get_smart_mapping_defaults(result.headers)

    click.echo(f"Headers: {', '.join(result.headers)}\n")
    for field_key, header in mapping.items():
        click.echo(f"  {FIELDS_BY_KEY[field_key].label:20s} <- {header}")

    unmapped = [h for h in result.headers if h not in mapping.source_headers]
    if unmapped:
        click.echo(f"\nUnused columns: {', '.join(unmapped)}")

    missing = mapping.missing_required()
    if missing:
        click.echo(f"\n⚠ Required fields without a column: {', '.join(missing)}")
    else:
        click.echo("\n✓ All required fields mapped")

    if output is not None:
        save_yaml({'mapping': mapping.to_dict()}, output)
        logger.info(f"Saved mapping to {output}")
        click.echo(f"Saved mapping to {output}")


if __name__ == '__main__':
    main()
