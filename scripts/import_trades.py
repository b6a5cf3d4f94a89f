#!/usr/bin/env python3
"""
Trade import script for TradeLens.

Reads a broker CSV export, maps its columns onto the TradeLens trade schema,
normalizes every row and writes the formatted CSV.

Usage Examples:
    # Smart mapping, export to exports/tradelens_formatted_<date>.csv
    python scripts/import_trades.py broker.csv

    # User-edited mapping (see suggest_mapping.py) and explicit output
    python scripts/import_trades.py broker.csv --mapping mapping.yaml --output trades.csv

    # European broker with day-first dates, fail on any warning
    python scripts/import_trades.py broker.csv --day-first --strict --validate
"""

import dataclasses
import sys
import uuid
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import click

from tradelens.config import ImportConfig, load_settings
from tradelens.csv_import import (
    default_export_filename,
    export_formatted_csv,
    get_smart_mapping_defaults,
    load_mapping_override,
    process_csv_data,
    read_csv_data,
)
from tradelens.logging import (
    ErrorCode,
    LogContext,
    configure_logging,
    get_logger,
    log_validation_result,
    log_with_context,
    shutdown_logging,
)
from tradelens.paths import get_exports_dir
from tradelens.validation import validate_processed_result

logger = get_logger('scripts.import_trades')

# Exit codes
EXIT_SUCCESS = 0
EXIT_IMPORT_FAILED = 1
EXIT_CONFIGURATION_ERROR = 2

# Issues echoed before the list is truncated
MAX_LISTED_ISSUES = 20


def load_import_config(day_first: bool) -> ImportConfig:
    """Settings-backed config, with --day-first taking precedence."""
    config = ImportConfig.from_settings()
    if day_first:
        config = dataclasses.replace(config, date_order='day_first')
    return config


def setup_logging(log_level, source_file: str) -> None:
    """Configure logging from the `logging` settings section, --log-level taking precedence."""
    try:
        settings = load_settings().get('logging') or {}
    except (FileNotFoundError, ValueError):
        # Reported with an exit code once the import config is loaded
        settings = {}

    configure_logging(
        level=(log_level or settings.get('level', 'WARNING')).upper(),
        console=settings.get('console', True),
        file=settings.get('file', False),
        structured=settings.get('structured', True),
        source_file=source_file,
        import_id=uuid.uuid4().hex[:8],
    )


def echo_issues(messages, title: str) -> None:
    if not messages:
        return
    click.echo(f"\n{title} ({len(messages)}):")
    for message in messages[:MAX_LISTED_ISSUES]:
        click.echo(f"  - {message}")
    if len(messages) > MAX_LISTED_ISSUES:
        click.echo(f"  ... and {len(messages) - MAX_LISTED_ISSUES} more")


@click.command()
@click.argument('csv_file', type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option('--mapping', '-m', 'mapping_file', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='YAML column mapping (field key -> CSV header). Smart mapping is used if omitted.')
@click.option('--output', '-o', default=None, type=click.Path(dir_okay=False, path_type=Path),
              help='Formatted CSV destination (default: exports/tradelens_formatted_<date>.csv)')
@click.option('--day-first', is_flag=True, help='Read ambiguous NN-NN-YYYY dates as day-month-year')
@click.option('--strict', is_flag=True,
              help='Exit with an error if any row produced a warning or failed validation')
@click.option('--validate', 'run_validation', is_flag=True,
              help='Check every trade for the fields required to store it')
@click.option('--log-level', default=None,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'], case_sensitive=False),
              help='Log level (default: logging.level in settings.yaml)')
def main(csv_file, mapping_file, output, day_first, strict, run_validation, log_level):
    """
    Import a broker CSV export into the TradeLens trade format.

    \b
    Exit codes:
        0  import succeeded
        1  the CSV could not be read, or --strict and warnings were found
        2  invalid settings or mapping
    """
    setup_logging(log_level, csv_file.name)
    try:
        sys.exit(run_import(csv_file, mapping_file, output, day_first, strict, run_validation))
    finally:
        shutdown_logging()


def run_import(csv_file, mapping_file, output, day_first, strict, run_validation) -> int:
    """Run the pipeline and return the process exit code."""
    try:
        config = load_import_config(day_first)
    except (FileNotFoundError, ValueError) as e:
        code = ErrorCode.CONFIG_LOAD_ERROR if isinstance(e, FileNotFoundError) else ErrorCode.CONFIG_INVALID
        log_with_context(logger, 'ERROR', "Invalid import settings", error_code=code, detail=str(e))
        click.echo(f"✗ Configuration error: {e}", err=True)
        return EXIT_CONFIGURATION_ERROR

    with LogContext(phase='read'):
        read_result = read_csv_data(csv_file)
    if not read_result.ok:
        click.echo(f"✗ {read_result.error}", err=True)
        return EXIT_IMPORT_FAILED

    with LogContext(phase='map'):
        try:
            if mapping_file is not None:
                mapping = load_mapping_override(mapping_file, headers=read_result.headers)
            else:
                mapping = get_smart_mapping_defaults(read_result.headers)
        except (FileNotFoundError, ValueError) as e:
            click.echo(f"✗ Mapping error: {e}", err=True)
            return EXIT_CONFIGURATION_ERROR

    click.echo(f"Importing {len(read_result.data)} rows from {csv_file.name}")
    for field_key, header in mapping.items():
        click.echo(f"  {field_key:20s} <- {header}")

    missing = mapping.missing_required()
    if missing:
        log_with_context(logger, 'WARNING', "Required fields are unmapped",
                         error_code=ErrorCode.MAPPING_INCOMPLETE, missing=missing)
        click.echo(f"⚠ Required fields without a column: {', '.join(missing)}", err=True)

    with LogContext(phase='process'):
        processed = process_csv_data(read_result.data, mapping, config)

    echo_issues([str(issue) for issue in processed.issues], "Warnings")

    failed_validation = False
    if run_validation:
        with LogContext(phase='validate'):
            validation = validate_processed_result(processed)
            log_validation_result(logger, validation, include_details=False)
        click.echo("\n" + validation.summary(max_errors=MAX_LISTED_ISSUES))
        failed_validation = not validation.passed

    destination = output or get_exports_dir() / default_export_filename()
    with LogContext(phase='export'):
        try:
            export_formatted_csv(processed.data, destination)
        except OSError as e:
            click.echo(f"✗ Could not write {destination}: {e}", err=True)
            return EXIT_IMPORT_FAILED

    click.echo(f"\n✓ Wrote {processed.row_count} trades to {destination}")

    if strict and (missing or processed.issues or failed_validation):
        click.echo("✗ Strict mode: import finished with warnings", err=True)
        return EXIT_IMPORT_FAILED
    return EXIT_SUCCESS


if __name__ == '__main__':
    main()
