"""
CSV reading for the import pipeline.

Reads a broker export (UTF-8, comma-delimited, header row first) into raw
rows keyed by the original headers. Every row must have exactly as many
fields as the header. Every cell stays a string so that no numeric or date
interpretation happens before the mapping is known.

Failures are returned as a CSVProcessResult error string, never raised:
the caller decides whether to retry with a corrected file.
"""

import io
import warnings
from pathlib import Path
from typing import IO, Optional, Union

import pandas as pd

from ..config.import_config import ImportConfig
from ..logging import get_logger, log_with_context, ErrorCode
from .results import CSVProcessResult

logger = get_logger('import')

CSVSource = Union[str, Path, bytes, IO[str], IO[bytes]]

EMPTY_FILE_ERROR = 'CSV file is empty'


def _as_buffer(source: CSVSource) -> Union[str, Path, IO]:
    """
    Turn raw bytes/text into a buffer pandas can read.

    Strings containing a newline are treated as CSV content; other strings
    are paths.
    """
    if isinstance(source, (bytes, bytearray)):
        return io.StringIO(bytes(source).decode('utf-8-sig'))
    if isinstance(source, str) and ('\n' in source or '\r' in source):
        return io.StringIO(source)
    return source


def _describe(source: CSVSource) -> str:
    if isinstance(source, Path):
        return str(source)
    if isinstance(source, str) and _as_buffer(source) is source:
        return source
    return getattr(source, "name", "<buffer>")


def _read(source: CSVSource, nrows: Optional[int]) -> CSVProcessResult:
    label = _describe(source)
    try:
        with warnings.catch_warnings():
            # Rows wider than the header are a parse error, not silent truncation
            warnings.simplefilter('error', pd.errors.ParserWarning)
            frame = pd.read_csv(
                _as_buffer(source),
                sep=',',
                dtype=str,
                index_col=False,
                keep_default_na=False,
                skip_blank_lines=True,
                nrows=nrows,
                encoding='utf-8-sig',
            )
    except pd.errors.EmptyDataError:
        log_with_context(logger, 'ERROR', f"{label}: {EMPTY_FILE_ERROR}", error_code=ErrorCode.CSV_EMPTY)
        return CSVProcessResult(error=EMPTY_FILE_ERROR)
    except (pd.errors.ParserError, pd.errors.ParserWarning) as e:
        log_with_context(logger, 'ERROR', f"{label}: CSV parsing error", error_code=ErrorCode.CSV_PARSE_ERROR,
                         detail=str(e))
        return CSVProcessResult(error=f"CSV parsing error: {e}")
    except (OSError, UnicodeDecodeError, ValueError) as e:
        log_with_context(logger, 'ERROR', f"{label}: failed to read CSV", error_code=ErrorCode.CSV_READ_FAILED,
                         detail=str(e))
        return CSVProcessResult(error=f"Failed to read CSV: {e}")

    if frame.empty:
        log_with_context(logger, 'ERROR', f"{label}: {EMPTY_FILE_ERROR}", error_code=ErrorCode.CSV_EMPTY)
        return CSVProcessResult(error=EMPTY_FILE_ERROR)

    # With keep_default_na=False only fields missing from a short row are NaN
    short_rows = frame.index[frame.isna().any(axis=1)]
    if len(short_rows):
        detail = f"Too few fields in row {short_rows[0] + 1}: expected {len(frame.columns)}"
        log_with_context(logger, 'ERROR', f"{label}: CSV parsing error", error_code=ErrorCode.CSV_PARSE_ERROR,
                         detail=detail, short_rows=len(short_rows))
        return CSVProcessResult(error=f"CSV parsing error: {detail}")

    headers = [str(column) for column in frame.columns]
    data = frame.to_dict(orient='records')

    logger.info(f"Read {len(data)} rows and {len(headers)} columns from {label}")
    return CSVProcessResult(headers=headers, data=data)


def read_csv_headers(
    source: CSVSource,
    preview_rows: Optional[int] = None,
    config: Optional[ImportConfig] = None,
) -> CSVProcessResult:
    """
    Read the header row and a preview of the data rows.

    Args:
        source: File path, raw bytes, CSV text or an open file object
        preview_rows: Row cap; when None, `config.preview_rows` is used
        config: Import settings (loaded from settings.yaml when None)

    Returns:
        CSVProcessResult with `headers` and up to `preview_rows` rows in
        `data`, or `error` on parse failure / empty file

    Raises:
        ValueError: If preview_rows is not positive
    """
    if preview_rows is None:
        preview_rows = (config or ImportConfig.from_settings()).preview_rows
    if preview_rows <= 0:
        raise ValueError(f"preview_rows must be positive, got {preview_rows}")
    return _read(source, preview_rows)


def read_csv_data(source: CSVSource) -> CSVProcessResult:
    """
    Read every data row of a CSV source.

    Same contract as read_csv_headers() without the preview cap; this is
    what full processing should run over.
    """
    return _read(source, None)
