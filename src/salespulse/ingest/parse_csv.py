"""Parsing helpers for uploaded sales CSV files.

`parse_csv` reads a path or file-like object into a list of dict records
whose keys are normalized header names. `parse_csv_text` does the same for
an in-memory string. Cell types are inferred per column by pandas, so the
Clean step must tolerate numbers arriving as either numbers or strings.
"""

from __future__ import annotations

from typing import Any, IO
import io
import logging
import re
import warnings
from pathlib import Path

import pandas as pd

log = logging.getLogger(__name__)

WHITESPACE_RE = re.compile(r"\s+")


class IngestionError(ValueError):
    """Raised when a file cannot be parsed or yields no records."""


def normalize_header(header: Any) -> str:
    """Lowercase a header and collapse internal whitespace runs to ``_``.

    Example: ``"  Unit  Price "`` becomes ``"unit_price"``.
    """
    return WHITESPACE_RE.sub("_", str(header).strip().lower())


def _frame_to_records(pdf: pd.DataFrame) -> list[dict[str, Any]]:
    """Rename headers, drop duplicate names and convert missing cells to None."""
    pdf = pdf.rename(columns=normalize_header)

    duplicated = pdf.columns.duplicated()
    if duplicated.any():
        log.warning(
            "Duplicate headers after normalization, keeping first: %s",
            sorted(set(pdf.columns[duplicated])),
        )
        pdf = pdf.loc[:, ~duplicated]

    pdf = pdf.astype(object).where(pdf.notna(), None)
    return pdf.to_dict(orient="records")


def parse_csv(
    source: str | Path | IO[Any],
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> list[dict[str, Any]]:
    """Parse a sales CSV into a list of records keyed by normalized header.

    Args:
        source: Path to the file, or an open text/binary file-like object
            (such as a Streamlit upload).
        encoding: Encoding used for paths and binary streams.
        delimiter: Field delimiter.

    Returns:
        One dict per non-blank data line. Missing cells are ``None``. Lines
        with more fields than the header are skipped with a logged warning.

    Raises:
        IngestionError: if the file is unreadable, not valid CSV, cannot be
            decoded, or contains no data rows.
    """
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", pd.errors.ParserWarning)
            pdf = pd.read_csv(
                source,
                sep=delimiter,
                encoding=encoding,
                skip_blank_lines=True,
                index_col=False,
                on_bad_lines="warn",
            )
    except pd.errors.EmptyDataError as exc:
        raise IngestionError("The CSV file is empty or could not be read.") from exc
    except pd.errors.ParserError as exc:
        raise IngestionError(f"The CSV file could not be parsed: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise IngestionError(
            f"The CSV file is not valid {encoding} text: {exc.reason}"
        ) from exc
    except OSError as exc:
        raise IngestionError(f"The CSV file could not be opened: {exc}") from exc

    for w in caught:
        if issubclass(w.category, pd.errors.ParserWarning):
            log.warning("CSV parser warning: %s", str(w.message).strip())
        else:
            warnings.warn_explicit(w.message, w.category, w.filename, w.lineno)

    records = _frame_to_records(pdf)
    if not records:
        raise IngestionError("The CSV file is empty or could not be read.")

    log.info("Parsed %d records with columns %s", len(records), list(records[0]))
    return records


def parse_csv_text(
    text: str,
    delimiter: str = ",",
) -> list[dict[str, Any]]:
    """Parse CSV content that is already decoded into a string.

    See `parse_csv` for the returned shape and raised errors.
    """
    return parse_csv(io.StringIO(text), delimiter=delimiter)
