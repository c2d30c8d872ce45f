"""Read the LESO property disposition workbook.

The workbook ships one sheet per group of states/territories. Every sheet has
the same eleven columns in the same order; sheets are aligned by position
(not by header text) and concatenated into one Dask DataFrame.
"""

from __future__ import annotations

from typing import Any, cast
import logging
from pathlib import Path
import pandas as pd
import dask.dataframe as dd

from leso_pipeline.errors import LoadError

log = logging.getLogger(__name__)

EXPECTED_COLUMNS = 11
ROWS_PER_PARTITION = 200_000

def read_sheet(xls: pd.ExcelFile, sheet_name: str) -> pd.DataFrame:
    """Read one sheet with raw cell values and check its column count.

    Args:
        xls: Open workbook.
        sheet_name: Sheet to read.

    Returns:
        pandas.DataFrame with the sheet's own header labels.

    Raises:
        LoadError: if the sheet does not have exactly 11 columns.
    """
    pdf = pd.read_excel(xls, sheet_name=sheet_name, dtype=object)
    if pdf.shape[1] != EXPECTED_COLUMNS:
        raise LoadError(
            f"Sheet {sheet_name!r} has {pdf.shape[1]} columns, expected {EXPECTED_COLUMNS}"
        )
    return pdf

def read_transfer_workbook(path: Path | str) -> Any:
    """Read every sheet of the workbook into one Dask DataFrame.

    Args:
        path: Path to the `.xlsx` workbook.

    Returns:
        Dask DataFrame whose columns carry the first sheet's header labels.

    Raises:
        LoadError: if the file is missing, cannot be opened as a workbook, or a
            sheet does not have the expected 11-column layout.
    """
    path = Path(path)
    if not path.is_file():
        raise LoadError(f"Workbook not found: {path}")

    try:
        xls = pd.ExcelFile(path)
    except Exception as e:
        raise LoadError(f"Cannot open workbook {path}: {e}") from e

    parts: list[Any] = []
    columns: list[Any] | None = None
    dd_mod = cast(Any, dd)
    with xls:
        for name in xls.sheet_names:
            try:
                pdf = read_sheet(xls, name)
            except LoadError:
                raise
            except Exception as e:
                raise LoadError(f"Cannot read sheet {name!r} of {path}: {e}") from e

            # positional alignment onto the first sheet's header
            if columns is None:
                columns = [str(c) for c in pdf.columns]
            pdf.columns = columns

            log.info("Read sheet %r: %d rows", name, len(pdf))
            parts.append(dd_mod.from_pandas(pdf, npartitions=max(1, len(pdf) // ROWS_PER_PARTITION)))

    if not parts:
        raise LoadError(f"Workbook {path} contains no sheets")

    log.info("Loaded %d sheet(s) from %s", len(parts), path)
    if len(parts) == 1:
        return parts[0]
    return dd_mod.concat(parts, interleave_partitions=True)
