"""
CSV ingestion for GPS altitude logs.

Expected layout is a header row followed by ``latitude, longitude, altitude``
rows (decimal degrees and meters). Extra trailing columns are ignored. Rows
with a missing or empty field are dropped rather than guessed at.
"""

from pathlib import Path
from typing import Union

import numpy as np
import pandas as pd
import structlog

from ..core.exceptions import CsvFormatError

logger = structlog.get_logger()

POINT_COLUMNS = 3  # latitude, longitude, altitude


def load_csv(csv_path: Union[str, Path]) -> pd.DataFrame:
    """
    Read a CSV file as strings.

    Lines with more fields than the header are skipped; lines with fewer
    fields come back with missing values so ``clean_csv_data`` can drop them.
    """
    try:
        return pd.read_csv(
            csv_path,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
            on_bad_lines="skip",
        )
    except pd.errors.EmptyDataError as e:
        raise CsvFormatError(f"CSV file {csv_path} is empty") from e
    except pd.errors.ParserError as e:
        raise CsvFormatError(f"CSV file {csv_path} could not be parsed: {e}") from e
    except UnicodeDecodeError as e:
        raise CsvFormatError(f"CSV file {csv_path} is not valid UTF-8 text") from e


def clean_csv_data(frame: pd.DataFrame) -> pd.DataFrame:
    """Drop every row that has a missing or blank field."""
    return frame.replace(r"^\s*$", np.nan, regex=True).dropna(how="any")


def csv_to_points(frame: pd.DataFrame) -> np.ndarray:
    """
    Convert cleaned CSV rows to a ``(k, 3)`` float array of lat, lon, alt.

    Raises:
        CsvFormatError: If there are fewer than three columns or a field is
            not a finite number
    """
    if frame.shape[1] < POINT_COLUMNS:
        raise CsvFormatError(
            f"Expected at least {POINT_COLUMNS} columns (lat, lon, alt), got {frame.shape[1]}"
        )
    if frame.empty:
        raise CsvFormatError("No complete data rows")

    try:
        points = frame.iloc[:, :POINT_COLUMNS].astype(np.float64).to_numpy()
    except ValueError as e:
        raise CsvFormatError(f"Non-numeric value in CSV data: {e}") from e

    finite = np.isfinite(points).all(axis=1)
    if not finite.all():
        bad_rows = np.flatnonzero(~finite)
        raise CsvFormatError(
            f"Non-finite value in {len(bad_rows)} CSV data row(s), first at data row {bad_rows[0]}"
        )
    return points


def load_points(csv_path: Union[str, Path]) -> np.ndarray:
    """Load, clean and convert a CSV altitude log."""
    raw = load_csv(csv_path)
    cleaned = clean_csv_data(raw)
    points = csv_to_points(cleaned)

    logger.info(
        "CSV loaded",
        path=str(csv_path),
        rows=len(raw),
        dropped=len(raw) - len(cleaned),
        points=len(points),
    )
    return points
