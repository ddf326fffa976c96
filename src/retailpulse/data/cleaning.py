# src/retailpulse/data/cleaning.py

"""
Numeric cleaning.

Every computation cleans the raw table itself, on exactly the columns
it needs. Two computations asking for different columns may therefore
keep different rows of the same upload.
"""

import numpy as np
import pandas as pd
import logging
from typing import Iterable

logger = logging.getLogger(__name__)


def coerce_numeric(series: pd.Series) -> pd.Series:
    """Convert to float; text that does not parse becomes NaN."""
    return pd.to_numeric(series, errors='coerce').astype('float64')


def clean(df: pd.DataFrame, columns: Iterable[str]) -> pd.DataFrame:
    """
    Coerce `columns` to numeric and keep rows where all of them are finite.

    Malformed cells are not errors: they become NaN and the row is
    dropped by the finiteness filter. The input frame is never mutated.

    Args:
        df: Raw table
        columns: Columns to coerce and check

    Returns:
        New DataFrame with the surviving rows (original index kept)
    """
    columns = list(columns)
    out = df.copy()

    for col in columns:
        out[col] = coerce_numeric(out[col])

    if columns:
        finite = np.isfinite(out[columns].to_numpy(dtype='float64')).all(axis=1)
        out = out[finite].copy()

    dropped = len(df) - len(out)
    if dropped:
        logger.debug(f"clean({columns}): dropped {dropped} of {len(df)} rows")

    return out
