# src/retailpulse/data/loader.py

"""
Dataset loading and session state.

A dataset is read once per upload and held by a DatasetSession.
A new upload replaces the previous table wholesale; tables are never
merged and never edited in place.
"""

import pandas as pd
import logging
from typing import Dict, Optional, Union, IO

from retailpulse.schema import REQUIRED_COLUMNS, STORE
from retailpulse.exceptions import StructuralInputError

logger = logging.getLogger(__name__)


def validate_columns(df: pd.DataFrame) -> None:
    """Raise StructuralInputError if any required header is missing."""
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise StructuralInputError(
            f"Missing required column(s): {', '.join(missing)}. "
            f"Expected headers: {', '.join(REQUIRED_COLUMNS)}",
            missing_columns=missing
        )


def load_dataset(source: Union[str, IO]) -> pd.DataFrame:
    """
    Read an uploaded CSV.

    Headers are kept verbatim (they contain spaces and parentheses).
    Numeric columns are left as read; coercion happens per computation.

    Args:
        source: File path or file-like object

    Returns:
        Raw DataFrame

    Raises:
        StructuralInputError: unreadable file or missing columns
    """
    try:
        df = pd.read_csv(source)
    except (pd.errors.ParserError, pd.errors.EmptyDataError,
            UnicodeDecodeError, OSError) as e:
        raise StructuralInputError(f"Could not read CSV: {e}") from e

    df.columns = [str(c) for c in df.columns]
    validate_columns(df)

    logger.info(f"Loaded {len(df):,} records from "
                f"{df[STORE].nunique()} stores")
    return df


class DatasetSession:
    """Holds the current dataset for one dashboard / API session."""

    def __init__(self):
        self._df: Optional[pd.DataFrame] = None
        self.source_name: Optional[str] = None
        # Identity of the upload behind the current table (file_id in Streamlit)
        self.upload_id: Optional[str] = None

    @property
    def is_loaded(self) -> bool:
        return self._df is not None and len(self._df) > 0

    @property
    def current(self) -> Optional[pd.DataFrame]:
        return self._df

    def replace(
        self,
        df: pd.DataFrame,
        source_name: Optional[str] = None,
        upload_id: Optional[str] = None
    ) -> None:
        """Swap in a new dataset. The previous one is discarded."""
        validate_columns(df)
        self._df = df.copy()
        self.source_name = source_name
        self.upload_id = upload_id
        logger.info(f"Session dataset replaced: {len(df):,} rows"
                    + (f" from {source_name}" if source_name else ""))

    def load(
        self,
        source: Union[str, IO],
        source_name: Optional[str] = None,
        upload_id: Optional[str] = None
    ) -> pd.DataFrame:
        df = load_dataset(source)
        self.replace(df, source_name=source_name, upload_id=upload_id)
        return self._df

    def needs_reload(self, upload_id: Optional[str]) -> bool:
        """
        True when `upload_id` names a different upload than the current table.

        A file re-uploaded under the same name has a new id and replaces
        the table.
        """
        return upload_id is not None and upload_id != self.upload_id

    def clear(self) -> None:
        self._df = None
        self.source_name = None
        self.upload_id = None

    def summary(self) -> Dict:
        if self._df is None:
            return {'records': 0, 'stores': 0, 'source': None}
        return {
            'records': len(self._df),
            'stores': int(self._df[STORE].nunique()),
            'source': self.source_name,
        }
