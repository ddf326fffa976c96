from retailpulse.data.cleaning import clean, coerce_numeric
from retailpulse.data.loader import DatasetSession, load_dataset, validate_columns

__all__ = ['clean', 'coerce_numeric', 'DatasetSession', 'load_dataset',
           'validate_columns']
