# src/retailpulse/config.py

"""
Runtime configuration.

Values come from the environment, after an optional `.env` file in the
project root has been loaded with python-dotenv.

  RETAILPULSE_BOOTSTRAP_SAMPLES  → resamples per bootstrap statistic
  RETAILPULSE_SEED               → seed for the bootstrap generator
  RETAILPULSE_LOG_LEVEL          → logging level name
  RETAILPULSE_DATA_PATH          → CSV preloaded by the API on startup
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.dirname(
    os.path.abspath(__file__))))

DEFAULT_BOOTSTRAP_SAMPLES = 10000
DEFAULT_SEED = 42


@dataclass(frozen=True)
class Settings:
    """Process-wide settings read once at startup."""

    bootstrap_samples: int = DEFAULT_BOOTSTRAP_SAMPLES
    seed: int = DEFAULT_SEED
    log_level: str = 'INFO'
    data_path: Optional[str] = None

    @classmethod
    def from_env(cls) -> 'Settings':
        load_dotenv(os.path.join(PROJECT_ROOT, '.env'))
        return cls(
            bootstrap_samples=int(os.environ.get(
                'RETAILPULSE_BOOTSTRAP_SAMPLES', DEFAULT_BOOTSTRAP_SAMPLES)),
            seed=int(os.environ.get('RETAILPULSE_SEED', DEFAULT_SEED)),
            log_level=os.environ.get('RETAILPULSE_LOG_LEVEL', 'INFO').upper(),
            data_path=os.environ.get('RETAILPULSE_DATA_PATH') or None,
        )


def configure_logging(settings: Settings) -> None:
    """Configure root logging for an entry point (API or dashboard)."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s | %(levelname)s | %(name)s | %(message)s'
    )
