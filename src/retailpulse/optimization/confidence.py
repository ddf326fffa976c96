# src/retailpulse/optimization/confidence.py

"""
Bootstrap Confidence Intervals

95% percentile intervals for the headline quantities:
1. Inventory turnover   (resampled from the uploaded rows)
2. Mean units sold      (resampled from the uploaded rows)
3. Annual savings       (synthetic, NOT derived from the upload)

The savings interval is drawn from Normal(6030, 20% × 6030) clipped at
zero. It is an assumption-driven placeholder kept stable across
datasets so the financial headline does not move with each upload.

Each call spawns private numpy Generators from the seed, one per
statistic; the global numpy RNG is never touched. The same table with
the same seed reproduces identical bounds, and the savings draw does
not depend on the table at all.
"""

import numpy as np
import pandas as pd
import logging
from typing import Callable, Dict, List, Tuple

from retailpulse.config import DEFAULT_BOOTSTRAP_SAMPLES, DEFAULT_SEED
from retailpulse.data.cleaning import coerce_numeric
from retailpulse.schema import INVENTORY, SOLD

logger = logging.getLogger(__name__)

MEAN_ANNUAL_SAVINGS = 6030.0
SD_SAVINGS = MEAN_ANNUAL_SAVINGS * 0.20
CI_PERCENTILES = (2.5, 97.5)

# Upper bound on resample cells (rows × resamples) held in memory at once
_MAX_CHUNK_CELLS = 2_000_000

Interval = Tuple[float, float]


def spawn_generators(seed: int) -> List[np.random.Generator]:
    """Three independent generators (turnover, sales, savings) from one seed."""
    children = np.random.SeedSequence(seed).spawn(3)
    return [np.random.default_rng(child) for child in children]


def percentile_interval(samples: np.ndarray) -> Interval:
    """2.5/97.5 percentiles of the finite samples; (nan, nan) if none."""
    finite = samples[np.isfinite(samples)]
    if finite.size == 0:
        return (float('nan'), float('nan'))
    low, high = np.percentile(finite, CI_PERCENTILES)
    return (float(low), float(high))


def _turnover_stat(inv: np.ndarray, sold: np.ndarray) -> np.ndarray:
    """Per-resample total sold / mean inventory over rows finite in both."""
    valid = np.isfinite(inv) & np.isfinite(sold)
    count = valid.sum(axis=1)
    total_sold = np.where(valid, sold, 0.0).sum(axis=1)
    with np.errstate(divide='ignore', invalid='ignore'):
        avg_inv = np.where(valid, inv, 0.0).sum(axis=1) / count
        return np.where(avg_inv > 0, total_sold / avg_inv, np.nan)


def _mean_stat(values: np.ndarray) -> np.ndarray:
    """Per-resample mean, non-finite values excluded."""
    valid = np.isfinite(values)
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.where(valid, values, 0.0).sum(axis=1) / valid.sum(axis=1)


class BootstrapEstimator:
    """
    Percentile bootstrap over the rows of the uploaded table.

    Resamples are drawn in chunks so large uploads do not materialise a
    full (n_bootstrap × rows) index matrix.
    """

    def __init__(
        self,
        n_bootstrap: int = DEFAULT_BOOTSTRAP_SAMPLES,
        seed: int = DEFAULT_SEED
    ):
        """
        Args:
            n_bootstrap: Resamples per statistic (also the savings draw size)
            seed: Seed for this estimator's private generator
        """
        self.n_bootstrap = int(n_bootstrap)
        self.seed = seed

    def _resample(
        self,
        rng: np.random.Generator,
        n_rows: int,
        statistic: Callable[[np.ndarray], np.ndarray]
    ) -> np.ndarray:
        """Run `statistic` on n_bootstrap index matrices drawn with replacement."""
        if n_rows == 0:
            return np.full(self.n_bootstrap, np.nan)

        chunk = max(1, min(self.n_bootstrap, _MAX_CHUNK_CELLS // n_rows))
        out = np.empty(self.n_bootstrap, dtype='float64')
        for start in range(0, self.n_bootstrap, chunk):
            size = min(chunk, self.n_bootstrap - start)
            idx = rng.integers(0, n_rows, size=(size, n_rows))
            out[start:start + size] = statistic(idx)
        return out

    def compute(self, df: pd.DataFrame) -> Dict[str, Interval]:
        """
        Compute turnover, sales and financial intervals.

        Resampling happens on the raw rows; each resample is then
        filtered to rows with finite inventory and units sold, which is
        equivalent to cleaning the resampled table.

        Args:
            df: Raw dataset

        Returns:
            Dictionary with turnover_ci, sales_ci, financial_ci as (low, high)
        """
        turnover_rng, sales_rng, savings_rng = spawn_generators(self.seed)
        n_rows = len(df)
        inv = coerce_numeric(df[INVENTORY]).to_numpy()
        sold = coerce_numeric(df[SOLD]).to_numpy()

        turnover_samples = self._resample(
            turnover_rng, n_rows, lambda idx: _turnover_stat(inv[idx], sold[idx])
        )
        sales_samples = self._resample(
            sales_rng, n_rows, lambda idx: _mean_stat(sold[idx])
        )
        savings_samples = np.maximum(
            savings_rng.normal(MEAN_ANNUAL_SAVINGS, SD_SAVINGS, self.n_bootstrap), 0.0
        )

        result = {
            'turnover_ci': percentile_interval(turnover_samples),
            'sales_ci': percentile_interval(sales_samples),
            'financial_ci': percentile_interval(savings_samples),
        }

        logger.info(
            f"Bootstrap (n={self.n_bootstrap:,}, seed={self.seed}) | "
            f"turnover CI [{result['turnover_ci'][0]:.2f}, "
            f"{result['turnover_ci'][1]:.2f}]"
        )
        return result


def compute_confidence_intervals(
    df: pd.DataFrame,
    seed: int = DEFAULT_SEED,
    n_bootstrap: int = DEFAULT_BOOTSTRAP_SAMPLES
) -> Dict[str, Interval]:
    """Functional shortcut for BootstrapEstimator(n_bootstrap, seed).compute(df)."""
    return BootstrapEstimator(n_bootstrap=n_bootstrap, seed=seed).compute(df)
