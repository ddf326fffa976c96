from retailpulse.forecasting.wma import (
    WMAForecaster, compute_wma, DEFAULT_WEIGHTS, WMA_COL, FORECAST_COL
)

__all__ = ['WMAForecaster', 'compute_wma', 'DEFAULT_WEIGHTS', 'WMA_COL',
           'FORECAST_COL']
