"""RetailPulse: inventory turnover and sales forecasting dashboard."""

__version__ = '1.0.0'
