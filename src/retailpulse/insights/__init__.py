from retailpulse.insights.assistant import KeywordAssistant
from retailpulse.insights.status import (
    StatusReport, turnover_status, holding_period_color, turnover_color,
    growth_color
)

__all__ = ['KeywordAssistant', 'StatusReport', 'turnover_status',
           'holding_period_color', 'turnover_color', 'growth_color']
