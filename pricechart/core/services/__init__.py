"""Service layer."""

from pricechart.core.services.chart_service import ChartDataService

__all__ = ["ChartDataService"]
