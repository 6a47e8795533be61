"""Report composition for export."""

from commodity_tracker.reports.builder import (
    CommodityLine,
    NewsLine,
    Report,
    TariffLine,
    build_report,
    format_change,
    format_price,
    market_analysis,
    report_file_name,
)

__all__ = [
    "Report",
    "CommodityLine",
    "TariffLine",
    "NewsLine",
    "build_report",
    "format_price",
    "format_change",
    "market_analysis",
    "report_file_name",
]
