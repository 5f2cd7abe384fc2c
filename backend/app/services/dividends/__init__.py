"""Dividend income calculators.

Pure functions over DividendRecord collections: calendar aggregation,
growth metrics, cadence-based projections and trailing income series.
Callers load the records through repositories and pass them in.
"""

from .aggregation import (
    aggregate,
    aggregate_by_month,
    aggregate_by_quarter,
    aggregate_by_year,
    all_time_income,
    annualized_income,
    paid_only,
    period_total,
    ytd_income,
)
from .dates import quarter_of
from .exceptions import InvalidDividendDataError
from .growth import (
    compare_periods,
    compound_annual_growth_rate,
    quarter_over_quarter_growth,
    year_over_year_growth,
)
from .projections import (
    blended_projection_amount,
    build_chart_data,
    build_dividend_calendar,
    build_holding_projections,
    build_projection_response,
    classify_gap,
    holding_key,
    infer_cadence,
    next_pay_date,
    project_monthly_income,
)
from .trailing import build_daily_income, build_trailing_income, day_window, month_window
from .types import Cadence, DividendRecord

__all__ = [
    "Cadence",
    "DividendRecord",
    "InvalidDividendDataError",
    "aggregate",
    "aggregate_by_month",
    "aggregate_by_quarter",
    "aggregate_by_year",
    "all_time_income",
    "annualized_income",
    "blended_projection_amount",
    "build_chart_data",
    "build_daily_income",
    "build_dividend_calendar",
    "build_holding_projections",
    "build_projection_response",
    "build_trailing_income",
    "classify_gap",
    "compare_periods",
    "compound_annual_growth_rate",
    "day_window",
    "holding_key",
    "infer_cadence",
    "month_window",
    "next_pay_date",
    "paid_only",
    "period_total",
    "project_monthly_income",
    "quarter_of",
    "quarter_over_quarter_growth",
    "year_over_year_growth",
    "ytd_income",
]
