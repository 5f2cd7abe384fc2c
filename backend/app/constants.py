"""Application constants to avoid magic strings."""

from enum import Enum


class DividendStatus(str, Enum):
    """Lifecycle state of a dividend record.

    Only PAID records count toward realized income and cadence inference.
    SCHEDULED and PROJECTED are forward-looking entries.
    """

    SCHEDULED = "scheduled"
    PROJECTED = "projected"
    PAID = "paid"


class ValueHistoryRange(str, Enum):
    """Lookback windows for the stored portfolio value history."""

    ONE_MONTH = "1m"
    THREE_MONTHS = "3m"
    SIX_MONTHS = "6m"
    ONE_YEAR = "1y"
    ALL = "all"


# Days covered by each bounded value-history range
VALUE_HISTORY_RANGE_DAYS = {
    ValueHistoryRange.ONE_MONTH: 30,
    ValueHistoryRange.THREE_MONTHS: 90,
    ValueHistoryRange.SIX_MONTHS: 180,
    ValueHistoryRange.ONE_YEAR: 365,
}
