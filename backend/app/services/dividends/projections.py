"""Cadence inference and forward dividend projection.

A holding is one (account, ticker) pair. Its cadence is classified from the
gap between its two most recent paid dividends only, so a change in payout
schedule shows up as soon as one new payment lands. A single late payment
therefore misclassifies the holding until the next payment arrives; the
projection is a best-effort estimate and is labelled as such in the UI.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date, timedelta
from decimal import Decimal

from app.constants import DividendStatus
from app.services.dividends.aggregation import (
    is_realized,
    paid_only,
    status_of,
    validated_amount,
)
from app.services.dividends.dates import add_months, month_index, parse_pay_date, shift_month
from app.services.dividends.exceptions import InvalidDividendDataError
from app.services.dividends.types import (
    CalendarDay,
    Cadence,
    DividendRecord,
    ExcludedHolding,
    HoldingProjection,
    MonthlyProjection,
    ProjectionChartMonth,
    ProjectionDetail,
    ProjectionResult,
    ProjectionSummary,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")

INSUFFICIENT_HISTORY = "insufficient history"
IRREGULAR_HISTORY = "irregular payment history"
NO_SHARES_HELD = "no shares currently held"

# Inclusive day-gap bands per cadence
CADENCE_GAP_BANDS: list[tuple[Cadence, int, int]] = [
    (Cadence.MONTHLY, 25, 35),
    (Cadence.QUARTERLY, 80, 100),
    (Cadence.ANNUAL, 350, 380),
]

CADENCE_MONTHS = {
    Cadence.MONTHLY: 1,
    Cadence.QUARTERLY: 3,
    Cadence.ANNUAL: 12,
}

PAYMENTS_PER_YEAR = {
    Cadence.MONTHLY: 12,
    Cadence.QUARTERLY: 4,
    Cadence.ANNUAL: 1,
}

# Blended estimate tuning
BLEND_RECENT_PAYMENTS = 4
BLEND_YOY_WINDOW_DAYS = 60
BLEND_GROWTH_CAP = Decimal("0.3")
BLEND_GROWTH_WEIGHT = Decimal("0.5")

CHART_PAST_MONTHS = 12
CHART_FUTURE_MONTHS = 12


def holding_key(account_id: str | None, ticker: str) -> str:
    """Identifier of an (account, ticker) holding."""
    return f"{account_id or ''}:{ticker.strip().upper()}"


def classify_gap(days: int) -> Cadence:
    """Map a day gap between two payments onto a cadence band."""
    for cadence, low, high in CADENCE_GAP_BANDS:
        if low <= days <= high:
            return cadence
    return Cadence.IRREGULAR


def infer_cadence(pay_dates: Iterable[date | str]) -> Cadence | None:
    """Classify cadence from the latest interval between payments.

    Returns None when fewer than two pay dates are given.
    """
    dates = sorted(parse_pay_date(d) for d in pay_dates)
    if len(dates) < 2:
        return None
    return classify_gap((dates[-1] - dates[-2]).days)


def next_pay_date(last_paid: date, cadence: Cadence) -> date:
    """Snap the next payment onto the cadence grid (+1, +3 or +12 months)."""
    if cadence is Cadence.IRREGULAR:
        raise ValueError("Irregular holdings have no next pay date")
    return add_months(last_paid, CADENCE_MONTHS[cadence])


def group_by_holding(records: Iterable[DividendRecord]) -> dict[str, list[DividendRecord]]:
    """Group records by (account, ticker), keeping first-seen order."""
    groups: dict[str, list[DividendRecord]] = {}
    for record in records:
        groups.setdefault(holding_key(record.account_id, record.ticker), []).append(record)
    return groups


def _sorted_paid(group: Iterable[DividendRecord]) -> list[tuple[date, DividendRecord]]:
    paid = [(parse_pay_date(r.pay_date), r) for r in paid_only(group)]
    paid.sort(key=lambda item: item[0])
    return paid


def _forward_entries_by_month(group: Iterable[DividendRecord]) -> dict[tuple[int, int], Decimal]:
    """Scheduled/projected amounts already entered for a holding, by (year, month)."""
    entries: dict[tuple[int, int], Decimal] = {}
    for record in group:
        if is_realized(status_of(record)):
            continue
        pay_date = parse_pay_date(record.pay_date)
        key = (pay_date.year, pay_date.month)
        entries[key] = entries.get(key, ZERO) + validated_amount(record)
    return entries


def _exclude(group: list[DividendRecord], reason: str) -> ExcludedHolding:
    first = group[0]
    logger.debug(f"Excluding {first.ticker} ({first.account_name}) from projection: {reason}")
    return ExcludedHolding(
        ticker=first.ticker.strip().upper(),
        account_id=first.account_id,
        account_name=first.account_name,
        reason=reason,
    )


def _next_amount_from_shares(last_paid: DividendRecord, shares: Decimal) -> Decimal:
    """Last per-share amount applied to the shares held today."""
    if shares < 0:
        raise InvalidDividendDataError(f"Negative share count for {last_paid.ticker}", field="shares")
    return Decimal(str(last_paid.amount_per_share)) * shares


def _next_amount_from_last_total(last_paid: DividendRecord) -> Decimal:
    """Used when no current share count is known for the holding."""
    return validated_amount(last_paid)


def _per_share_amount(record: DividendRecord) -> Decimal:
    amount = Decimal(str(record.amount_per_share))
    if amount < 0:
        raise InvalidDividendDataError(
            f"Negative amount per share for {record.ticker}: {amount}", field="amount_per_share"
        )
    return amount


def _current_shares(key: str, shares_by_holding: Mapping[str, Decimal] | None) -> Decimal | None:
    """Shares held today, or None when the holding has no known share count."""
    if shares_by_holding is None or key not in shares_by_holding:
        return None
    return Decimal(shares_by_holding[key])


def build_holding_projections(
    records: Iterable[DividendRecord],
    shares_by_holding: Mapping[str, Decimal] | None = None,
) -> ProjectionResult:
    """Project the next payment and annual income of every holding.

    Args:
        records: All dividend records of the holdings (any status)
        shares_by_holding: Current total shares keyed by holding_key(); when a
            holding is missing from the mapping its last paid total is reused.
            Keys with shares but no dividends are excluded as insufficient history

    Returns:
        ProjectionResult with projections sorted by projected annual income
        (descending) and every excluded holding with its reason.
    """
    result = ProjectionResult()
    groups = group_by_holding(records)

    for key, group in groups.items():
        paid = _sorted_paid(group)
        if len(paid) < 2:
            result.excluded.append(_exclude(group, INSUFFICIENT_HISTORY))
            continue

        cadence = classify_gap((paid[-1][0] - paid[-2][0]).days)
        if cadence is Cadence.IRREGULAR:
            result.excluded.append(_exclude(group, IRREGULAR_HISTORY))
            continue

        last_date, last_paid = paid[-1]
        shares = _current_shares(key, shares_by_holding)
        if shares is not None:
            if shares == 0:
                result.excluded.append(_exclude(group, NO_SHARES_HELD))
                continue
            next_amount = _next_amount_from_shares(last_paid, shares)
        else:
            next_amount = _next_amount_from_last_total(last_paid)

        result.holding_projections.append(
            HoldingProjection(
                holding_key=key,
                ticker=last_paid.ticker.strip().upper(),
                account_id=last_paid.account_id,
                account_name=last_paid.account_name,
                cadence=cadence,
                next_pay_date=next_pay_date(last_date, cadence),
                next_pay_amount=next_amount,
                projected_annual=next_amount * PAYMENTS_PER_YEAR[cadence],
            )
        )

    # Lots that never paid a dividend
    for key, shares in (shares_by_holding or {}).items():
        if key in groups or Decimal(shares) <= 0:
            continue
        account_id, _, ticker = key.rpartition(":")
        logger.debug(f"Excluding {ticker} from projection: {INSUFFICIENT_HISTORY}")
        result.excluded.append(
            ExcludedHolding(
                ticker=ticker,
                account_id=account_id or None,
                account_name=None,
                reason=INSUFFICIENT_HISTORY,
            )
        )

    result.holding_projections.sort(
        key=lambda p: (-p.projected_annual, p.ticker, p.account_name or "")
    )

    total_annual = result.projected_annual
    for projection in result.holding_projections:
        projection.pct_of_total = (
            projection.projected_annual / total_annual * 100 if total_annual > 0 else ZERO
        )

    return result


def blended_projection_amount(records: Iterable[DividendRecord], today: date) -> Decimal:
    """Estimate a holding's next payout from its recent payments and YoY trend.

    The average of the last four payments is nudged by half of the
    year-over-year change (capped at +/-30%). Falls back to the last paid
    amount when fewer than two payments landed in the past year.
    """
    return _blend(_sorted_paid(records), today, validated_amount)


def _blend(
    paid: list[tuple[date, DividendRecord]],
    today: date,
    amount_of: Callable[[DividendRecord], Decimal],
) -> Decimal:
    if not paid:
        return ZERO
    if len(paid) == 1:
        return amount_of(paid[0][1])

    twelve_months_ago = add_months(today, -12)
    recent_count = sum(1 for d, _ in paid if d >= twelve_months_ago)
    if recent_count < 2:
        return amount_of(paid[-1][1])

    recent = paid[-BLEND_RECENT_PAYMENTS:]
    recent_avg = sum((amount_of(r) for _, r in recent), ZERO) / len(recent)

    most_recent_date, most_recent = paid[-1]
    year_ago_target = add_months(most_recent_date, -12)
    window = timedelta(days=BLEND_YOY_WINDOW_DAYS)
    candidates = [(d, r) for d, r in paid if abs(d - year_ago_target) <= window]
    if not candidates:
        return recent_avg

    _, year_ago_payment = min(candidates, key=lambda item: abs(item[0] - year_ago_target))
    year_ago_amount = amount_of(year_ago_payment)
    if year_ago_amount == 0:
        return recent_avg

    raw_growth = (amount_of(most_recent) - year_ago_amount) / year_ago_amount
    capped_growth = max(-BLEND_GROWTH_CAP, min(BLEND_GROWTH_CAP, raw_growth))
    return recent_avg * (1 + capped_growth * BLEND_GROWTH_WEIGHT)


def _lands_on_grid(slot_year: int, slot_month: int, last_paid: date, cadence: Cadence) -> bool:
    diff = month_index(slot_year, slot_month) - month_index(last_paid.year, last_paid.month)
    return diff > 0 and diff % CADENCE_MONTHS[cadence] == 0


def _forward_estimate(
    group: list[DividendRecord],
    paid: list[tuple[date, DividendRecord]],
    today: date,
    shares: Decimal | None,
) -> Decimal:
    if shares is None:
        return _blend(paid, today, validated_amount)
    if shares < 0:
        raise InvalidDividendDataError(f"Negative share count for {group[0].ticker}", field="shares")
    return _blend(paid, today, _per_share_amount) * shares


def build_chart_data(
    records: Iterable[DividendRecord],
    today: date,
    shares_by_holding: Mapping[str, Decimal] | None = None,
) -> list[ProjectionChartMonth]:
    """Actual vs projected income for the 12 months up to today and the 12 after.

    Past months (today's month included) carry actual paid income and what
    the cadence model would have predicted from the payments before them.
    Future months carry entered scheduled/projected amounts where present,
    otherwise the blended estimate on the cadence grid. When a holding has a
    current share count, the estimate is blended per share and applied to
    those shares; holdings with no shares left get no future months.
    """
    records = list(records)
    slots: list[ProjectionChartMonth] = []
    for offset in range(-(CHART_PAST_MONTHS - 1), CHART_FUTURE_MONTHS + 1):
        year, month = shift_month(today.year, today.month, offset)
        is_past = offset <= 0
        slots.append(
            ProjectionChartMonth(year=year, month=month, is_past=is_past, actual=ZERO if is_past else None)
        )
    slot_by_month = {(s.year, s.month): s for s in slots}

    for record in paid_only(records):
        pay_date = parse_pay_date(record.pay_date)
        slot = slot_by_month.get((pay_date.year, pay_date.month))
        if slot is None or not slot.is_past:
            continue
        amount = validated_amount(record)
        slot.actual += amount
        slot.detail.append(
            ProjectionDetail(
                ticker=record.ticker.strip().upper(),
                account_name=record.account_name,
                amount=amount,
                status=DividendStatus.PAID,
            )
        )

    for key, group in group_by_holding(records).items():
        paid = _sorted_paid(group)
        if len(paid) < 2:
            continue
        cadence = infer_cadence(d for d, _ in paid)
        if cadence is Cadence.IRREGULAR:
            continue

        ticker = group[0].ticker.strip().upper()
        account_name = group[0].account_name
        last_date = paid[-1][0]
        shares = _current_shares(key, shares_by_holding)
        sold_out = shares is not None and shares == 0
        blended = _forward_estimate(group, paid, today, shares)
        forward_entries = _forward_entries_by_month(group)

        for slot in slots:
            if not slot.is_past:
                if sold_out:
                    continue
                entered = forward_entries.get((slot.year, slot.month))
                if entered is not None:
                    amount = entered
                elif _lands_on_grid(slot.year, slot.month, last_date, cadence):
                    amount = blended
                else:
                    continue
                slot.projected += amount
                slot.detail.append(ProjectionDetail(ticker, account_name, amount, DividendStatus.PROJECTED))
                continue

            slot_start = date(slot.year, slot.month, 1)
            paid_before = [(d, r) for d, r in paid if d < slot_start]
            if len(paid_before) < 2:
                continue
            cadence_before = infer_cadence(d for d, _ in paid_before)
            if cadence_before is Cadence.IRREGULAR:
                continue
            last_before_date, last_before = paid_before[-1]
            if not _lands_on_grid(slot.year, slot.month, last_before_date, cadence_before):
                continue

            amount = validated_amount(last_before)
            slot.projected += amount
            already_paid = any(
                d.ticker == ticker and d.account_name == account_name and d.status is DividendStatus.PAID
                for d in slot.detail
            )
            if not already_paid:
                slot.detail.append(ProjectionDetail(ticker, account_name, amount, DividendStatus.PROJECTED))

    return slots


def project_monthly_income(
    records: Iterable[DividendRecord],
    today: date,
    months_forward: int = 12,
    shares_by_holding: Mapping[str, Decimal] | None = None,
) -> list[MonthlyProjection]:
    """Projected income per month for the months after today's month.

    Each regular holding repeats its next payment on its cadence grid, except
    in months where a scheduled/projected entry already exists. The next
    payment is the last per-share amount times the current shares when the
    holding has a share count, otherwise the last paid total.
    """
    slots = []
    for offset in range(1, months_forward + 1):
        year, month = shift_month(today.year, today.month, offset)
        slots.append(MonthlyProjection(year=year, month=month))

    for key, group in group_by_holding(records).items():
        paid = _sorted_paid(group)
        if len(paid) < 2:
            continue
        cadence = infer_cadence(d for d, _ in paid)
        if cadence is Cadence.IRREGULAR:
            continue

        last_date, last_paid = paid[-1]
        shares = _current_shares(key, shares_by_holding)
        if shares is None:
            last_amount = _next_amount_from_last_total(last_paid)
        elif shares == 0:
            continue
        else:
            last_amount = _next_amount_from_shares(last_paid, shares)
        entered_months = _forward_entries_by_month(group)

        for slot in slots:
            if (slot.year, slot.month) in entered_months:
                continue
            if _lands_on_grid(slot.year, slot.month, last_date, cadence):
                slot.projected_income += last_amount

    return slots


def build_dividend_calendar(
    records: Iterable[DividendRecord], year: int, month: int
) -> list[CalendarDay]:
    """Dividends of one month grouped by pay date, earliest first."""
    by_date: dict[date, list[DividendRecord]] = {}
    for record in records:
        pay_date = parse_pay_date(record.pay_date)
        if pay_date.year == year and pay_date.month == month:
            by_date.setdefault(pay_date, []).append(record)

    return [CalendarDay(date=d, dividends=by_date[d]) for d in sorted(by_date)]


def projection_trend(ttm_income: Decimal, projected_annual: Decimal) -> tuple[Decimal, Decimal]:
    """Projected annual income minus trailing income, absolute and in percent."""
    trend = projected_annual - ttm_income
    trend_pct = trend / ttm_income * 100 if ttm_income > 0 else ZERO
    return trend, trend_pct


def build_projection_response(
    records: Iterable[DividendRecord],
    shares_by_holding: Mapping[str, Decimal] | None,
    today: date,
    ttm_months: int = 12,
) -> ProjectionSummary:
    """Holding projections, trailing income, trend and chart series together."""
    records = list(records)
    result = build_holding_projections(records, shares_by_holding)

    window_start = add_months(today, -ttm_months)
    ttm_income = sum(
        (
            validated_amount(r)
            for r in paid_only(records)
            if window_start <= parse_pay_date(r.pay_date) <= today
        ),
        ZERO,
    )
    trend, trend_pct = projection_trend(ttm_income, result.projected_annual)

    return ProjectionSummary(
        result=result,
        ttm_income=ttm_income,
        trend=trend,
        trend_pct=trend_pct,
        chart_data=build_chart_data(records, today, shares_by_holding),
    )
