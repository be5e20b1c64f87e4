"""Calendar grid and aggregation rules for milk summaries.

A summary is a dense grid: every day in the window is paired with every
session, in chronological order with morning before evening. Entries are
folded into the grid and cells without deliveries keep zeroed totals.
"""

from collections import defaultdict
from collections.abc import Iterable, Sequence
from datetime import date, timedelta
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from dairy_collection.domain.milk import SESSIONS, MilkEntry, SummaryRow

SUMMARY_WINDOW_DAYS = 10

_CENTS = Decimal("0.01")


def date_window(reference: date, days: int = SUMMARY_WINDOW_DAYS) -> list[date]:
    """Return the `days` calendar days ending on `reference`, oldest first."""
    if days < 1:
        raise ValueError("Summary window must cover at least one day")
    start = reference - timedelta(days=days - 1)
    return [start + timedelta(days=offset) for offset in range(days)]


def build_grid(
    reference: date,
    days: int = SUMMARY_WINDOW_DAYS,
    sessions: Sequence[str] = SESSIONS,
) -> list[tuple[date, str]]:
    """Return every (day, session) cell of the window in report order."""
    return [
        (day, session) for day in date_window(reference, days) for session in sessions
    ]


def round2(value: float) -> float:
    """Round half away from zero to two decimals."""
    return float(Decimal(str(value)).quantize(_CENTS, rounding=ROUND_HALF_UP))


def weighted_avg(pairs: Iterable[tuple[float, float]]) -> float:
    """Return sum(qty * value) / sum(qty), or 0 when there is no quantity."""
    total_quantity = 0.0
    weighted_total = 0.0
    for quantity, value in pairs:
        total_quantity += quantity
        weighted_total += quantity * value
    if not total_quantity:
        return 0.0
    return weighted_total / total_quantity


def aggregate_cell(
    day: date, session: str, entries: Sequence[MilkEntry]
) -> SummaryRow:
    """Fold the entries of a single cell into a summary row."""
    return SummaryRow(
        date=day,
        session=session,
        total_quantity=round2(sum(entry.quantity for entry in entries)),
        avg_fat=round2(weighted_avg((entry.quantity, entry.fat) for entry in entries)),
        avg_snf=round2(weighted_avg((entry.quantity, entry.snf) for entry in entries)),
        total_amount=round2(sum(entry.amount for entry in entries)),
    )


def summarize(
    user_id: UUID,
    reference: date,
    entries: Iterable[MilkEntry],
    days: int = SUMMARY_WINDOW_DAYS,
) -> list[SummaryRow]:
    """Build the dense summary grid for a member."""
    grid = build_grid(reference, days)
    by_cell: dict[tuple[date, str], list[MilkEntry]] = defaultdict(list)
    for entry in entries:
        if entry.user_id != user_id:
            continue
        by_cell[(entry.entry_date, entry.session.lower())].append(entry)
    return [
        aggregate_cell(day, session, by_cell.get((day, session), []))
        for day, session in grid
    ]
