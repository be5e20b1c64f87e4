"""Rolling milk summary reports."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from dairy_collection.domain.milk import SESSIONS, SummaryRow
from dairy_collection.domain.summary import SUMMARY_WINDOW_DAYS, date_window, summarize
from dairy_collection.services.milk import MilkEntryRepository
from dairy_collection.services.users import UserService

_logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SummaryService:
    """Builds the day-by-session delivery report for a member."""

    user_service: UserService
    repository: MilkEntryRepository
    timezone_name: str = "UTC"
    window_days: int = SUMMARY_WINDOW_DAYS
    clock: Callable[[], datetime] = _utc_now

    def today(self) -> date:
        """Return the current date in the report timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name)).date()

    def get_summary(
        self, account_no: str, reference_date: date | None = None
    ) -> list[SummaryRow]:
        """Return the dense summary ending on `reference_date` (default today)."""
        user = self.user_service.resolve_identity(account_no)
        reference = reference_date or self.today()
        days = date_window(reference, self.window_days)
        entries = self.repository.list_entries(user.id, days[0], days[-1], SESSIONS)
        rows = summarize(user.id, reference, entries, self.window_days)
        _logger.info(
            "Milk summary built: account_no=%s reference=%s entries=%s",
            account_no,
            reference.isoformat(),
            len(entries),
        )
        return rows
