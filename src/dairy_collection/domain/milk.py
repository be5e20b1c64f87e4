"""Domain models for milk deliveries and summaries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

MORNING = "morning"
EVENING = "evening"
SESSIONS: tuple[str, ...] = (MORNING, EVENING)


def normalize_session(session: str) -> str | None:
    """Return the canonical session name, or None when it is not a session."""
    candidate = session.strip().lower()
    if candidate in SESSIONS:
        return candidate
    return None


@dataclass(frozen=True)
class NewMilkEntry:
    """A validated delivery waiting to be stored."""

    entry_date: date
    session: str
    quantity: float
    fat: float
    snf: float
    amount: float


@dataclass(frozen=True)
class MilkEntry:
    """A recorded milk delivery."""

    id: UUID
    user_id: UUID
    entry_date: date
    session: str
    quantity: float
    fat: float
    snf: float
    amount: float


@dataclass(frozen=True)
class SummaryRow:
    """Aggregated deliveries for one day and session."""

    date: date
    session: str
    total_quantity: float
    avg_fat: float
    avg_snf: float
    total_amount: float

    def to_dict(self) -> dict[str, object]:
        """Return the JSON-ready representation."""
        return {
            "date": self.date.isoformat(),
            "session": self.session,
            "total_quantity": self.total_quantity,
            "avg_fat": self.avg_fat,
            "avg_snf": self.avg_snf,
            "total_amount": self.total_amount,
        }
