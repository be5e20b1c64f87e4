"""Recording milk deliveries."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from dairy_collection.domain.errors import ValidationError
from dairy_collection.domain.milk import MilkEntry, NewMilkEntry, normalize_session
from dairy_collection.services.users import UserService

_logger = logging.getLogger(__name__)


class MilkEntryRepository(Protocol):
    """Persistence interface for milk entries."""

    def create_entry(self, user_id: UUID, entry: NewMilkEntry) -> UUID:
        """Store an entry and return its id."""

    def list_entries(
        self, user_id: UUID, start: date, end: date, sessions: tuple[str, ...]
    ) -> list[MilkEntry]:
        """Return entries dated within [start, end] for the given sessions."""


@dataclass
class MilkEntryService:
    """Service for validating and storing deliveries."""

    user_service: UserService
    repository: MilkEntryRepository

    def record_entry(  # noqa: PLR0913
        self,
        account_no: str,
        entry_date: date,
        session: str,
        quantity: float | None,
        fat: float | None = None,
        snf: float | None = None,
        amount: float | None = None,
    ) -> UUID:
        """Validate a delivery, resolve its member and store it."""
        entry = build_entry(entry_date, session, quantity, fat, snf, amount)
        user = self.user_service.resolve_identity(account_no)
        entry_id = self.repository.create_entry(user.id, entry)
        _logger.info(
            "Milk entry stored: account_no=%s date=%s session=%s",
            account_no,
            entry.entry_date.isoformat(),
            entry.session,
        )
        return entry_id


def build_entry(  # noqa: PLR0913
    entry_date: date,
    session: str,
    quantity: float | None,
    fat: float | None,
    snf: float | None,
    amount: float | None,
) -> NewMilkEntry:
    """Return a normalized entry or raise ValidationError."""
    if not session:
        raise ValidationError("Missing required fields")
    canonical = normalize_session(session)
    if canonical is None:
        raise ValidationError("Invalid session value")
    if quantity is None or quantity <= 0:
        raise ValidationError("Quantity must be greater than zero")
    measures = {"fat": fat, "snf": snf, "amount": amount}
    for name, value in measures.items():
        if value is not None and value < 0:
            raise ValidationError(f"{name} cannot be negative")
    return NewMilkEntry(
        entry_date=entry_date,
        session=canonical,
        quantity=float(quantity),
        fat=float(fat or 0.0),
        snf=float(snf or 0.0),
        amount=float(amount or 0.0),
    )
