"""Supabase repository for milk entries."""

from dataclasses import dataclass
from datetime import date, timedelta
from uuid import UUID

from supabase import Client

from dairy_collection.adapters.supabase_store import store_errors
from dairy_collection.domain.errors import StoreError
from dairy_collection.domain.milk import MilkEntry, NewMilkEntry
from dairy_collection.services.milk import MilkEntryRepository


@dataclass
class SupabaseMilkEntryRepository(MilkEntryRepository):
    """Supabase implementation for milk entry storage."""

    client: Client

    def create_entry(self, user_id: UUID, entry: NewMilkEntry) -> UUID:
        """Insert an entry row and return its id."""
        with store_errors("milk entry insert"):
            response = (
                self.client.table("milk_entries")
                .insert(
                    {
                        "user_id": str(user_id),
                        "entry_date": entry.entry_date.isoformat(),
                        "session": entry.session,
                        "quantity": entry.quantity,
                        "fat": entry.fat,
                        "snf": entry.snf,
                        "amount": entry.amount,
                    }
                )
                .execute()
            )
            if not response.data:
                raise StoreError("Failed to create milk entry")
            return UUID(str(response.data[0]["id"]))

    def list_entries(
        self, user_id: UUID, start: date, end: date, sessions: tuple[str, ...]
    ) -> list[MilkEntry]:
        """Return entries dated within [start, end] for the given sessions."""
        # entry_date may carry a time component, so bound by the next midnight.
        # Session is compared after lowercasing; PostgREST `in` is case-sensitive.
        with store_errors("milk entry query"):
            response = (
                self.client.table("milk_entries")
                .select("id, user_id, entry_date, session, quantity, fat, snf, amount")
                .eq("user_id", str(user_id))
                .gte("entry_date", start.isoformat())
                .lt("entry_date", (end + timedelta(days=1)).isoformat())
                .order("entry_date", desc=False)
                .execute()
            )
            entries = [_parse_row(row) for row in response.data or []]
        return [entry for entry in entries if entry.session in sessions]


def _parse_row(row: dict[str, object]) -> MilkEntry:
    return MilkEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        entry_date=date.fromisoformat(str(row["entry_date"])[:10]),
        session=str(row.get("session") or "").strip().lower(),
        quantity=float(row.get("quantity") or 0.0),
        fat=float(row.get("fat") or 0.0),
        snf=float(row.get("snf") or 0.0),
        amount=float(row.get("amount") or 0.0),
    )
