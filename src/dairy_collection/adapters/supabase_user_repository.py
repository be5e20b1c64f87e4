"""Supabase-backed member repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from dairy_collection.adapters.supabase_store import store_errors
from dairy_collection.domain.errors import StoreError
from dairy_collection.domain.models import UserRecord
from dairy_collection.services.users import UserRepository

_COLUMNS = "id, name, account_no, email, password_hash"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for member persistence."""

    client: Client

    def get_by_account_no(self, account_no: str) -> UserRecord | None:
        """Return the member for an account number, if present."""
        with store_errors("user lookup"):
            response = (
                self.client.table("users")
                .select(_COLUMNS)
                .eq("account_no", account_no)
                .limit(1)
                .execute()
            )
            if response.data:
                return _parse_row(response.data[0])
        return None

    def exists(self, account_no: str, email: str | None) -> bool:
        """Return True when the account number or email is taken."""
        with store_errors("user lookup"):
            by_account = (
                self.client.table("users")
                .select("id")
                .eq("account_no", account_no)
                .limit(1)
                .execute()
            )
            if by_account.data:
                return True
            if not email:
                return False
            by_email = (
                self.client.table("users")
                .select("id")
                .eq("email", email)
                .limit(1)
                .execute()
            )
        return bool(by_email.data)

    def create_user(
        self, name: str, account_no: str, email: str | None, password_hash: str
    ) -> UserRecord:
        """Create a new member row and return it."""
        with store_errors("user insert"):
            response = (
                self.client.table("users")
                .insert(
                    {
                        "name": name,
                        "account_no": account_no,
                        "email": email,
                        "password_hash": password_hash,
                    }
                )
                .execute()
            )
            if not response.data:
                raise StoreError("Failed to create user in Supabase")
            return _parse_row(response.data[0])


def _parse_row(row: dict[str, object]) -> UserRecord:
    email = row.get("email")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        account_no=str(row["account_no"]),
        email=str(email) if email else None,
        password_hash=str(row.get("password_hash", "")),
    )
