"""Domain models for dairy collection members."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserRecord:
    """Represents a member stored in the database."""

    id: UUID
    name: str
    account_no: str
    email: str | None
    password_hash: str
