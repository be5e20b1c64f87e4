"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest
from passlib.context import CryptContext

from dairy_collection.config import Settings
from dairy_collection.containers import AppContainer
from dairy_collection.domain.errors import StoreError
from dairy_collection.domain.milk import MilkEntry, NewMilkEntry
from dairy_collection.domain.models import UserRecord
from dairy_collection.services.milk import MilkEntryRepository, MilkEntryService
from dairy_collection.services.summary import SummaryService
from dairy_collection.services.users import UserRepository, UserService


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory member repository for tests."""

    users: dict[str, UserRecord] = field(default_factory=dict)

    def get_by_account_no(self, account_no: str) -> UserRecord | None:
        return self.users.get(account_no)

    def exists(self, account_no: str, email: str | None) -> bool:
        if account_no in self.users:
            return True
        return bool(email) and any(
            user.email == email for user in self.users.values()
        )

    def create_user(
        self, name: str, account_no: str, email: str | None, password_hash: str
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            name=name,
            account_no=account_no,
            email=email,
            password_hash=password_hash,
        )
        self.users[account_no] = user
        return user


@dataclass
class InMemoryMilkEntryRepository(MilkEntryRepository):
    """In-memory milk entry repository for tests."""

    entries: list[MilkEntry] = field(default_factory=list)
    list_calls: int = 0
    fail: bool = False

    def create_entry(self, user_id: UUID, entry: NewMilkEntry) -> UUID:
        if self.fail:
            raise StoreError("Store failure during milk entry insert")
        entry_id = uuid4()
        self.entries.append(
            MilkEntry(
                id=entry_id,
                user_id=user_id,
                entry_date=entry.entry_date,
                session=entry.session,
                quantity=entry.quantity,
                fat=entry.fat,
                snf=entry.snf,
                amount=entry.amount,
            )
        )
        return entry_id

    def list_entries(
        self, user_id: UUID, start: date, end: date, sessions: tuple[str, ...]
    ) -> list[MilkEntry]:
        if self.fail:
            raise StoreError("Store failure during milk entry query")
        self.list_calls += 1
        return [
            entry
            for entry in self.entries
            if entry.user_id == user_id
            and start <= entry.entry_date <= end
            and entry.session.lower() in sessions
        ]


def add_entry(  # noqa: PLR0913
    repository: InMemoryMilkEntryRepository,
    user_id: UUID,
    entry_date: date,
    session: str = "morning",
    quantity: float = 10.0,
    fat: float = 4.0,
    snf: float = 8.5,
    amount: float = 350.0,
) -> MilkEntry:
    """Append a stored entry directly, bypassing validation."""
    entry = MilkEntry(
        id=uuid4(),
        user_id=user_id,
        entry_date=entry_date,
        session=session,
        quantity=quantity,
        fat=fat,
        snf=snf,
        amount=amount,
    )
    repository.entries.append(entry)
    return entry


def fast_password_context() -> CryptContext:
    """Cheap bcrypt rounds so tests do not spend seconds hashing."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=4)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        cors_origins="http://localhost:3000,https://dairy.example.com",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def milk_entry_repository() -> InMemoryMilkEntryRepository:
    return InMemoryMilkEntryRepository()


@pytest.fixture
def user_service(user_repository: InMemoryUserRepository) -> UserService:
    return UserService(user_repository, password_context=fast_password_context())


@pytest.fixture
def member(user_service: UserService) -> UserRecord:
    return user_service.register(
        name="Asha",
        account_no="1001",
        password="secret-pass",
        email="asha@example.com",
    )


@pytest.fixture
def container(
    settings: Settings,
    user_service: UserService,
    milk_entry_repository: InMemoryMilkEntryRepository,
) -> AppContainer:
    milk_entry_service = MilkEntryService(
        user_service=user_service,
        repository=milk_entry_repository,
    )
    summary_service = SummaryService(
        user_service=user_service,
        repository=milk_entry_repository,
        timezone_name=settings.report_timezone,
        window_days=settings.summary_window_days,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=user_service,
        milk_entry_service=milk_entry_service,
        summary_service=summary_service,
        close_resources=close_resources,
    )
