"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from dairy_collection.adapters.supabase_milk_entry_repository import (
    SupabaseMilkEntryRepository,
)
from dairy_collection.adapters.supabase_store import close_store, open_store
from dairy_collection.adapters.supabase_user_repository import SupabaseUserRepository
from dairy_collection.config import Settings
from dairy_collection.services.milk import MilkEntryService
from dairy_collection.services.summary import SummaryService
from dairy_collection.services.users import UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    milk_entry_service: MilkEntryService
    summary_service: SummaryService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = open_store(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    milk_entry_repository = SupabaseMilkEntryRepository(supabase_client)
    user_service = UserService(user_repository)
    milk_entry_service = MilkEntryService(
        user_service=user_service,
        repository=milk_entry_repository,
    )
    summary_service = SummaryService(
        user_service=user_service,
        repository=milk_entry_repository,
        timezone_name=resolved_settings.report_timezone,
        window_days=resolved_settings.summary_window_days,
    )

    async def close_resources() -> None:
        close_store(supabase_client)

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        milk_entry_service=milk_entry_service,
        summary_service=summary_service,
        close_resources=close_resources,
    )
