"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import date

from fastapi import FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from dairy_collection.api.models import (
    LoginRequest,
    LoginResponse,
    MemberPayload,
    MessageResponse,
    MilkEntryRequest,
    MilkEntryResponse,
    SignupRequest,
    SummaryRowPayload,
)
from dairy_collection.app_logging import configure_logging
from dairy_collection.config import parse_cors_origins
from dairy_collection.containers import AppContainer
from dairy_collection.domain.errors import (
    AuthenticationError,
    ConflictError,
    DairyError,
    NotFoundError,
    StoreError,
    ValidationError,
)

_STATUS_BY_ERROR: dict[type[DairyError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_400_BAD_REQUEST,
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container
    app.add_middleware(
        CORSMiddleware,
        allow_origins=parse_cors_origins(container.settings.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StoreError)
    async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.exception(
            "Store failure on %s %s", request.method, request.url.path, exc_info=exc
        )
        return _failure(status.HTTP_500_INTERNAL_SERVER_ERROR, "Server error")

    @app.exception_handler(DairyError)
    async def dairy_error_handler(request: Request, exc: DairyError) -> JSONResponse:
        code = _STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return _failure(code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.info("Rejected request to %s: %s", request.url.path, errors)
        if any(error.get("type") == "missing" for error in errors):
            return _failure(status.HTTP_400_BAD_REQUEST, "Missing required fields")
        return _failure(status.HTTP_400_BAD_REQUEST, "Invalid request fields")

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Liveness text for the frontend."""
        return "API is running"

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/signup")
    async def signup(payload: SignupRequest, request: Request) -> MessageResponse:
        """Register a member."""
        state_container: AppContainer = request.app.state.container
        state_container.user_service.register(
            name=payload.name,
            account_no=payload.account_no,
            password=payload.password,
            email=payload.email or None,
        )
        return MessageResponse(success=True, message="User registered successfully")

    @app.post("/login")
    async def login(payload: LoginRequest, request: Request) -> LoginResponse:
        """Check a member's account number and password."""
        state_container: AppContainer = request.app.state.container
        user = state_container.user_service.authenticate(
            payload.account_no, payload.password
        )
        return LoginResponse(
            user=MemberPayload(
                id=user.id,
                name=user.name,
                account_no=user.account_no,
                email=user.email,
            )
        )

    @app.post("/milk-entry", status_code=status.HTTP_201_CREATED)
    async def milk_entry(
        payload: MilkEntryRequest, request: Request
    ) -> MilkEntryResponse:
        """Record a milk delivery."""
        state_container: AppContainer = request.app.state.container
        entry_id = state_container.milk_entry_service.record_entry(
            account_no=payload.account_no,
            entry_date=payload.entry_date,
            session=payload.session,
            quantity=payload.quantity,
            fat=payload.fat,
            snf=payload.snf,
            amount=payload.amount,
        )
        return MilkEntryResponse(
            success=True, message="Milk entry added successfully", id=entry_id
        )

    @app.get("/milk-summary/{account_no}")
    async def milk_summary(
        account_no: str,
        request: Request,
        reference_date: date | None = Query(default=None, alias="date"),
    ) -> list[SummaryRowPayload]:
        """Return the rolling day-by-session summary for a member."""
        state_container: AppContainer = request.app.state.container
        rows = state_container.summary_service.get_summary(account_no, reference_date)
        return [SummaryRowPayload(**row.to_dict()) for row in rows]

    return app


def _failure(status_code: int, message: str) -> JSONResponse:
    body = MessageResponse(success=False, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())
