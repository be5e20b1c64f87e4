"""Member registration, login and identity lookup."""

import logging
from dataclasses import dataclass, field
from typing import Protocol

from passlib.context import CryptContext

from dairy_collection.domain.errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from dairy_collection.domain.models import UserRecord

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for member data."""

    def get_by_account_no(self, account_no: str) -> UserRecord | None:
        """Return the member for an account number, if present."""

    def exists(self, account_no: str, email: str | None) -> bool:
        """Return True when the account number or email is already taken."""

    def create_user(
        self, name: str, account_no: str, email: str | None, password_hash: str
    ) -> UserRecord:
        """Create and return a new member record."""


def default_password_context() -> CryptContext:
    """Return the bcrypt context used for stored passwords."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto")


@dataclass
class UserService:
    """Application service for member accounts."""

    repository: UserRepository
    password_context: CryptContext = field(default_factory=default_password_context)

    def register(
        self, name: str, account_no: str, password: str, email: str | None = None
    ) -> UserRecord:
        """Register a new member with a hashed password."""
        if not name or not account_no or not password:
            raise ValidationError("Missing required fields")
        if self.repository.exists(account_no, email):
            raise ConflictError("Account number or email already registered")
        created = self.repository.create_user(
            name=name,
            account_no=account_no,
            email=email,
            password_hash=self.password_context.hash(password),
        )
        _logger.info("Registered member: account_no=%s", account_no)
        return created

    def authenticate(self, account_no: str, password: str) -> UserRecord:
        """Return the member when the password matches."""
        if not account_no or not password:
            raise ValidationError("Missing account number or password")
        user = self.repository.get_by_account_no(account_no)
        if user is None:
            raise AuthenticationError("Incorrect account number or password")
        if not self.password_context.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return user

    def resolve_identity(self, account_no: str) -> UserRecord:
        """Return the member for an account number or raise NotFoundError."""
        user = self.repository.get_by_account_no(account_no)
        if user is None:
            raise NotFoundError("User not found")
        return user
