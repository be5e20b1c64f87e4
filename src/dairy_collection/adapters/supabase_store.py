"""Supabase client lifecycle and error translation."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError
from supabase import Client, create_client

from dairy_collection.domain.errors import StoreError

_logger = logging.getLogger(__name__)


def open_store(url: str, service_key: str) -> Client:
    """Create the Supabase client shared by all repositories."""
    return create_client(url, service_key)


def close_store(client: Client) -> None:
    """Release the HTTP session held by the client."""
    client.postgrest.session.close()
    _logger.info("Supabase store closed")


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate Supabase, transport and malformed-row failures into StoreError."""
    try:
        yield
    except (APIError, httpx.HTTPError, KeyError, TypeError, ValueError) as exc:
        raise StoreError(f"Store failure during {operation}") from exc
