"""ASGI entrypoint for the dairy collection API."""

from dairy_collection.api.app import create_app
from dairy_collection.containers import build_container

app = create_app(build_container())
