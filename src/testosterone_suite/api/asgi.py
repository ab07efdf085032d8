"""ASGI entrypoint for the testosterone suite API."""

from testosterone_suite.api.app import create_app
from testosterone_suite.containers import build_container

app = create_app(build_container())
