"""ASGI entrypoint for the mixmind API."""

from mixmind.api.app import create_app
from mixmind.containers import build_container

app = create_app(build_container())
