"""ASGI entrypoint for the WhichFood API."""

from whichfood.api.app import create_app
from whichfood.containers import build_container

app = create_app(build_container())
