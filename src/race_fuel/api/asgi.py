"""ASGI entrypoint for the race fuel planner API."""

from race_fuel.api.app import create_app
from race_fuel.containers import build_container

app = create_app(build_container())
