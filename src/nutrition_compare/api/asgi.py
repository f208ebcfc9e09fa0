"""ASGI entrypoint for the nutrition comparison API."""

from nutrition_compare.api.app import create_app
from nutrition_compare.containers import build_container

app = create_app(build_container())
