"""ASGI entrypoint for the TrueConf user console."""

from trueconf_console.api.app import create_app
from trueconf_console.containers import build_container

app = create_app(build_container())
