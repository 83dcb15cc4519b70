"""Session-backed flash notices and preserved form input."""

from __future__ import annotations

from fastapi import Request

_FLASHES_KEY = "_flashes"
_OLD_INPUT_KEY = "_old_input"


def add_flash(request: Request, message: str, level: str = "info") -> None:
    """Queue a one-time notice for the next rendered page."""
    flashes = request.session.get(_FLASHES_KEY, [])
    flashes.append({"message": message, "level": level})
    request.session[_FLASHES_KEY] = flashes


def pop_flashes(request: Request) -> list[dict[str, str]]:
    """Return and clear queued notices."""
    return request.session.pop(_FLASHES_KEY, [])


def keep_old_input(request: Request, values: dict[str, str]) -> None:
    """Remember submitted form values so the form can be refilled."""
    request.session[_OLD_INPUT_KEY] = {
        key: value for key, value in values.items() if key != "password"
    }


def pop_old_input(request: Request) -> dict[str, str]:
    return request.session.pop(_OLD_INPUT_KEY, {})
