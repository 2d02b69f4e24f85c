"""Helpers for OpenID Connect registration: state cache, namespace mapping, pages."""

from __future__ import annotations

import html
import re
import time
from collections.abc import Mapping
from datetime import timedelta

from .utils import generate_random_bytes

STATE_EXPIRATION = timedelta(minutes=5)
RANDOM_BYTE_SIZE = 16

_CALLBACK_TEMPLATE = """<html>
	<body>
	<h1>meshcontrol</h1>
	<p>
			{verb} as {user}, you can now close this window.
	</p>
	</body>
	</html>"""


class StateCache:
    """Maps OIDC state strings to machine keys for a limited time."""

    def __init__(self, expiration: timedelta | float = STATE_EXPIRATION) -> None:
        if isinstance(expiration, timedelta):
            expiration = expiration.total_seconds()
        self.expiration = float(expiration)
        self._entries: dict[str, tuple[str, float]] = {}

    def _purge(self, now: float) -> None:
        expired = [state for state, (_, until) in self._entries.items() if now >= until]
        for state in expired:
            del self._entries[state]

    def set(self, state: str, machine_key: str) -> None:
        now = time.monotonic()
        self._purge(now)
        self._entries[state] = (machine_key, now + self.expiration)

    def get(self, state: str) -> str | None:
        """Return the machine key for ``state``, or None if unknown or expired."""
        entry = self._entries.get(state)
        if entry is None:
            return None
        machine_key, until = entry
        if time.monotonic() >= until:
            del self._entries[state]
            return None
        return machine_key


def new_state() -> str:
    """Return a fresh 32-character hex state string."""
    return generate_random_bytes(RANDOM_BYTE_SIZE).hex()[:32]


def namespace_from_email(match_map: Mapping[str, str], email: str) -> str | None:
    """Return the namespace of the first pattern matching ``email``, if any."""
    for pattern, namespace in match_map.items():
        if re.search(pattern, email):
            return namespace
    return None


def render_callback_page(user: str, verb: str) -> str:
    """The HTML page shown after a successful OIDC callback."""
    return _CALLBACK_TEMPLATE.format(verb=html.escape(verb), user=html.escape(user))