"""Pre-authorisation keys that let nodes join a namespace."""

from __future__ import annotations

import secrets
from datetime import datetime, timezone

from .errors import (
    NamespaceMismatchError,
    PreAuthKeyExpiredError,
    PreAuthKeyNotFoundError,
    PreAuthKeyUsedError,
)
from .models import PreAuthKey
from .namespaces import NamespaceManager
from .store import Store

KEY_SIZE = 24


def generate_key() -> str:
    """Return a fresh random key as 48 hex characters."""
    return secrets.token_hex(KEY_SIZE)


def _aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


class PreAuthKeyManager:
    """Issues, lists, expires and validates pre-auth keys."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self._namespaces = NamespaceManager(store)

    def create(
        self,
        namespace_name: str,
        reusable: bool = False,
        ephemeral: bool = False,
        expiration: datetime | None = None,
    ) -> PreAuthKey:
        namespace = self._namespaces.get(namespace_name)
        key = PreAuthKey(
            key=generate_key(),
            namespace=namespace,
            id=self.store.next_id("pre_auth_keys"),
            reusable=reusable,
            ephemeral=ephemeral,
            created_at=datetime.now(timezone.utc),
            expiration=expiration,
        )
        self.store.pre_auth_keys[key.id] = key
        return key

    def list(self, namespace_name: str) -> list[PreAuthKey]:
        namespace = self._namespaces.get(namespace_name)
        return [
            key
            for key in self.store.pre_auth_keys.values()
            if key.namespace_id == namespace.id
        ]

    def get(self, namespace_name: str, key: str) -> PreAuthKey:
        """Return a valid key, checking that it belongs to ``namespace_name``."""
        pak = self.check_validity(key)
        if pak.namespace.name != namespace_name:
            raise NamespaceMismatchError()
        return pak

    def destroy(self, key: PreAuthKey) -> None:
        self.store.pre_auth_keys.pop(key.id, None)

    def expire(self, key: PreAuthKey) -> None:
        """Mark a key as expired as of now."""
        now = datetime.now(timezone.utc)
        key.expiration = now
        stored = self.store.pre_auth_keys.get(key.id)
        if stored is not None:
            stored.expiration = now

    def check_validity(self, key: str) -> PreAuthKey:
        """Return the key if a node may use it now, otherwise raise."""
        pak = next((k for k in self.store.pre_auth_keys.values() if k.key == key), None)
        if pak is None:
            raise PreAuthKeyNotFoundError()
        if pak.expiration is not None and _aware(pak.expiration) < datetime.now(timezone.utc):
            raise PreAuthKeyExpiredError()
        if pak.reusable or pak.ephemeral:
            return pak
        in_use = any(m.auth_key_id == pak.id for m in self.store.machines.values())
        if in_use or pak.used:
            raise PreAuthKeyUsedError()
        return pak