"""Records kept by the control server."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

USER_DOMAIN = "mesh.local"
ZERO_TIME = "0001-01-01T00:00:00Z"


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _timestamp(moment: datetime) -> str:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


@dataclass
class Namespace:
    """A group of machines, presented to clients as a user."""

    name: str
    id: int = 0
    created_at: datetime = field(default_factory=_now)

    def to_user(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "LoginName": self.name,
            "DisplayName": self.name,
            "ProfilePicURL": "",
            "Domain": USER_DOMAIN,
            "Logins": [],
            "Created": ZERO_TIME,
        }

    def to_login(self) -> dict[str, Any]:
        return {
            "ID": self.id,
            "LoginName": self.name,
            "DisplayName": self.name,
            "ProfilePicURL": "",
            "Domain": USER_DOMAIN,
        }

    def to_proto(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "name": self.name,
            "created_at": _timestamp(self.created_at),
        }


@dataclass
class PreAuthKey:
    """A pre-authorisation key usable in one namespace."""

    key: str
    namespace: Namespace
    id: int = 0
    reusable: bool = False
    ephemeral: bool = False
    used: bool = False
    created_at: datetime | None = None
    expiration: datetime | None = None

    @property
    def namespace_id(self) -> int:
        return self.namespace.id

    def to_proto(self) -> dict[str, Any]:
        proto: dict[str, Any] = {
            "namespace": self.namespace.name,
            "id": str(self.id),
            "key": self.key,
            "ephemeral": self.ephemeral,
            "reusable": self.reusable,
            "used": self.used,
        }
        if self.expiration is not None:
            proto["expiration"] = _timestamp(self.expiration)
        if self.created_at is not None:
            proto["created_at"] = _timestamp(self.created_at)
        return proto


@dataclass
class Machine:
    """A node known to the control server."""

    name: str = ""
    id: int | None = None
    machine_key: str = ""
    node_key: str = ""
    disco_key: str = ""
    namespace_id: int = 0
    namespace: Namespace | None = None
    registered: bool = False
    register_method: str = ""
    auth_key_id: int | None = None
    ip_addresses: list[Any] = field(default_factory=list)
    host_info: dict[str, Any] = field(default_factory=dict)
    endpoints: list[str] = field(default_factory=list)
    enabled_routes: list[str] = field(default_factory=list)
    last_seen: datetime | None = None
    last_successful_update: datetime | None = None
    expiry: datetime | None = None

    def __post_init__(self) -> None:
        self.ip_addresses = [ipaddress.ip_address(str(ip)) for ip in self.ip_addresses]


@dataclass
class SharedMachine:
    """A machine shared into a namespace other than its own."""

    machine: Machine
    namespace: Namespace
    id: int = 0

    @property
    def machine_id(self) -> int | None:
        return self.machine.id

    @property
    def namespace_id(self) -> int:
        return self.namespace.id


@dataclass(frozen=True)
class UserProfile:
    """The profile of a namespace as sent in map responses."""

    id: int
    login_name: str
    display_name: str