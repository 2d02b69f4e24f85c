"""Key-prefix helpers, message sealing and address helpers."""

from __future__ import annotations

import base64
import ipaddress
import json
import secrets
from collections.abc import Iterable
from typing import Any, Union

from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey

from .errors import DecryptionError

NODE_PUBLIC_PREFIX = "nodekey:"
MACHINE_PUBLIC_PREFIX = "mkey:"
DISCO_PUBLIC_PREFIX = "discokey:"
PRIVATE_PREFIX = "privkey:"

Network = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
Address = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]


def _key_text(key: Any) -> str:
    if isinstance(key, str):
        return key
    return bytes(key).hex()


def _strip(key: Any, prefix: str) -> str:
    return _key_text(key).removeprefix(prefix)


def _ensure(key: str, prefix: str) -> str:
    return key if key.startswith(prefix) else prefix + key


def machine_key_strip_prefix(key: Any) -> str:
    """Return the hex form of a machine key without its ``mkey:`` prefix."""
    return _strip(key, MACHINE_PUBLIC_PREFIX)


def node_key_strip_prefix(key: Any) -> str:
    """Return the hex form of a node key without its ``nodekey:`` prefix."""
    return _strip(key, NODE_PUBLIC_PREFIX)


def disco_key_strip_prefix(key: Any) -> str:
    """Return the hex form of a disco key without its ``discokey:`` prefix."""
    return _strip(key, DISCO_PUBLIC_PREFIX)


def machine_key_ensure_prefix(key: str) -> str:
    return _ensure(key, MACHINE_PUBLIC_PREFIX)


def node_key_ensure_prefix(key: str) -> str:
    return _ensure(key, NODE_PUBLIC_PREFIX)


def disco_key_ensure_prefix(key: str) -> str:
    return _ensure(key, DISCO_PUBLIC_PREFIX)


def private_key_ensure_prefix(key: str) -> str:
    return _ensure(key, PRIVATE_PREFIX)


def encode(value: Any, public_key: PublicKey, private_key: PrivateKey) -> bytes:
    """Serialise ``value`` as JSON and seal it to ``public_key``."""
    payload = json.dumps(value).encode("utf-8")
    return bytes(Box(private_key, public_key).encrypt(payload))


def decode(message: bytes, public_key: PublicKey, private_key: PrivateKey) -> Any:
    """Open a sealed message from ``public_key`` and parse its JSON body."""
    try:
        decrypted = Box(private_key, public_key).decrypt(bytes(message))
    except (CryptoError, ValueError) as exc:
        raise DecryptionError() from exc
    return json.loads(decrypted)


def _as_network(prefix: Any) -> Network:
    if isinstance(prefix, (ipaddress.IPv4Network, ipaddress.IPv6Network)):
        return prefix
    return ipaddress.ip_network(str(prefix), strict=False)


def prefix_endpoints(prefix: Any) -> tuple[Address, Address]:
    """Return the first and last address of a prefix."""
    network = _as_network(prefix)
    return network.network_address, network.broadcast_address


def prefixes_to_strings(prefixes: Iterable[Any]) -> list[str]:
    return [str(_as_network(prefix)) for prefix in prefixes]


def strings_to_prefixes(prefixes: Iterable[str]) -> list[Network]:
    """Parse prefix strings; raises ``ValueError`` on the first bad one."""
    return [ipaddress.ip_network(prefix, strict=False) for prefix in prefixes]


def generate_random_bytes(n: int) -> bytes:
    """Return ``n`` cryptographically secure random bytes."""
    return secrets.token_bytes(n)


def generate_random_string_url_safe(n: int) -> str:
    """Return ``n`` random bytes as unpadded URL-safe base64."""
    return base64.urlsafe_b64encode(generate_random_bytes(n)).rstrip(b"=").decode("ascii")