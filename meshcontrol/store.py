"""In-memory record store and address allocation."""

from __future__ import annotations

import ipaddress
from collections.abc import Iterable
from typing import Any

from .errors import ControlError, IPAllocationError, NamespaceNotFoundError
from .models import Machine, Namespace, PreAuthKey, SharedMachine
from .utils import Address, Network, prefix_endpoints

TABLES = ("namespaces", "pre_auth_keys", "machines", "shared_machines")


class Store:
    """Holds namespaces, keys, machines and shares, and allocates addresses."""

    def __init__(self, ip_prefixes: Iterable[Any]) -> None:
        self.ip_prefixes: list[Network] = [
            ipaddress.ip_network(str(prefix), strict=False) for prefix in ip_prefixes
        ]
        self.namespaces: dict[int, Namespace] = {}
        self.pre_auth_keys: dict[int, PreAuthKey] = {}
        self.machines: dict[int, Machine] = {}
        self.shared_machines: dict[int, SharedMachine] = {}
        self._counters = dict.fromkeys(TABLES, 0)

    def next_id(self, table: str) -> int:
        """Return the next auto-increment identifier for ``table``."""
        if table not in self._counters:
            raise ValueError(f"unknown table: {table}")
        self._counters[table] += 1
        return self._counters[table]

    def save_machine(self, machine: Machine) -> Machine:
        """Insert or update a machine, assigning an id when it has none."""
        if machine.id is None:
            machine.id = self.next_id("machines")
        else:
            self._counters["machines"] = max(self._counters["machines"], machine.id)
        if machine.namespace_id in self.namespaces:
            machine.namespace = self.namespaces[machine.namespace_id]
        self.machines[machine.id] = machine
        return machine

    def get_machine(self, namespace_name: str, name: str) -> Machine:
        namespace = next(
            (ns for ns in self.namespaces.values() if ns.name == namespace_name), None
        )
        if namespace is None:
            raise NamespaceNotFoundError()
        for machine in self.machines.values():
            if machine.namespace_id == namespace.id and machine.name == name:
                machine.namespace = namespace
                return machine
        raise ControlError("Machine not found")

    def get_machine_by_id(self, machine_id: int) -> Machine:
        try:
            machine = self.machines[machine_id]
        except KeyError:
            raise ControlError("Machine not found") from None
        machine.namespace = self.namespaces.get(machine.namespace_id, machine.namespace)
        return machine

    def used_ips(self) -> list[Address]:
        """Every address held by a machine, in storage order."""
        return [ip for machine in self.machines.values() for ip in machine.ip_addresses]

    def available_ip(self, prefix: Any) -> Address:
        """Return the first free host address in ``prefix``."""
        network = ipaddress.ip_network(str(prefix), strict=False)
        used = set(self.used_ips())
        first, last = prefix_endpoints(network)
        address_type = type(first)
        for value in range(int(first) + 1, int(last)):
            candidate = address_type(value)
            if candidate in used or candidate.is_loopback:
                continue
            return candidate
        raise IPAllocationError()

    def available_ips(self) -> list[Address]:
        """One free address from each configured prefix."""
        return [self.available_ip(prefix) for prefix in self.ip_prefixes]