"""Sharing machines into namespaces other than their own."""

from __future__ import annotations

from .errors import MachineAlreadySharedError, MachineNotSharedError, SameNamespaceError
from .models import Machine, Namespace, SharedMachine
from .store import Store


class SharingManager:
    """Adds and removes shared-machine records."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def _matching(self, machine: Machine, namespace: Namespace) -> list[int]:
        return [
            share_id
            for share_id, share in self.store.shared_machines.items()
            if share.machine_id == machine.id and share.namespace_id == namespace.id
        ]

    def add(self, machine: Machine, namespace: Namespace) -> SharedMachine:
        """Share ``machine`` into ``namespace``."""
        if machine.namespace_id == namespace.id:
            raise SameNamespaceError()
        if self._matching(machine, namespace):
            raise MachineAlreadySharedError()
        shared = SharedMachine(
            machine=machine,
            namespace=namespace,
            id=self.store.next_id("shared_machines"),
        )
        self.store.shared_machines[shared.id] = shared
        return shared

    def remove(self, machine: Machine, namespace: Namespace) -> None:
        """Withdraw ``machine`` from ``namespace``; its home namespace cannot be removed."""
        if machine.namespace_id == namespace.id:
            raise MachineNotSharedError()
        matches = self._matching(machine, namespace)
        if not matches:
            raise MachineNotSharedError()
        for share_id in matches:
            del self.store.shared_machines[share_id]

    def remove_from_all(self, machine: Machine) -> None:
        stale = [
            share_id
            for share_id, share in self.store.shared_machines.items()
            if share.machine_id == machine.id
        ]
        for share_id in stale:
            del self.store.shared_machines[share_id]