"""Namespace management: the control server's notion of users."""

from __future__ import annotations

from collections.abc import Iterable

from .errors import NamespaceExistsError, NamespaceNotEmptyError, NamespaceNotFoundError
from .models import Machine, Namespace, UserProfile
from .store import Store


class NamespaceManager:
    """Creates, renames, lists and removes namespaces held in a store."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def create(self, name: str) -> Namespace:
        """Create a namespace; raises if one with that name exists."""
        if any(ns.name == name for ns in self.store.namespaces.values()):
            raise NamespaceExistsError()
        namespace = Namespace(name=name, id=self.store.next_id("namespaces"))
        self.store.namespaces[namespace.id] = namespace
        return namespace

    def destroy(self, name: str) -> None:
        """Remove an empty namespace together with its pre-auth keys."""
        namespace = self.get(name)
        if self.list_machines(name):
            raise NamespaceNotEmptyError()
        stale_keys = [
            key_id
            for key_id, key in self.store.pre_auth_keys.items()
            if key.namespace_id == namespace.id
        ]
        for key_id in stale_keys:
            del self.store.pre_auth_keys[key_id]
        del self.store.namespaces[namespace.id]

    def rename(self, old_name: str, new_name: str) -> None:
        """Rename a namespace; the new name must not be taken."""
        namespace = self.get(old_name)
        try:
            self.get(new_name)
        except NamespaceNotFoundError:
            namespace.name = new_name
            return
        raise NamespaceExistsError()

    def get(self, name: str) -> Namespace:
        for namespace in self.store.namespaces.values():
            if namespace.name == name:
                return namespace
        raise NamespaceNotFoundError()

    def list(self) -> list[Namespace]:
        return list(self.store.namespaces.values())

    def list_machines(self, name: str) -> list[Machine]:
        """Machines whose home namespace is ``name``."""
        namespace = self.get(name)
        machines = [
            machine
            for machine in self.store.machines.values()
            if machine.namespace_id == namespace.id
        ]
        for machine in machines:
            machine.namespace = namespace
        return machines

    def list_shared_machines(self, name: str) -> list[Machine]:
        """Machines shared into namespace ``name`` from elsewhere."""
        namespace = self.get(name)
        return [
            self.store.get_machine_by_id(shared.machine_id)
            for shared in self.store.shared_machines.values()
            if shared.namespace_id == namespace.id
        ]

    def set_machine_namespace(self, machine: Machine, namespace_name: str) -> None:
        namespace = self.get(namespace_name)
        machine.namespace_id = namespace.id
        machine.namespace = namespace
        self.store.save_machine(machine)


def get_map_response_user_profiles(
    machine: Machine, peers: Iterable[Machine]
) -> list[UserProfile]:
    """One profile per distinct namespace among a machine and its peers."""
    namespaces: dict[str, Namespace] = {}
    for member in (machine, *peers):
        if member.namespace is not None:
            namespaces[member.namespace.name] = member.namespace
    return [
        UserProfile(id=ns.id, login_name=ns.name, display_name=ns.name)
        for ns in namespaces.values()
    ]