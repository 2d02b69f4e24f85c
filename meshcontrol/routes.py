"""Subnet routes advertised and enabled per node."""

from __future__ import annotations

from .errors import ControlError, RouteNotAvailableError
from .store import Store
from .utils import Network, prefixes_to_strings, strings_to_prefixes


class RouteManager:
    """Looks up nodes by namespace and name and manages their routes."""

    def __init__(self, store: Store) -> None:
        self.store = store

    def advertised_routes(self, namespace: str, node_name: str) -> list[Network]:
        """Routes the node reports in its host info."""
        machine = self.store.get_machine(namespace, node_name)
        return strings_to_prefixes(machine.host_info.get("RoutableIPs") or [])

    def enabled_routes(self, namespace: str, node_name: str) -> list[Network]:
        machine = self.store.get_machine(namespace, node_name)
        return strings_to_prefixes(machine.enabled_routes)

    def is_route_enabled(self, namespace: str, node_name: str, route: str) -> bool:
        """True if ``route`` is enabled; any lookup or parse failure gives False."""
        try:
            (prefix,) = strings_to_prefixes([route])
            return prefix in self.enabled_routes(namespace, node_name)
        except (ValueError, ControlError):
            return False

    def enable_route(self, namespace: str, node_name: str, route: str) -> None:
        """Enable an advertised route; enabling it twice changes nothing."""
        machine = self.store.get_machine(namespace, node_name)
        (prefix,) = strings_to_prefixes([route])
        available = self.advertised_routes(namespace, node_name)
        enabled = self.enabled_routes(namespace, node_name)
        if prefix not in available:
            raise RouteNotAvailableError()
        if prefix not in enabled:
            enabled.append(prefix)
        machine.enabled_routes = prefixes_to_strings(enabled)
        self.store.save_machine(machine)