# meshcontrol

Bookkeeping for the control server of a mesh VPN. It keeps track of
namespaces (the "users" that machines belong to), pre-authorisation keys,
machines, machines shared between namespaces and subnet routes, and hands out
addresses from configured IP prefixes. It also carries the small pieces an
OIDC login flow needs, and helpers for key prefixes and sealed messages.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Overview

All records live in an in-memory `meshcontrol.store.Store`, created with the
IP prefixes that addresses are allocated from. The managers each work on a
store:

```python
import ipaddress

from meshcontrol.models import Machine
from meshcontrol.namespaces import NamespaceManager
from meshcontrol.preauth_keys import PreAuthKeyManager
from meshcontrol.routes import RouteManager
from meshcontrol.sharing import SharingManager
from meshcontrol.store import Store

store = Store([ipaddress.ip_network("10.27.0.0/23")])

namespaces = NamespaceManager(store)
keys = PreAuthKeyManager(store)
sharing = SharingManager(store)
routes = RouteManager(store)

office = namespaces.create("office")
key = keys.create("office", reusable=True, ephemeral=False, expiration=None)
keys.check_validity(key.key)          # raises if the key cannot be used

ips = store.available_ips()           # [IPv4Address('10.27.0.1')]
laptop = store.save_machine(
    Machine(
        name="laptop",
        namespace_id=office.id,
        ip_addresses=ips,
        auth_key_id=key.id,
        host_info={"RoutableIPs": ["10.0.0.0/24"]},
    )
)
routes.enable_route("office", "laptop", "10.0.0.0/24")
```

### Store and addresses

`Store` holds namespaces, pre-auth keys, machines and shares in dictionaries
keyed by id, and hands out ids per table with `next_id`. `save_machine`
inserts or updates a machine (assigning an id if it has none),
`get_machine(namespace_name, name)` and `get_machine_by_id` look machines up.

`used_ips()` lists every address held by a machine. `available_ip(prefix)`
returns the first address in the prefix that is neither the network nor the
last address, not in use and not loopback, and raises `IPAllocationError`
when none is left. `available_ips()` returns one such address per configured
prefix. Nothing is reserved until a machine holding the address is saved, so
two calls in a row return the same address.

### Models

`meshcontrol.models` defines the dataclasses `Namespace`, `PreAuthKey`,
`Machine`, `SharedMachine` and `UserProfile`. `Namespace.to_user()`,
`Namespace.to_login()`, `Namespace.to_proto()` and `PreAuthKey.to_proto()`
return plain dictionaries for clients and API replies.

### Namespaces

`NamespaceManager` creates, gets, renames, lists and destroys namespaces.
Creating or renaming to a name that is taken raises `NamespaceExistsError`;
an unknown name raises `NamespaceNotFoundError`. A namespace that still holds
machines cannot be destroyed (`NamespaceNotEmptyError`); its pre-auth keys
are removed along with it. `list_machines` and `list_shared_machines` return
the machines at home in, or shared into, a namespace, and
`set_machine_namespace` moves a machine.
`get_map_response_user_profiles(machine, peers)` builds one `UserProfile` per
distinct namespace among a machine and the peers it is given.

### Pre-auth keys

`PreAuthKeyManager.create` issues a key of 48 hex characters
(`generate_key()`). `check_validity` rejects keys that do not exist
(`PreAuthKeyNotFoundError`), have expired (`PreAuthKeyExpiredError`), or are
single-use and already taken by a machine or marked used
(`PreAuthKeyUsedError`). Reusable and ephemeral keys may be used any number
of times. `get(namespace_name, key)` also checks the namespace
(`NamespaceMismatchError`). `expire` ends a key's life immediately, `destroy`
removes it, `list` returns a namespace's keys.

### Sharing

`SharingManager.add(machine, namespace)` makes a machine visible in another
namespace; sharing into its own namespace raises `SameNamespaceError`, and
sharing twice raises `MachineAlreadySharedError`. `remove` withdraws it
(`MachineNotSharedError` if it was not shared there, or if the namespace is
its home), and `remove_from_all` drops every share of a machine.

### Routes

`RouteManager.advertised_routes` reads the `RoutableIPs` in a machine's host
info, `enabled_routes` the routes enabled for it, and `is_route_enabled`
answers `False` on any lookup or parse failure. `enable_route` enables an
advertised route (enabling it twice changes nothing); a route the node does
not advertise raises `RouteNotAvailableError`.

### Keys and encryption

`meshcontrol.utils` adds and strips the `mkey:`, `nodekey:`, `discokey:` and
`privkey:` prefixes on hex-encoded keys, seals and opens JSON messages between
two key pairs with PyNaCl (`encode` / `decode`; a message that cannot be
opened raises `DecryptionError`), converts IP prefixes to and from strings,
gives a prefix's first and last address (`prefix_endpoints`), and generates
random bytes and unpadded URL-safe random strings.

### OIDC helpers

`meshcontrol.oidc` provides a `StateCache` that maps login state strings to
machine keys for a limited time (five minutes by default), `new_state()` for
fresh 32-character state strings, `namespace_from_email(match_map, email)`
which returns the namespace of the first regular expression matching an
address such as `alice@example.com` (or `None`), and
`render_callback_page(user, verb)` for the HTML page shown after login.

### Errors

All errors derive from `meshcontrol.errors.ControlError`.

## What this package does not do

- It keeps everything in memory; there is no database or other persistent
  storage.
- It runs no server: there are no HTTP, gRPC or long-poll endpoints, and no
  network map responses are built or streamed to clients.
- It has no command-line interface.
- It does not talk to an OIDC provider: code exchange and token verification
  are left to the caller.
- It does not work out a machine's peers; `get_map_response_user_profiles`
  takes them as given.