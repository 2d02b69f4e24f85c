import pytest

from meshcontrol.errors import (
    NamespaceExistsError,
    NamespaceNotEmptyError,
    NamespaceNotFoundError,
    PreAuthKeyNotFoundError,
)
from meshcontrol.models import Machine
from meshcontrol.namespaces import NamespaceManager, get_map_response_user_profiles
from meshcontrol.preauth_keys import PreAuthKeyManager
from meshcontrol.sharing import SharingManager
from meshcontrol.store import Store


@pytest.fixture
def store():
    return Store(["10.27.0.0/23"])


@pytest.fixture
def namespaces(store):
    return NamespaceManager(store)


@pytest.fixture
def keys(store):
    return PreAuthKeyManager(store)


def _machine(store, name, namespace, key_id=None, ip="100.64.0.1", machine_id=None):
    machine = Machine(
        id=machine_id,
        name=name,
        machine_key="foo",
        node_key="bar",
        disco_key="faa",
        namespace_id=namespace.id,
        registered=True,
        register_method="authKey",
        auth_key_id=key_id,
        ip_addresses=[ip],
    )
    return store.save_machine(machine)


def test_create_and_destroy_namespace(namespaces):
    namespace = namespaces.create("test")
    assert namespace.name == "test"
    assert len(namespaces.list()) == 1

    namespaces.destroy("test")
    with pytest.raises(NamespaceNotFoundError):
        namespaces.get("test")


def test_create_duplicate_namespace(namespaces):
    namespaces.create("test")
    with pytest.raises(NamespaceExistsError):
        namespaces.create("test")


def test_destroy_namespace_errors(store, namespaces, keys):
    with pytest.raises(NamespaceNotFoundError):
        namespaces.destroy("test")

    namespace = namespaces.create("test")
    pak = keys.create(namespace.name, False, False, None)
    namespaces.destroy("test")
    with pytest.raises(PreAuthKeyNotFoundError):
        keys.check_validity(pak.key)

    namespace = namespaces.create("test")
    pak = keys.create(namespace.name, False, False, None)
    _machine(store, "testmachine", namespace, key_id=pak.id)
    with pytest.raises(NamespaceNotEmptyError):
        namespaces.destroy("test")


def test_rename_namespace(namespaces):
    namespace = namespaces.create("test")
    assert namespace.name == "test"
    assert len(namespaces.list()) == 1

    namespaces.rename("test", "test_renamed")
    with pytest.raises(NamespaceNotFoundError):
        namespaces.get("test")
    assert namespaces.get("test_renamed").id == namespace.id

    with pytest.raises(NamespaceNotFoundError):
        namespaces.rename("test_does_not_exit", "test")

    second = namespaces.create("test2")
    assert second.name == "test2"
    with pytest.raises(NamespaceExistsError):
        namespaces.rename("test2", "test_renamed")


def test_list_keeps_creation_order(namespaces):
    for name in ("namespace1", "otherspace", "tasty"):
        namespaces.create(name)
    assert [ns.name for ns in namespaces.list()] == ["namespace1", "otherspace", "tasty"]


def test_list_machines(store, namespaces):
    first = namespaces.create("first")
    second = namespaces.create("second")
    _machine(store, "a", first)
    _machine(store, "b", second, ip="100.64.0.2")
    _machine(store, "c", first, ip="100.64.0.3")

    names = [m.name for m in namespaces.list_machines("first")]
    assert names == ["a", "c"]
    with pytest.raises(NamespaceNotFoundError):
        namespaces.list_machines("bogus")


def test_list_shared_machines(store, namespaces):
    first = namespaces.create("shared1")
    second = namespaces.create("shared2")
    _machine(store, "one", first)
    other = _machine(store, "two", second, ip="100.64.0.2")

    assert namespaces.list_shared_machines("shared1") == []
    SharingManager(store).add(other, first)
    shared = namespaces.list_shared_machines("shared1")
    assert [m.id for m in shared] == [other.id]


def test_set_machine_namespace(store, namespaces):
    first = namespaces.create("first")
    second = namespaces.create("second")
    machine = _machine(store, "mover", first)

    namespaces.set_machine_namespace(machine, "second")
    assert machine.namespace_id == second.id
    assert [m.name for m in namespaces.list_machines("second")] == ["mover"]
    with pytest.raises(NamespaceNotFoundError):
        namespaces.set_machine_namespace(machine, "bogus")


def test_get_map_response_user_profiles(store, namespaces, keys):
    shared1 = namespaces.create("shared1")
    shared2 = namespaces.create("shared2")
    shared3 = namespaces.create("shared3")

    machine1 = _machine(store, "test_get_shared_nodes_1", shared1, ip="100.64.0.1", machine_id=1)
    machine2 = _machine(store, "test_get_shared_nodes_2", shared2, ip="100.64.0.2", machine_id=2)
    _machine(store, "test_get_shared_nodes_3", shared3, ip="100.64.0.3", machine_id=3)
    machine4 = _machine(store, "test_get_shared_nodes_4", shared1, ip="100.64.0.4", machine_id=4)

    profiles = get_map_response_user_profiles(machine1, [machine2, machine4])
    assert len(profiles) == 2
    display_names = {profile.display_name for profile in profiles}
    assert display_names == {"shared1", "shared2"}
    ids = {profile.id for profile in profiles}
    assert ids == {shared1.id, shared2.id}