import ipaddress
from datetime import datetime, timezone

from meshcontrol.models import Machine, Namespace, PreAuthKey, SharedMachine, UserProfile


def test_namespace_to_user_uses_name_and_id():
    namespace = Namespace(name="test", id=7)
    user = namespace.to_user()
    assert user["ID"] == 7
    assert user["LoginName"] == "test"
    assert user["DisplayName"] == "test"
    assert user["ProfilePicURL"] == ""
    assert user["Logins"] == []


def test_namespace_to_login_matches_user():
    namespace = Namespace(name="shared1", id=3)
    login = namespace.to_login()
    user = namespace.to_user()
    for field in ("ID", "LoginName", "DisplayName", "ProfilePicURL", "Domain"):
        assert login[field] == user[field]
    assert "Logins" not in login


def test_namespace_to_proto():
    created = datetime(2022, 2, 10, 15, 0, tzinfo=timezone.utc)
    proto = Namespace(name="tasty", id=12, created_at=created).to_proto()
    assert proto["id"] == "12"
    assert proto["name"] == "tasty"
    assert datetime.fromisoformat(proto["created_at"].replace("Z", "+00:00")) == created


def test_preauth_key_to_proto_without_times():
    namespace = Namespace(name="test", id=1)
    key = PreAuthKey(key="abc", namespace=namespace, id=5, reusable=True)
    proto = key.to_proto()
    assert proto["namespace"] == "test"
    assert proto["id"] == "5"
    assert proto["key"] == "abc"
    assert proto["reusable"] is True
    assert proto["ephemeral"] is False
    assert proto["used"] is False
    assert "expiration" not in proto
    assert "created_at" not in proto


def test_preauth_key_to_proto_with_times():
    namespace = Namespace(name="test", id=1)
    moment = datetime(2022, 1, 1, tzinfo=timezone.utc)
    key = PreAuthKey(key="abc", namespace=namespace, created_at=moment, expiration=moment)
    proto = key.to_proto()
    assert proto["expiration"] == proto["created_at"]
    assert proto["expiration"].endswith("Z")


def test_preauth_key_follows_namespace_id():
    namespace = Namespace(name="test", id=4)
    key = PreAuthKey(key="abc", namespace=namespace)
    assert key.namespace_id == 4
    namespace.id = 9
    assert key.namespace_id == 9


def test_machine_normalises_addresses():
    machine = Machine(name="node", ip_addresses=["100.64.0.1"])
    assert machine.ip_addresses == [ipaddress.ip_address("100.64.0.1")]


def test_shared_machine_ids():
    namespace = Namespace(name="shared1", id=2)
    machine = Machine(name="node", id=11, namespace_id=1)
    shared = SharedMachine(machine=machine, namespace=namespace)
    assert shared.machine_id == 11
    assert shared.namespace_id == 2


def test_user_profile_equality():
    assert UserProfile(1, "a", "a") == UserProfile(1, "a", "a")
    assert UserProfile(1, "a", "a") != UserProfile(2, "a", "a")