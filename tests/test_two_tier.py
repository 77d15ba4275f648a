import sqlite3

import pytest

from venue_menu.db.local_store import LocalStore
from venue_menu.repositories.two_tier import (
    SOURCE_DEFAULT,
    SOURCE_LOCAL,
    SOURCE_REMOTE,
    TwoTierRepository,
)


@pytest.fixture()
def store(tmp_path):
    return LocalStore(str(tmp_path / "local.json"))


@pytest.fixture()
def tier(store):
    return TwoTierRepository(store, "keys", encode=sorted, decode=frozenset)


def unavailable(*_):
    raise sqlite3.OperationalError("database is locked")


def test_remote_hit_is_written_through(tier, store):
    result = tier.read(lambda: frozenset({"a"}), default=frozenset)
    assert result.source == SOURCE_REMOTE
    assert result.value == {"a"}
    entry = store.get("keys")
    assert entry.value == ["a"]
    assert not entry.pending
    assert entry.synced_at is not None


def test_remote_error_falls_back_to_local(tier, store):
    store.put("keys", ["b"])
    result = tier.read(unavailable, default=frozenset)
    assert result.source == SOURCE_LOCAL
    assert result.value == {"b"}


def test_empty_remote_falls_back_to_local_then_default(tier, store):
    assert tier.read(lambda: None, default=frozenset).source == SOURCE_DEFAULT
    store.put("keys", ["c"])
    assert tier.read(lambda: None, default=frozenset).value == {"c"}


def test_reachable_remote_wins_over_local(tier, store):
    store.put("keys", ["stale"])
    result = tier.read(lambda: frozenset({"fresh"}), default=frozenset)
    assert result.value == {"fresh"}


def test_write_failure_propagates_without_local_only(tier, store):
    with pytest.raises(sqlite3.OperationalError):
        tier.write(frozenset({"a"}), push_remote=unavailable)
    assert store.get("keys") is None


def test_local_only_write_is_pending_and_pushed_on_next_read(tier, store):
    assert tier.write(frozenset({"a"}), push_remote=unavailable, allow_local_only=True) == SOURCE_LOCAL
    assert store.get("keys").pending

    pushed = []
    result = tier.read(lambda: frozenset(), default=frozenset, push_remote=pushed.append)
    assert pushed == [frozenset({"a"})]
    assert result.source == SOURCE_REMOTE
    assert not store.get("keys").pending


def test_pending_entry_stays_local_while_remote_is_down(tier, store):
    tier.write(frozenset({"a"}), push_remote=unavailable, allow_local_only=True)
    result = tier.read(unavailable, default=frozenset, push_remote=unavailable)
    assert result.source == SOURCE_LOCAL
    assert result.value == {"a"}
    assert store.get("keys").pending


def test_local_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "local.json"
    path.write_text("{not json", encoding="utf-8")
    store = LocalStore(str(path))
    assert store.get("keys") is None
    store.put("keys", [1])
    assert store.get("keys").value == [1]
