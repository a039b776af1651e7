import sqlite3

import pytest

from bugtracer.store import BugStore, User, check_password, hash_password


@pytest.fixture
def store():
    with BugStore(":memory:") as bug_store:
        yield bug_store


@pytest.fixture
def user(store):
    return store.create_user("alice", "stored-hash")


def test_hash_and_check_password():
    password = "password"
    hashed = hash_password(password)
    assert hashed.startswith("$2b$12$")
    assert check_password(password, hashed) is True
    assert check_password("secret", hashed) is False


def test_check_password_malformed_hash():
    with pytest.raises(ValueError):
        check_password("password", "not a hash")


def test_create_and_find_user(store):
    created = store.create_user("bob", "stored-hash")
    assert store.find_user("bob") == created
    assert store.user_by_id(created.id) == User(created.id, "bob", "stored-hash")


def test_find_missing_user(store):
    assert store.find_user("nobody") is None
    with pytest.raises(LookupError):
        store.user_by_id(999)


def test_duplicate_username_rejected(store, user):
    with pytest.raises(ValueError, match="alice"):
        store.create_user("alice", "other-hash")


def test_add_bug_defaults_to_open(store, user):
    bug = store.add_bug(user.id, "crash", "segfault on start")
    assert bug.status == "open"
    assert bug.description == "segfault on start"
    assert store.find_bug(user.id, "crash") == bug


def test_find_bug_scoped_to_user(store, user):
    other = store.create_user("carol", "stored-hash")
    store.add_bug(user.id, "crash", None)
    assert store.find_bug(other.id, "crash") is None


def test_list_bugs_in_insertion_order(store, user):
    for name in ["a", "b", "c"]:
        store.add_bug(user.id, name, None)
    assert [bug.name for bug in store.list_bugs(user.id)] == ["a", "b", "c"]
    assert all(bug.description is None for bug in store.list_bugs(user.id))


def test_update_status(store, user):
    bug = store.add_bug(user.id, "crash", None)
    assert store.update_status(bug.id, user.id, "closed") == 1
    assert store.bug_status(bug.id) == "closed"


def test_update_status_wrong_user_affects_nothing(store, user):
    other = store.create_user("carol", "stored-hash")
    bug = store.add_bug(user.id, "crash", None)
    assert store.update_status(bug.id, other.id, "closed") == 0
    assert store.bug_status(bug.id) == "open"


def test_update_description(store, user):
    bug = store.add_bug(user.id, "crash", "old")
    assert store.update_description(bug.id, user.id, "new text") == 1
    assert store.find_bug(user.id, "crash").description == "new text"


def test_delete_bug(store, user):
    bug = store.add_bug(user.id, "crash", None)
    assert store.delete_bug(bug.id, user.id) == 1
    assert store.find_bug(user.id, "crash") is None
    assert store.delete_bug(bug.id, user.id) == 0


def test_bug_status_missing(store):
    with pytest.raises(LookupError):
        store.bug_status(42)


def test_purge_closed_removes_only_old_closed(tmp_path):
    path = tmp_path / "bugs.db"
    with BugStore(path) as bug_store:
        owner = bug_store.create_user("alice", "stored-hash")
        old_closed = bug_store.add_bug(owner.id, "old-closed", None)
        bug_store.add_bug(owner.id, "old-open", None)
        fresh_closed = bug_store.add_bug(owner.id, "fresh-closed", None)
        bug_store.update_status(old_closed.id, owner.id, "closed")
        bug_store.update_status(fresh_closed.id, owner.id, "closed")

    conn = sqlite3.connect(path)
    with conn:
        conn.execute(
            "UPDATE bugs SET updated_at = datetime('now', '-2 days') WHERE name LIKE 'old-%'"
        )
    conn.close()

    with BugStore(path) as bug_store:
        removed = bug_store.purge_closed()
        names = [bug.name for bug in bug_store.list_bugs(owner.id)]
    assert names == ["old-open", "fresh-closed"]
    assert removed == 1


def test_store_persists_across_reopen(tmp_path):
    path = tmp_path / "bugs.db"
    with BugStore(path) as bug_store:
        created = bug_store.create_user("dave", "stored-hash")
        bug_store.add_bug(created.id, "leak", "memory grows")
    with BugStore(path) as bug_store:
        assert bug_store.find_user("dave") == created
        assert bug_store.find_bug(created.id, "leak").description == "memory grows"