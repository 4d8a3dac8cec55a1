"""Portal store tests."""

import pytest

from jobportal.errors import NotFoundError, ValidationError
from jobportal.services.auth import register_user
from jobportal.services.portal_store import DEFAULT_PORTALS, PortalStore


@pytest.fixture
def users(db):
    alice = register_user(db, "Alice", "alice@example.com", "pw123")
    bob = register_user(db, "Bob", "bob@example.com", "pw456")
    return alice, bob


@pytest.fixture
def store(db):
    return PortalStore(db)


def test_create_then_list(store, users):
    alice, _ = users
    portal_id = store.create(alice, "QA", "indeed.com")

    portals = store.list_portals(alice)
    assert [(p.id, p.category, p.link, p.user_id) for p in portals] == [
        (portal_id, "QA", "indeed.com", alice)
    ]


@pytest.mark.parametrize("category,link", [("", "indeed.com"), ("QA", ""), (None, "x.com")])
def test_create_requires_category_and_link(store, users, category, link):
    with pytest.raises(ValidationError):
        store.create(users[0], category, link)


def test_delete_then_get(store, users):
    alice, _ = users
    portal_id = store.create(alice, "QA", "indeed.com")

    store.delete(alice, portal_id)

    with pytest.raises(NotFoundError):
        store.get(alice, portal_id)
    with pytest.raises(NotFoundError):
        store.delete(alice, portal_id)


def test_other_owner_is_not_found(store, users):
    alice, bob = users
    portal_id = store.create(alice, "QA", "indeed.com")

    with pytest.raises(NotFoundError):
        store.get(bob, portal_id)
    with pytest.raises(NotFoundError):
        store.update(bob, portal_id, link="evil.com")
    with pytest.raises(NotFoundError):
        store.delete(bob, portal_id)

    assert store.get(alice, portal_id).link == "indeed.com"


def test_update_is_partial(store, users):
    alice, _ = users
    portal_id = store.create(alice, "QA", "indeed.com")

    portal = store.update(alice, portal_id, category="Testing")
    assert portal.category == "Testing"
    assert portal.link == "indeed.com"
    assert portal.updated_at is not None

    portal = store.update(alice, portal_id, link="indeed.co.uk")
    assert portal.category == "Testing"
    assert portal.link == "indeed.co.uk"


def test_list_orders_by_category_then_newest(store, users):
    alice, _ = users
    first_qa = store.create(alice, "QA", "indeed.com")
    dev = store.create(alice, "Dev", "github.com/jobs")
    second_qa = store.create(alice, "QA", "linkedin.com")

    assert [p.id for p in store.list_portals(alice)] == [dev, second_qa, first_qa]


def test_distinct_categories(store, users):
    alice, bob = users
    store.create(alice, "QA", "indeed.com")
    store.create(alice, "QA", "linkedin.com")
    store.create(alice, "Dev", "github.com/jobs")
    store.create(bob, "Ops", "example.com")

    assert store.distinct_categories(alice) == ["Dev", "QA"]
    assert store.distinct_categories(bob) == ["Ops"]


def test_reset_to_defaults(store, users):
    alice, bob = users
    store.create(alice, "Custom", "example.com")
    store.create(bob, "Ops", "example.com")

    portals = store.reset_to_defaults(alice)

    assert sorted((p.category, p.link) for p in portals) == sorted(DEFAULT_PORTALS)
    assert store.distinct_categories(alice) == ["Dev", "QA"]
    assert store.distinct_categories(bob) == ["Ops"]
