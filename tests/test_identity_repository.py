"""Tests for the identity store (business and user repositories)."""

import pytest
from sqlalchemy.exc import IntegrityError

from pyme_auth.adapters.repository.business_repository import BusinessRepository
from pyme_auth.adapters.repository.user_repository import UserRepository
from pyme_auth.domain.entities.user_entity import RoleType
from pyme_auth.domain.exceptions import (
    ConflictError,
    DanglingReferenceError,
    DuplicateEmailError,
    NotFoundError,
)


@pytest.fixture
def businesses(db):
    return BusinessRepository(db)


@pytest.fixture
def users(db):
    return UserRepository(db)


def test_create_business_returns_fresh_ids(db, businesses):
    first = businesses.create_business(name="Acme", phone="555-0100")
    second = businesses.create_business(name="Globex", phone=None)
    db.commit()

    assert first.id is not None
    assert second.id != first.id
    assert first.is_active is True


def test_create_user_and_find_case_insensitive(db, businesses, users):
    business = businesses.create_business(name="Acme", phone=None)
    user = users.create_user(
        email="Owner@Acme.com", password_hash="x", role=RoleType.PYME, business_id=business.id
    )
    db.commit()

    assert user.email == "owner@acme.com"
    assert users.get_user_by_email("OWNER@ACME.COM").id == user.id
    assert users.get_user_by_email("nobody@acme.com") is None


def test_create_user_duplicate_email_is_conflict(db, businesses, users):
    business = businesses.create_business(name="Acme", phone=None)
    users.create_user(email="a@acme.com", password_hash="x", role=RoleType.PYME, business_id=business.id)
    db.commit()

    with pytest.raises(DuplicateEmailError) as exc:
        users.create_user(email="A@ACME.com", password_hash="y", role=RoleType.PYME, business_id=business.id)
    assert isinstance(exc.value, ConflictError)


def test_create_user_unknown_business(users):
    with pytest.raises(DanglingReferenceError):
        users.create_user(email="a@acme.com", password_hash="x", role=RoleType.PYME, business_id=999)


def test_deactivate_user_is_idempotent(db, businesses, users):
    business = businesses.create_business(name="Acme", phone=None)
    user = users.create_user(email="a@acme.com", password_hash="x", role=RoleType.PYME, business_id=business.id)
    db.commit()

    _, changed = users.deactivate_user(user.id)
    db.commit()
    assert changed is True
    assert user.is_active is False
    assert user.status_changed_at is not None

    _, changed = users.deactivate_user(user.id)
    assert changed is False
    assert users.get_by_id(user.id) is not None  # nunca apaga


def test_deactivate_unknown_ids(businesses, users):
    with pytest.raises(NotFoundError):
        users.deactivate_user(42)
    with pytest.raises(NotFoundError):
        businesses.deactivate_business(42)


def test_deactivate_business_is_idempotent(db, businesses):
    business = businesses.create_business(name="Acme", phone=None)
    db.commit()

    assert businesses.deactivate_business(business.id)[1] is True
    assert businesses.deactivate_business(business.id)[1] is False
    assert business.is_active is False


def test_business_with_users_cannot_be_deleted(db, businesses, users):
    business = businesses.create_business(name="Acme", phone=None)
    users.create_user(email="a@acme.com", password_hash="x", role=RoleType.PYME, business_id=business.id)
    db.commit()

    db.delete(business)
    with pytest.raises(IntegrityError):
        db.flush()
    db.rollback()

    assert businesses.get_business_by_id(business.id) is not None


def test_find_users_by_business(db, businesses, users):
    acme = businesses.create_business(name="Acme", phone=None)
    globex = businesses.create_business(name="Globex", phone=None)
    users.create_user(email="a@acme.com", password_hash="x", role=RoleType.PYME, business_id=acme.id)
    users.create_user(email="b@acme.com", password_hash="x", role=RoleType.PYME, business_id=acme.id)
    users.create_user(email="c@globex.com", password_hash="x", role=RoleType.PYME, business_id=globex.id)
    db.commit()

    assert [u.email for u in users.find_users_by_business(acme.id)] == ["a@acme.com", "b@acme.com"]
    assert len(users.find_all_users()) == 3
