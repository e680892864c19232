from __future__ import annotations

import dataclasses
from datetime import datetime

import pytest

from staff_ledger.core.enums import Role
from staff_ledger.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from staff_ledger.users.service import AuthService, UserService

from conftest import SARA_ID, InMemoryUsers, make_user


def test_wrong_password_raises_and_keeps_last_signed_in(users_repo):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        auth.authenticate("sara", "wrong")

    assert users_repo.get_by_id(SARA_ID).last_signed_in is None


def test_unknown_user_gets_the_same_message(users_repo):
    with pytest.raises(AuthenticationError, match="Invalid username or password"):
        AuthService(users_repo).authenticate("nobody", "sara123")


def test_login_records_last_signed_in(users_repo):
    now = datetime(2024, 3, 10, 9, 0)

    session_user = AuthService(users_repo).authenticate(" sara ", "sara123", now=now)

    assert session_user.user_id == SARA_ID
    assert session_user.role == Role.STAFF
    assert users_repo.get_by_id(SARA_ID).last_signed_in == now


def test_inactive_account_cannot_login():
    user = make_user(7, "Gone", "gone", "gone123", Role.STAFF)
    repo = InMemoryUsers([dataclasses.replace(user, is_active=False)])

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("gone", "gone123")


def test_placeholder_hash_never_matches():
    user = make_user(8, "Seed", "seed", "x", Role.STAFF)
    repo = InMemoryUsers([dataclasses.replace(user, password_hash="CHANGE_ME")])

    with pytest.raises(AuthenticationError):
        AuthService(repo).authenticate("seed", "CHANGE_ME")


def test_change_password(users_repo, sara):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError):
        auth.change_password(sara, current_password="nope", new_password="newpass1")
    with pytest.raises(ValidationError, match="at least 6"):
        auth.change_password(sara, current_password="sara123", new_password="short")

    auth.change_password(sara, current_password="sara123", new_password="newpass1")

    assert auth.authenticate("sara", "newpass1").user_id == SARA_ID


def test_only_admin_lists_and_counts_staff(users_repo, admin, sara):
    service = UserService(users_repo)

    assert [u.full_name for u in service.list_users(admin)] == ["Admin Demo", "Omar Ali", "Sara Khan"]
    assert service.count_staff(admin) == 2
    with pytest.raises(AuthorizationError):
        service.list_users(sara)


def test_admin_creates_staff_account(users_repo, admin, sara):
    service = UserService(users_repo)

    created = service.create_staff(admin, full_name="Rafi Ahmed", username="rafi", password="rafi1234")

    assert created.role == Role.STAFF
    assert AuthService(users_repo).authenticate("rafi", "rafi1234").full_name == "Rafi Ahmed"
    with pytest.raises(ValidationError, match="already exists"):
        service.create_staff(admin, full_name="Other", username="rafi", password="secret1")
    with pytest.raises(AuthorizationError):
        service.create_staff(sara, full_name="X", username="x", password="secret1")


def test_non_text_credentials_are_rejected_not_crashed(users_repo, admin, sara):
    auth = AuthService(users_repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate(123, "sara123")
    with pytest.raises(AuthenticationError):
        auth.authenticate("sara", 123)
    with pytest.raises(AuthenticationError):
        auth.change_password(sara, current_password=None, new_password="newpass1")
    with pytest.raises(ValidationError):
        auth.change_password(sara, current_password="sara123", new_password=1234567)
    with pytest.raises(ValidationError):
        UserService(users_repo).create_staff(admin, full_name="Rafi", username="rafi", password=12345678)
