from __future__ import annotations

import pytest

from signout_tracker.core.exceptions import AuthenticationError, ValidationError
from signout_tracker.users.service import AuthService


def test_system_password_accepted(users_repo):
    AuthService(users_repo).verify_system_password("secret123")


def test_system_password_wrong_raises(users_repo):
    with pytest.raises(AuthenticationError, match="Invalid system password"):
        AuthService(users_repo).verify_system_password("nope")


def test_system_password_empty_is_validation_error(users_repo):
    with pytest.raises(ValidationError):
        AuthService(users_repo).verify_system_password("   ")


def test_system_password_without_system_account(users_repo):
    del users_repo.users_by_id[1]
    with pytest.raises(AuthenticationError, match="not configured"):
        AuthService(users_repo).verify_system_password("secret123")


def test_list_users_excludes_system_and_inactive_accounts(users_repo):
    users = AuthService(users_repo).list_users()

    assert [u.label for u in users] == ["SGT Nguyen", "SSG Lee"]


def test_user_pin_accepted_records_login(users_repo):
    s_user = AuthService(users_repo).verify_user_pin(2, "2222")

    assert s_user.to_dict() == {"id": 2, "rank": "SSG", "full_name": "Lee", "username": "user_2"}
    assert users_repo.last_login == [2]


def test_user_pin_wrong_raises(users_repo):
    with pytest.raises(AuthenticationError, match="Invalid PIN"):
        AuthService(users_repo).verify_user_pin(2, "9999")
    assert users_repo.last_login == []


@pytest.mark.parametrize("user_id", [99, 1, 4])
def test_user_pin_unknown_system_or_inactive_user(users_repo, user_id):
    with pytest.raises(AuthenticationError, match="User not found"):
        AuthService(users_repo).verify_user_pin(user_id, "3333")


@pytest.mark.parametrize("user_id", ["abc", None, True])
def test_user_pin_requires_integer_id(users_repo, user_id):
    with pytest.raises(ValidationError):
        AuthService(users_repo).verify_user_pin(user_id, "2222")
