from __future__ import annotations

import pytest

from src.hr_admin.hr_admin.core.exceptions import AuthenticationError
from src.hr_admin.hr_admin.users.model import User
from src.hr_admin.hr_admin.users.service import AuthService, SessionUser


def test_authenticate_returns_session_user(users_repo):
    user = AuthService(users_repo).authenticate("hradmin@test.com", "TestPass1234")

    assert user == SessionUser(user_id=1, username="hradmin@test.com")


@pytest.mark.parametrize(
    "username, password",
    [("hradmin@test.com", "wrong"), ("nobody@test.com", "TestPass1234"), ("", "")],
)
def test_bad_credentials_share_one_message(users_repo, username, password):
    with pytest.raises(AuthenticationError, match="Invalid credentials"):
        AuthService(users_repo).authenticate(username, password)


def test_unusable_hash_is_a_failed_login(users_repo):
    users_repo.users[2] = User(2, "legacy@test.com", "not-a-hash")

    with pytest.raises(AuthenticationError):
        AuthService(users_repo).authenticate("legacy@test.com", "anything")


def test_session_round_trip():
    user = SessionUser(user_id=3, username="ann@test.com")

    assert SessionUser.from_session(user.to_session()) == user
    assert SessionUser.from_session({}) is None
