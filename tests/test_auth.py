import threading
import time

import pytest

from auth import token_manager
from auth.login_manager import AuthError, hash_password, login, signup, verify_password
from auth.token_manager import sign_token, verify_token


def test_password_hash_verifies():
    hashed = hash_password("hunter2")
    assert hashed != "hunter2"
    assert verify_password("hunter2", hashed)
    assert not verify_password("hunter3", hashed)


def test_malformed_hash_does_not_verify():
    assert not verify_password("hunter2", "not-a-bcrypt-hash")
    assert not verify_password("hunter2", "")


def test_signup_rejects_duplicate_email(store):
    signup(store, "Ada", "ada@example.com", "pw")
    with pytest.raises(AuthError) as exc:
        signup(store, "Other", "ADA@example.com", "pw2")
    assert exc.value.status_code == 409


def test_login(store):
    user = signup(store, "Ada", "ada@example.com", "pw")
    assert login(store, "Ada@Example.com", "pw")["id"] == user["id"]


@pytest.mark.parametrize("email,password", [("ada@example.com", "wrong"), ("ghost@example.com", "pw")])
def test_login_failures_share_a_message(store, email, password):
    signup(store, "Ada", "ada@example.com", "pw")
    with pytest.raises(AuthError, match="Invalid email or password") as exc:
        login(store, email, password)
    assert exc.value.status_code == 401


def test_token_round_trip():
    claims = verify_token(sign_token({"id": "42", "name": "Ada", "email": "ada@example.com"}))
    assert claims == {"uid": "42", "name": "Ada", "email": "ada@example.com"}


def test_tampered_token_is_rejected():
    token = sign_token({"id": "42", "name": "Ada", "email": "ada@example.com"})
    with pytest.raises(AuthError, match="Invalid token"):
        verify_token("x" + token[1:])


def test_expired_token_is_rejected(monkeypatch):
    token = sign_token({"id": "42", "name": "Ada", "email": "ada@example.com"})
    monkeypatch.setattr(token_manager, "TOKEN_MAX_AGE", -1)
    with pytest.raises(AuthError):
        verify_token(token)


def test_concurrent_signups_store_one_user(store, monkeypatch):
    from auth import login_manager

    real_hash = login_manager.hash_password

    def slow_hash(plain):
        time.sleep(0.2)
        return real_hash(plain)

    monkeypatch.setattr(login_manager, "hash_password", slow_hash)
    errors = []

    def attempt():
        try:
            signup(store, "Ada", "dup@example.com", "pw")
        except AuthError as e:
            errors.append(e)

    threads = [threading.Thread(target=attempt) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    users = [u for u in store.read()["users"] if u["email"] == "dup@example.com"]
    assert len(users) == 1
    assert [e.status_code for e in errors] == [409]
