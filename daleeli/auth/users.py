from __future__ import annotations

import threading
from typing import Any

import bcrypt

# Demo account store, in memory. Keyed by lower-cased email.
_users: dict[str, dict[str, Any]] = {}
_lock = threading.Lock()


class AuthError(Exception):
    """Form-level account error shown next to the auth form."""


class DuplicateEmailError(AuthError):
    pass


class PasswordMismatchError(AuthError):
    pass


class InvalidCredentialsError(AuthError):
    pass


def _hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def _verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


def _key(email: str) -> str:
    return email.strip().lower()


def _public_profile(record: dict[str, Any]) -> dict[str, Any]:
    return dict(record["profile"])


def register_user(
    name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> dict[str, Any]:
    """Create an account and return its profile."""
    if password != confirm_password:
        raise PasswordMismatchError("Passwords do not match")

    key = _key(email)
    with _lock:
        if key in _users:
            raise DuplicateEmailError("An account with this email already exists")
        _users[key] = {
            "password_hash": _hash_password(password),
            "profile": {
                "name": name.strip(),
                "email": key,
                "avatar": None,
                "preferences": [],
            },
        }
        return _public_profile(_users[key])


def authenticate(email: str, password: str) -> dict[str, Any]:
    """Verify credentials and return the profile."""
    record = _users.get(_key(email))
    if not record or not _verify_password(password, record["password_hash"]):
        raise InvalidCredentialsError("Invalid email or password")
    return _public_profile(record)


def get_profile(email: str) -> dict[str, Any] | None:
    record = _users.get(_key(email))
    return _public_profile(record) if record else None


def update_profile(email: str, **changes: Any) -> dict[str, Any]:
    """Apply non-None *changes* (name, avatar, preferences) to a profile."""
    key = _key(email)
    with _lock:
        record = _users.get(key)
        if record is None:
            raise InvalidCredentialsError("Unknown account")
        for field in ("name", "avatar", "preferences"):
            value = changes.get(field)
            if value is not None:
                record["profile"][field] = value
        return _public_profile(record)


def clear_users() -> None:
    with _lock:
        _users.clear()
