"""
Session Gate

A single fixed username/password pair unlocks the app. On success a
session marker `{"name": ...}` is written to the key-value store, so the
session survives a reload. Logging out removes the marker.

This is a convenience lock, not authentication: there is no hashing,
no lockout, no expiry and no server check. Failed attempts all get the
same message so the form does not reveal which field was wrong.
"""

import hmac
import json
from typing import Optional

from pydantic import ValidationError

from personal_bank.config import get_settings
from personal_bank.logger import get_logger
from personal_bank.models import LoginResult, SessionUser
from personal_bank.services.storage import KeyValueStore


INVALID_LOGIN_MESSAGE = "Invalid username or password."

logger = get_logger(__name__)


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


class SessionGate:
    """Checks the fixed credential pair and persists the session marker."""

    def __init__(
        self,
        store: KeyValueStore,
        username: Optional[str] = None,
        password: Optional[str] = None,
        session_key: Optional[str] = None,
    ):
        settings = get_settings()
        self._store = store
        self._username = username if username is not None else settings.auth.username
        self._password = password if password is not None else settings.auth.password
        self._key = session_key or settings.storage.session_key

    def login(self, username: Optional[str], password: Optional[str]) -> LoginResult:
        """
        Try to unlock with the submitted credentials.

        The username is trimmed; the password is compared as entered.
        """
        user = (username or "").strip()
        secret = password or ""

        if not user or not secret:
            logger.info("login_rejected", reason="empty_input")
            return LoginResult(success=False, message=INVALID_LOGIN_MESSAGE)

        # Compare both fields regardless of the first result
        user_ok = _same(user, self._username)
        password_ok = _same(secret, self._password)
        if not (user_ok and password_ok):
            logger.info("login_rejected", reason="mismatch")
            return LoginResult(success=False, message=INVALID_LOGIN_MESSAGE)

        session_user = SessionUser(name=self._username)
        self._store.set_item(self._key, session_user.model_dump_json(by_alias=True))
        logger.info("login_succeeded", user=session_user.name)
        return LoginResult(success=True, user=session_user)

    def current_user(self) -> Optional[SessionUser]:
        """
        Read the persisted session marker.

        A marker that cannot be parsed is removed and treated as logged out.
        """
        raw = self._store.get_item(self._key)
        if raw is None:
            return None
        try:
            return SessionUser.model_validate(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("session_marker_discarded", key=self._key, error=str(e))
            self._store.remove_item(self._key)
            return None

    def is_authenticated(self) -> bool:
        return self.current_user() is not None

    def logout(self) -> None:
        self._store.remove_item(self._key)
        logger.info("logout")
