"""Session gate package."""

from personal_bank.auth.session import INVALID_LOGIN_MESSAGE, SessionGate

__all__ = ["INVALID_LOGIN_MESSAGE", "SessionGate"]
