"""Client side of the two-step login (system password, then NCO + PIN)."""
from __future__ import annotations

from .api_client import AuthApiClient, SessionStatus
from .controller import LoginController
from .state import LoginState, transition
from .view_model import LoginViewModel

__all__ = [
    "AuthApiClient",
    "LoginController",
    "LoginState",
    "LoginViewModel",
    "SessionStatus",
    "transition",
]
