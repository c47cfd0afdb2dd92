from __future__ import annotations

import logging
from typing import Callable, Optional

from ..core.constants import APP_ROOT
from ..core.exceptions import AuthRejected, DomainError, TransportError
from .api_client import AuthApiClient
from .state import (
    CheckSession,
    ClearInput,
    FetchUsers,
    Focus,
    HideError,
    LoginState,
    LogoutRequested,
    Navigate,
    PopulateUsers,
    PostLogout,
    PostSystemPassword,
    PostUserPin,
    SessionCheckFailed,
    SessionCheckFinished,
    SessionCheckRequested,
    SessionChecked,
    SetSubtitle,
    ShowBanner,
    ShowError,
    ShowPanel,
    SystemAccepted,
    SystemRejected,
    SystemSubmitted,
    SystemTransportFailed,
    UserAccepted,
    UserRejected,
    UserSubmitted,
    UserTransportFailed,
    UsersLoadFailed,
    UsersLoaded,
    is_direct_visit,
    transition,
)
from .view_model import LoginViewModel

logger = logging.getLogger(__name__)

Navigator = Callable[[str], None]
Scheduler = Callable[[int, Callable[[], None]], None]


def run_now(delay_ms: int, callback: Callable[[], None]) -> None:
    callback()


class LoginController:
    """Drives the login view from the pure state machine.

    Single-threaded: every handler, request and effect runs on the caller's
    thread, so the only guard needed is the session-check reentrancy flag
    kept in ``LoginState``.
    """

    def __init__(
        self,
        view: LoginViewModel,
        api: AuthApiClient,
        *,
        navigate: Navigator,
        path: str = "/login",
        referrer: Optional[str] = None,
        schedule: Scheduler = run_now,
    ):
        self._view = view.validate()
        self._api = api
        self._navigate = navigate
        self._path = path
        self._referrer = referrer
        self._schedule = schedule
        self._state = LoginState()
        self._attach_handlers()

    @property
    def state(self) -> LoginState:
        return self._state

    @property
    def view(self) -> LoginViewModel:
        return self._view

    def _attach_handlers(self) -> None:
        v = self._view
        v.system_login_button.on_click = self.submit_system
        v.system_password.on_enter = self.submit_system
        v.user_login_button.on_click = self.submit_user
        v.user_pin.on_enter = self.submit_user
        v.logout_button.on_click = self.logout
        v.banner.on_click = lambda: self._navigate(APP_ROOT)

    # User actions

    def start(self) -> None:
        self.check_existing_session()

    def check_existing_session(self) -> None:
        self._dispatch(SessionCheckRequested())

    def submit_system(self) -> None:
        self._dispatch(SystemSubmitted(self._view.system_password.value))

    def submit_user(self) -> None:
        self._dispatch(UserSubmitted(self._view.user_select.value, self._view.user_pin.value))

    def logout(self) -> None:
        self._dispatch(LogoutRequested())

    # Machinery

    def _dispatch(self, event) -> None:
        self._state, effects = transition(self._state, event)
        for effect in effects:
            self._apply(effect)

    def _apply(self, effect) -> None:
        v = self._view
        if isinstance(effect, ShowPanel):
            v.show_step(effect.step)
        elif isinstance(effect, SetSubtitle):
            v.subtitle.text = effect.text
        elif isinstance(effect, ClearInput):
            v.clear(effect.field)
        elif isinstance(effect, ShowError):
            v.error_for(effect.step).show(effect.message)
        elif isinstance(effect, HideError):
            v.error_for(effect.step).hide()
        elif isinstance(effect, Focus):
            if effect.delay_ms:
                self._schedule(effect.delay_ms, lambda: v.focus(effect.field))
            else:
                v.focus(effect.field)
        elif isinstance(effect, PopulateUsers):
            v.user_select.set_users(effect.users)
        elif isinstance(effect, ShowBanner):
            v.banner.text = effect.message
            v.banner.visible = True
        elif isinstance(effect, Navigate):
            self._navigate(effect.path)
        else:
            self._perform(effect)

    def _perform(self, effect) -> None:
        button = self._view.button_for(effect.busy) if effect.busy else None
        if button:
            button.set_busy(True)
        try:
            if isinstance(effect, CheckSession):
                self._check_session()
            elif isinstance(effect, PostSystemPassword):
                self._post_system_password(effect.password)
            elif isinstance(effect, FetchUsers):
                self._fetch_users()
            elif isinstance(effect, PostUserPin):
                self._post_user_pin(effect.user_id, effect.pin)
            elif isinstance(effect, PostLogout):
                self._post_logout()
            else:
                raise TypeError(f"Unsupported login effect: {effect!r}")
        finally:
            if button:
                button.set_busy(False)

    def _check_session(self) -> None:
        try:
            try:
                status = self._api.check_session()
            except DomainError as e:
                logger.error("Session check error: %s", e)
                self._dispatch(SessionCheckFailed())
                return
            self._dispatch(
                SessionChecked(
                    authenticated=status.authenticated,
                    system_authenticated=status.system_authenticated,
                    direct_visit=is_direct_visit(self._path, self._referrer),
                )
            )
        finally:
            self._dispatch(SessionCheckFinished())

    def _post_system_password(self, password: str) -> None:
        try:
            self._api.login_system(password)
        except AuthRejected as e:
            self._dispatch(SystemRejected(e.message))
            return
        except TransportError as e:
            logger.error("System login error: %s", e)
            self._dispatch(SystemTransportFailed())
            return
        self._dispatch(SystemAccepted())

    def _fetch_users(self) -> None:
        try:
            users = self._api.fetch_users()
        except DomainError as e:
            logger.error("Error loading users: %s", e)
            self._dispatch(UsersLoadFailed())
            return
        self._dispatch(UsersLoaded(tuple(users)))

    def _post_user_pin(self, user_id: int, pin: str) -> None:
        try:
            self._api.login_user(user_id, pin)
        except AuthRejected as e:
            self._dispatch(UserRejected(e.message))
            return
        except TransportError as e:
            logger.error("User login error: %s", e)
            self._dispatch(UserTransportFailed())
            return
        self._dispatch(UserAccepted())

    def _post_logout(self) -> None:
        try:
            self._api.logout()
        except DomainError as e:
            # Best effort: the view returns to the system step either way.
            logger.warning("Logout error: %s", e)
