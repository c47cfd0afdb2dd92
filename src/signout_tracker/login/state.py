"""Two-step login as a pure state machine.

``transition(state, event)`` returns the next state plus a list of effects.
View effects are applied to the view-model by the controller; request
effects are performed by the controller, which feeds the outcome back in as
another event.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from ..core.constants import (
    ALREADY_LOGGED_IN_MESSAGE,
    APP_ROOT,
    LOGIN_PATH,
    MSG_CONNECTION_FAILED,
    MSG_EMPTY_PIN,
    MSG_EMPTY_SYSTEM_PASSWORD,
    MSG_INVALID_PIN,
    MSG_INVALID_SYSTEM_PASSWORD,
    MSG_NO_USER_SELECTED,
    MSG_USERS_LOAD_FAILED,
    SUBTITLE_SYSTEM_STEP,
    SUBTITLE_USER_STEP,
    USER_STEP_FOCUS_DELAY_MS,
)
from ..core.enums import LoginStep
from ..users.model import NcoUser


class Field(str, Enum):
    SYSTEM_PASSWORD = "system_password"
    USER_SELECT = "user_select"
    USER_PIN = "user_pin"


@dataclass(frozen=True)
class LoginState:
    step: LoginStep = LoginStep.SYSTEM_STEP
    users: tuple[NcoUser, ...] = ()
    auth_check_in_progress: bool = False
    banner: Optional[str] = None


def is_direct_visit(path: str, referrer: Optional[str]) -> bool:
    """True when /login was opened directly rather than bounced back to itself."""
    return path == LOGIN_PATH and (not referrer or LOGIN_PATH not in referrer)


# Events


@dataclass(frozen=True)
class SessionCheckRequested:
    pass


@dataclass(frozen=True)
class SessionChecked:
    authenticated: bool
    system_authenticated: bool
    direct_visit: bool = True


@dataclass(frozen=True)
class SessionCheckFailed:
    pass


@dataclass(frozen=True)
class SessionCheckFinished:
    pass


@dataclass(frozen=True)
class SystemSubmitted:
    password: str


@dataclass(frozen=True)
class SystemAccepted:
    pass


@dataclass(frozen=True)
class SystemRejected:
    message: Optional[str] = None


@dataclass(frozen=True)
class SystemTransportFailed:
    pass


@dataclass(frozen=True)
class UsersLoaded:
    users: tuple[NcoUser, ...]


@dataclass(frozen=True)
class UsersLoadFailed:
    pass


@dataclass(frozen=True)
class UserSubmitted:
    user_id: str
    pin: str


@dataclass(frozen=True)
class UserAccepted:
    pass


@dataclass(frozen=True)
class UserRejected:
    message: Optional[str] = None


@dataclass(frozen=True)
class UserTransportFailed:
    pass


@dataclass(frozen=True)
class LogoutRequested:
    pass


Event = Union[
    SessionCheckRequested,
    SessionChecked,
    SessionCheckFailed,
    SessionCheckFinished,
    SystemSubmitted,
    SystemAccepted,
    SystemRejected,
    SystemTransportFailed,
    UsersLoaded,
    UsersLoadFailed,
    UserSubmitted,
    UserAccepted,
    UserRejected,
    UserTransportFailed,
    LogoutRequested,
]


# View effects


@dataclass(frozen=True)
class ShowPanel:
    step: LoginStep


@dataclass(frozen=True)
class SetSubtitle:
    text: str


@dataclass(frozen=True)
class ClearInput:
    field: Field


@dataclass(frozen=True)
class ShowError:
    step: LoginStep
    message: str


@dataclass(frozen=True)
class HideError:
    step: LoginStep


@dataclass(frozen=True)
class Focus:
    field: Field
    delay_ms: int = 0


@dataclass(frozen=True)
class PopulateUsers:
    users: tuple[NcoUser, ...]


@dataclass(frozen=True)
class ShowBanner:
    message: str
    target: str = APP_ROOT


@dataclass(frozen=True)
class Navigate:
    path: str


# Request effects. ``busy`` names the step whose submit button is disabled
# while the call is in flight.


@dataclass(frozen=True)
class CheckSession:
    busy: Optional[LoginStep] = None


@dataclass(frozen=True)
class PostSystemPassword:
    password: str
    busy: Optional[LoginStep] = LoginStep.SYSTEM_STEP


@dataclass(frozen=True)
class FetchUsers:
    busy: Optional[LoginStep] = None


@dataclass(frozen=True)
class PostUserPin:
    user_id: int
    pin: str
    busy: Optional[LoginStep] = LoginStep.USER_STEP


@dataclass(frozen=True)
class PostLogout:
    busy: Optional[LoginStep] = None


Effect = Union[
    ShowPanel,
    SetSubtitle,
    ClearInput,
    ShowError,
    HideError,
    Focus,
    PopulateUsers,
    ShowBanner,
    Navigate,
    CheckSession,
    PostSystemPassword,
    FetchUsers,
    PostUserPin,
    PostLogout,
]

REQUEST_EFFECTS = (CheckSession, PostSystemPassword, FetchUsers, PostUserPin, PostLogout)


def _enter_system_step(state: LoginState) -> tuple[LoginState, list]:
    return replace(state, step=LoginStep.SYSTEM_STEP), [
        ShowPanel(LoginStep.SYSTEM_STEP),
        SetSubtitle(SUBTITLE_SYSTEM_STEP),
        ClearInput(Field.SYSTEM_PASSWORD),
        HideError(LoginStep.SYSTEM_STEP),
        Focus(Field.SYSTEM_PASSWORD),
    ]


def _enter_user_step(state: LoginState) -> tuple[LoginState, list]:
    return replace(state, step=LoginStep.USER_STEP), [
        ShowPanel(LoginStep.USER_STEP),
        SetSubtitle(SUBTITLE_USER_STEP),
        ClearInput(Field.USER_PIN),
        HideError(LoginStep.USER_STEP),
        Focus(Field.USER_SELECT, delay_ms=USER_STEP_FOCUS_DELAY_MS),
    ]


def _parse_user_id(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def transition(state: LoginState, event: Event) -> tuple[LoginState, list]:
    """Pure: the same (state, event) always yields the same result."""

    # Session check on load
    if isinstance(event, SessionCheckRequested):
        if state.auth_check_in_progress:
            return state, []
        return replace(state, auth_check_in_progress=True), [CheckSession()]

    if isinstance(event, SessionCheckFinished):
        return replace(state, auth_check_in_progress=False), []

    if isinstance(event, SessionChecked):
        if event.authenticated:
            if event.direct_visit:
                return state, [Navigate(APP_ROOT)]
            # Bounced back to /login: redirecting again would loop.
            return replace(state, banner=ALREADY_LOGGED_IN_MESSAGE), [ShowBanner(ALREADY_LOGGED_IN_MESSAGE)]
        if event.system_authenticated:
            return state, [FetchUsers()]
        return _enter_system_step(state)

    if isinstance(event, SessionCheckFailed):
        return _enter_system_step(state)

    # System password step
    if isinstance(event, SystemSubmitted):
        password = (event.password or "").strip()
        if not password:
            return state, [ShowError(LoginStep.SYSTEM_STEP, MSG_EMPTY_SYSTEM_PASSWORD)]
        return state, [HideError(LoginStep.SYSTEM_STEP), PostSystemPassword(password)]

    if isinstance(event, SystemAccepted):
        return state, [FetchUsers()]

    if isinstance(event, SystemRejected):
        return state, [ShowError(LoginStep.SYSTEM_STEP, event.message or MSG_INVALID_SYSTEM_PASSWORD)]

    if isinstance(event, SystemTransportFailed):
        return state, [ShowError(LoginStep.SYSTEM_STEP, MSG_CONNECTION_FAILED)]

    # NCO list
    if isinstance(event, UsersLoaded):
        new_state, effects = _enter_user_step(replace(state, users=tuple(event.users)))
        return new_state, [PopulateUsers(new_state.users), *effects]

    if isinstance(event, UsersLoadFailed):
        new_state, effects = _enter_user_step(replace(state, users=()))
        return new_state, [PopulateUsers(()), *effects, ShowError(LoginStep.USER_STEP, MSG_USERS_LOAD_FAILED)]

    # NCO + PIN step
    if isinstance(event, UserSubmitted):
        user_id = _parse_user_id((event.user_id or "").strip())
        pin = (event.pin or "").strip()
        if user_id is None:
            return state, [ShowError(LoginStep.USER_STEP, MSG_NO_USER_SELECTED)]
        if not pin:
            return state, [ShowError(LoginStep.USER_STEP, MSG_EMPTY_PIN)]
        return state, [HideError(LoginStep.USER_STEP), PostUserPin(user_id, pin)]

    if isinstance(event, UserAccepted):
        return state, [Navigate(APP_ROOT)]

    if isinstance(event, UserRejected):
        return state, [ShowError(LoginStep.USER_STEP, event.message or MSG_INVALID_PIN)]

    if isinstance(event, UserTransportFailed):
        return state, [ShowError(LoginStep.USER_STEP, MSG_CONNECTION_FAILED)]

    if isinstance(event, LogoutRequested):
        new_state, effects = _enter_system_step(replace(state, users=()))
        return new_state, [PostLogout(), ClearInput(Field.SYSTEM_PASSWORD), ClearInput(Field.USER_PIN), *effects]

    raise TypeError(f"Unsupported login event: {event!r}")
