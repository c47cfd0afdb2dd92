from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Callable, Optional

from ..core.constants import USER_SELECT_PLACEHOLDER
from ..core.enums import LoginStep
from ..core.exceptions import ConfigurationError
from ..users.model import NcoUser
from .state import Field

Handler = Optional[Callable[[], None]]


@dataclass
class Panel:
    visible: bool = False


@dataclass
class Label:
    text: str = ""


@dataclass
class ErrorLabel:
    text: str = ""
    visible: bool = False

    def show(self, message: str) -> None:
        self.text = message
        self.visible = True

    def hide(self) -> None:
        self.visible = False


@dataclass
class TextInput:
    value: str = ""
    masked: bool = True
    focused: bool = False
    on_enter: Handler = None

    def press_enter(self) -> None:
        if self.on_enter:
            self.on_enter()

    def toggle_visibility(self) -> None:
        self.masked = not self.masked


@dataclass
class SelectInput:
    options: list[tuple[str, str]] = field(default_factory=list)
    value: str = ""
    focused: bool = False

    def set_users(self, users: tuple[NcoUser, ...]) -> None:
        self.options = [("", USER_SELECT_PLACEHOLDER)]
        self.options.extend((str(u.id), u.label) for u in users)
        self.value = ""


@dataclass
class Button:
    disabled: bool = False
    busy: bool = False
    on_click: Handler = None

    def click(self) -> None:
        if self.on_click and not self.disabled:
            self.on_click()

    def set_busy(self, busy: bool) -> None:
        self.disabled = busy
        self.busy = busy


@dataclass
class Banner:
    text: str = ""
    visible: bool = False
    on_click: Handler = None

    def click(self) -> None:
        if self.visible and self.on_click:
            self.on_click()


@dataclass
class LoginViewModel:
    """Explicit handles to every control on the login screen.

    Built once at startup; ``validate()`` must pass before a controller uses it.
    """

    system_panel: Optional[Panel] = None
    user_panel: Optional[Panel] = None
    subtitle: Optional[Label] = None
    banner: Optional[Banner] = None

    system_password: Optional[TextInput] = None
    system_login_button: Optional[Button] = None
    system_error: Optional[ErrorLabel] = None

    user_select: Optional[SelectInput] = None
    user_pin: Optional[TextInput] = None
    user_login_button: Optional[Button] = None
    user_error: Optional[ErrorLabel] = None
    logout_button: Optional[Button] = None

    @classmethod
    def build(cls) -> "LoginViewModel":
        return cls(
            system_panel=Panel(visible=True),
            user_panel=Panel(),
            subtitle=Label(),
            banner=Banner(),
            system_password=TextInput(),
            system_login_button=Button(),
            system_error=ErrorLabel(),
            user_select=SelectInput(),
            user_pin=TextInput(),
            user_login_button=Button(),
            user_error=ErrorLabel(),
            logout_button=Button(),
        )

    def validate(self) -> "LoginViewModel":
        missing = [f.name for f in fields(self) if getattr(self, f.name) is None]
        if missing:
            raise ConfigurationError(f"Login view is missing controls: {', '.join(missing)}")
        return self

    def error_for(self, step: LoginStep) -> ErrorLabel:
        return self.system_error if step == LoginStep.SYSTEM_STEP else self.user_error

    def button_for(self, step: LoginStep) -> Button:
        return self.system_login_button if step == LoginStep.SYSTEM_STEP else self.user_login_button

    def show_step(self, step: LoginStep) -> None:
        self.system_panel.visible = step == LoginStep.SYSTEM_STEP
        self.user_panel.visible = step == LoginStep.USER_STEP

    def clear(self, target: Field) -> None:
        if target == Field.SYSTEM_PASSWORD:
            self.system_password.value = ""
        elif target == Field.USER_PIN:
            self.user_pin.value = ""
        elif target == Field.USER_SELECT:
            self.user_select.value = ""

    def focus(self, target: Field) -> None:
        self.system_password.focused = target == Field.SYSTEM_PASSWORD
        self.user_select.focused = target == Field.USER_SELECT
        self.user_pin.focused = target == Field.USER_PIN
