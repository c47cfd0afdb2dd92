"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

AUTH_API_PREFIX = "/api/signouts/auth"
APP_ROOT = "/"
LOGIN_PATH = "/login"

SYSTEM_USERNAME = "admin"

# Login screen copy
SUBTITLE_SYSTEM_STEP = "NCO Access Required"
SUBTITLE_USER_STEP = "Select NCO and Enter PIN"
USER_SELECT_PLACEHOLDER = "Choose an NCO..."
ALREADY_LOGGED_IN_MESSAGE = "You are already logged in. Click here to go to dashboard."

MSG_EMPTY_SYSTEM_PASSWORD = "Please enter the system password."
MSG_INVALID_SYSTEM_PASSWORD = "Invalid system password"
MSG_NO_USER_SELECTED = "Please select an NCO."
MSG_EMPTY_PIN = "Please enter your PIN."
MSG_INVALID_PIN = "Invalid PIN"
MSG_CONNECTION_FAILED = "Connection failed. Please try again."
MSG_USERS_LOAD_FAILED = "Failed to load user list. Please try again."

USER_STEP_FOCUS_DELAY_MS = 200

# Fixture generator
DEFAULT_FIXTURE_GROUPS = 20
FIXTURE_NOTES = "Filler test data"
STILL_OUT_WINDOW_HOURS = 8
COMPLETED_WINDOW_HOURS = 72
MAX_SIGN_IN_OFFSET_HOURS = 4
SIGNOUT_SEQUENCE_BASE = 1000
