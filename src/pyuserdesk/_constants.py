"""Constants for the user service client."""

from __future__ import annotations

DEFAULT_BASE_URL = "https://jsonplaceholder.typicode.com"
USERS_ENDPOINT = "/users"

USER_AGENT = "pyuserdesk/1 (+aiohttp)"
JSON_CONTENT_TYPE = "application/json; charset=UTF-8"

#: Default auto-hide delay for notifications, in seconds.
DEFAULT_NOTIFICATION_DURATION: float = 6.0
DEFAULT_USERNAME_PREFIX = "USER-"
DEFAULT_MIN_LENGTH = 3

# Notification texts shown for each operation outcome.
MSG_LOAD_FAILED = "Failed to fetch users"
MSG_CREATED = "User created successfully"
MSG_CREATE_FAILED = "Failed to create user"
MSG_UPDATED = "User updated successfully"
MSG_UPDATE_FAILED = "Failed to update user"
MSG_DELETED = "User deleted successfully"
MSG_DELETE_FAILED = "Failed to delete user"
