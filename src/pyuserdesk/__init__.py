"""pyuserdesk - Async core for a user-management screen backed by a REST service."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyuserdesk")
except PackageNotFoundError:
    __version__ = "0+local"
from pyuserdesk.client import UserService, UsersClient
from pyuserdesk.config import UsersConfig
from pyuserdesk.exceptions import (
    FieldLockedError,
    FormError,
    FormInputError,
    FormStateError,
    FormValidationError,
    InvalidFieldPathError,
    UsersApiError,
    UsersConfigError,
    UsersError,
    UsersTransportError,
)
from pyuserdesk.manager import Renderer, ScreenState, UserManager
from pyuserdesk.models import Address, Company, Notification, Severity, User
from pyuserdesk.state.form import FormSession, FormState
from pyuserdesk.state.notifications import NotificationChannel
from pyuserdesk.state.store import RecordStore

__all__ = [
    "__version__",
    "Address",
    "Company",
    "FieldLockedError",
    "FormError",
    "FormInputError",
    "FormSession",
    "FormState",
    "FormStateError",
    "FormValidationError",
    "InvalidFieldPathError",
    "Notification",
    "NotificationChannel",
    "RecordStore",
    "Renderer",
    "ScreenState",
    "Severity",
    "User",
    "UserManager",
    "UserService",
    "UsersApiError",
    "UsersClient",
    "UsersConfig",
    "UsersConfigError",
    "UsersError",
    "UsersTransportError",
]
