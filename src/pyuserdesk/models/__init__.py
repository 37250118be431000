"""Pydantic models for user records and notifications."""

from pyuserdesk.models.notification import Notification, Severity
from pyuserdesk.models.user import Address, Company, User

__all__ = [
    "Address",
    "Company",
    "Notification",
    "Severity",
    "User",
]
