"""Custom exception hierarchy for pyuserdesk."""

from __future__ import annotations

from collections.abc import Sequence


class UsersError(Exception):
    """Base exception for all pyuserdesk errors."""


class UsersConfigError(UsersError):
    """Invalid or missing configuration."""


class UsersTransportError(UsersError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class UsersApiError(UsersError):
    """The service answered, but the body is not a usable user representation."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str = "",
    ) -> None:
        self.endpoint = endpoint
        super().__init__(message)


class FormError(UsersError):
    """Base for edit-form errors."""


class FormStateError(FormError):
    """Operation not allowed in the current form state (e.g. editing a closed form)."""


class FormInputError(FormError, ValueError):
    """A field change was rejected; the edit buffer is unchanged."""

    def __init__(self, message: str, *, path: str = "") -> None:
        self.path = path
        super().__init__(message)


class InvalidFieldPathError(FormInputError):
    """The field path names no editable field or group."""


class FieldLockedError(FormInputError):
    """The field is derived and does not accept keystrokes.

    Raised for ``username`` while it is still computed from ``name``.
    Use :meth:`pyuserdesk.state.form.FormSession.set_username` to take
    it over explicitly.
    """


class FormValidationError(FormError):
    """Submission blocked by client-side validation.

    ``issues`` holds one entry per failing rule; no service call was made.
    """

    def __init__(self, issues: Sequence[object]) -> None:
        self.issues = tuple(issues)
        fields = ", ".join(sorted({str(getattr(issue, "field", issue)) for issue in self.issues}))
        super().__init__(f"Invalid form fields: {fields}")
