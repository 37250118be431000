"""Edit-form session: the transient buffer for one new or existing user.

The session is a small state machine (``CLOSED``, ``CREATING``,
``EDITING``). The buffer is always a private deep copy, so nothing typed
into the form is visible in the listed collection until the service has
confirmed it.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pyuserdesk._constants import DEFAULT_MIN_LENGTH, DEFAULT_USERNAME_PREFIX
from pyuserdesk.exceptions import (
    FieldLockedError,
    FormInputError,
    FormStateError,
    FormValidationError,
    InvalidFieldPathError,
)
from pyuserdesk.models.user import User
from pyuserdesk.state.events import Operation
from pyuserdesk.state.policy import FieldIssue, derive_username, validate_fields

_logger = logging.getLogger(__name__)

_TOP_LEVEL_FIELDS: frozenset[str] = frozenset({"name", "email", "phone", "username", "website"})
_GROUP_FIELDS: dict[str, frozenset[str]] = {
    "address": frozenset({"street", "city"}),
    "company": frozenset({"name"}),
}


def _empty_buffer() -> dict[str, Any]:
    return {
        "name": "",
        "email": "",
        "phone": "",
        "username": "",
        "website": "",
        "address": {"street": "", "city": ""},
        "company": {"name": ""},
    }


class FormState(StrEnum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True, slots=True)
class Submission:
    """A validated payload ready to be sent to the service."""

    operation: Operation
    payload: dict[str, Any]
    generation: int
    record_id: int | None = None


class FormSession:
    """Holds the edit buffer and the derived-username rule for one dialog."""

    def __init__(
        self,
        *,
        username_prefix: str = DEFAULT_USERNAME_PREFIX,
        min_length: int = DEFAULT_MIN_LENGTH,
    ) -> None:
        self._username_prefix = username_prefix
        self._min_length = min_length
        self._state = FormState.CLOSED
        self._editing_id: int | None = None
        self._buffer: dict[str, Any] | None = None
        self._username_explicit = False
        self._generation = 0
        self._issues: tuple[FieldIssue, ...] = ()

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> FormState:
        return self._state

    @property
    def editing_id(self) -> int | None:
        return self._editing_id

    @property
    def is_open(self) -> bool:
        return self._state != FormState.CLOSED

    @property
    def generation(self) -> int:
        """Changes every time a session opens or closes."""
        return self._generation

    @property
    def buffer(self) -> dict[str, Any] | None:
        """A copy of the edit buffer, or ``None`` while closed."""
        return copy.deepcopy(self._buffer)

    @property
    def username_derived(self) -> bool:
        """True while the username is computed from the name and locked."""
        return self.is_open and not self._username_explicit

    @property
    def username(self) -> str:
        """The username as presented: explicit value, else derived from the name."""
        if self._buffer is None:
            return ""
        if self._username_explicit:
            return str(self._buffer.get("username") or "")
        return derive_username(str(self._buffer.get("name") or ""), self._username_prefix)

    @property
    def issues(self) -> tuple[FieldIssue, ...]:
        """Issues from the most recent validation."""
        return self._issues

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _open(self, state: FormState, buffer: dict[str, Any], editing_id: int | None) -> None:
        if self.is_open:
            _logger.debug("Discarding open %s session to open %s", self._state, state)
        self._state = state
        self._editing_id = editing_id
        self._buffer = buffer
        self._username_explicit = bool(str(buffer.get("username") or ""))
        self._issues = ()
        self._generation += 1

    def open_create(self) -> None:
        """Start a session for a new user with an empty buffer."""
        self._open(FormState.CREATING, _empty_buffer(), None)

    def open_edit(self, record: User) -> None:
        """Start a session seeded with a field-for-field copy of *record*.

        A non-empty username on the record is kept verbatim (explicit mode).
        """
        if record.id is None:
            raise FormStateError("cannot edit a user that has no id")
        buffer = _empty_buffer()
        dumped = copy.deepcopy(record.model_dump(mode="json"))
        for group in _GROUP_FIELDS:
            merged = dict(buffer[group])
            merged.update(dumped.pop(group, None) or {})
            buffer[group] = merged
        buffer.update(dumped)
        self._open(FormState.EDITING, buffer, record.id)

    def close(self) -> None:
        """Return to ``CLOSED`` and discard the buffer."""
        if not self.is_open:
            return
        self._state = FormState.CLOSED
        self._editing_id = None
        self._buffer = None
        self._username_explicit = False
        self._issues = ()
        self._generation += 1

    def cancel(self) -> None:
        """User abandoned the dialog; the buffer is discarded unconditionally."""
        _logger.debug("Form cancelled in state %s", self._state)
        self.close()

    def finish(self, submission: Submission) -> bool:
        """Close after a confirmed submission, unless the session has moved on since."""
        if not self.is_open or submission.generation != self._generation:
            _logger.debug("Submission from generation %d no longer current", submission.generation)
            return False
        self.close()
        return True

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def _require_buffer(self) -> dict[str, Any]:
        if self._buffer is None:
            raise FormStateError("no form session is open")
        return self._buffer

    def set_field(self, path: str, value: str) -> None:
        """Set one field; *path* is ``"name"``-style or ``"group.field"`` for a nested group.

        Raises a :class:`FormInputError` subclass, leaving the buffer
        untouched, when the path or value is not accepted.
        """
        buffer = self._require_buffer()
        if not isinstance(value, str):
            raise FormInputError(f"value for {path!r} must be a string", path=path)

        if "." in path:
            group, _, name = path.partition(".")
            if group not in _GROUP_FIELDS or name not in _GROUP_FIELDS[group]:
                raise InvalidFieldPathError(f"unknown field {path!r}", path=path)
            target = buffer.get(group)
            if not isinstance(target, dict):
                target = {}
                buffer[group] = target
            target[name] = value
            return

        if path not in _TOP_LEVEL_FIELDS:
            raise InvalidFieldPathError(f"unknown field {path!r}", path=path)
        if path == "username":
            if not self._username_explicit:
                raise FieldLockedError("username is derived from the name", path=path)
            self.set_username(value)
            return
        buffer[path] = value

    def set_username(self, value: str) -> None:
        """Take the username over explicitly.

        Later name edits no longer change it. An empty value hands the
        field back to the derived rule.
        """
        buffer = self._require_buffer()
        if not isinstance(value, str):
            raise FormInputError("username must be a string", path="username")
        buffer["username"] = value
        self._username_explicit = bool(value)

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def values(self) -> dict[str, Any]:
        """The buffer as it would be submitted (presented username included)."""
        values = copy.deepcopy(self._require_buffer())
        values["username"] = self.username
        return values

    def validate(self) -> list[FieldIssue]:
        issues = validate_fields(self.values(), min_length=self._min_length)
        self._issues = tuple(issues)
        return issues

    def prepare_submission(self) -> Submission:
        """Validate and build the payload; raises :class:`FormValidationError` when blocked."""
        self._require_buffer()
        issues = self.validate()
        if issues:
            raise FormValidationError(issues)
        payload = self.values()
        if self._state == FormState.CREATING:
            payload.pop("id", None)
            return Submission(Operation.CREATE, payload, self._generation)
        return Submission(Operation.UPDATE, payload, self._generation, record_id=self._editing_id)
