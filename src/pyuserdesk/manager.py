"""Screen core: turns user intents into service calls and state changes.

The presentation layer reads :meth:`UserManager.snapshot` (or receives it
through a :class:`Renderer`) and calls one intent method per user action.
All intents run on the event loop's single thread; several service calls
may be in flight, and each completion is applied on its own.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, ValidationError

from pyuserdesk._constants import (
    MSG_CREATE_FAILED,
    MSG_CREATED,
    MSG_DELETE_FAILED,
    MSG_DELETED,
    MSG_LOAD_FAILED,
    MSG_UPDATE_FAILED,
    MSG_UPDATED,
)
from pyuserdesk.client import UserService
from pyuserdesk.config import UsersConfig
from pyuserdesk.exceptions import FormError, FormValidationError, UsersError
from pyuserdesk.models.notification import Notification
from pyuserdesk.models.user import User
from pyuserdesk.state.events import Operation, ServiceOutcome
from pyuserdesk.state.form import FormSession, FormState, Submission
from pyuserdesk.state.notifications import NotificationChannel
from pyuserdesk.state.policy import FieldIssue
from pyuserdesk.state.store import RecordStore

_logger = logging.getLogger(__name__)

_SUCCESS_MESSAGES: dict[Operation, str] = {
    Operation.CREATE: MSG_CREATED,
    Operation.UPDATE: MSG_UPDATED,
    Operation.DELETE: MSG_DELETED,
}
_FAILURE_MESSAGES: dict[Operation, str] = {
    Operation.LOAD: MSG_LOAD_FAILED,
    Operation.CREATE: MSG_CREATE_FAILED,
    Operation.UPDATE: MSG_UPDATE_FAILED,
    Operation.DELETE: MSG_DELETE_FAILED,
}


class ScreenState(BaseModel):
    """Everything the presentation layer needs to draw the screen."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    records: tuple[User, ...]
    loading: bool
    form_state: FormState
    editing_id: int | None = None
    buffer: dict[str, Any] | None = None
    username: str = ""
    username_derived: bool = False
    issues: tuple[FieldIssue, ...] = ()
    notification: Notification | None = None


class Renderer(Protocol):
    def render(self, state: ScreenState) -> None:
        ...


class UserManager:
    """Owns the record store, form session and notification channel of one screen.

    Usage::

        async with UsersClient(config) as client:
            manager = UserManager(client, config=config)
            await manager.load()
            manager.open_edit(1)
            manager.change_field("address.city", "Boston")
            await manager.submit()
    """

    def __init__(
        self,
        service: UserService,
        *,
        config: UsersConfig | None = None,
        renderer: Renderer | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or UsersConfig()
        self._service = service
        self._renderer = renderer
        self._store = RecordStore()
        self._form = FormSession(
            username_prefix=self._config.username_prefix,
            min_length=self._config.min_length,
        )
        self._notifications = NotificationChannel(
            duration=self._config.notification_duration,
            clock=clock,
        )
        self._loading = True

    @property
    def store(self) -> RecordStore:
        return self._store

    @property
    def form(self) -> FormSession:
        return self._form

    @property
    def notifications(self) -> NotificationChannel:
        return self._notifications

    @property
    def loading(self) -> bool:
        """True until the first load has completed, successfully or not."""
        return self._loading

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def snapshot(self) -> ScreenState:
        form = self._form
        return ScreenState(
            records=self._store.records,
            loading=self._loading,
            form_state=form.state,
            editing_id=form.editing_id,
            buffer=form.buffer,
            username=form.username,
            username_derived=form.username_derived,
            issues=form.issues,
            notification=self._notifications.current,
        )

    def _render(self) -> None:
        if self._renderer is None:
            return
        try:
            self._renderer.render(self.snapshot())
        except Exception:
            _logger.warning("Renderer failed", exc_info=True)

    # ------------------------------------------------------------------
    # Outcomes
    # ------------------------------------------------------------------

    def _report(self, outcome: ServiceOutcome) -> None:
        if outcome.ok:
            message = _SUCCESS_MESSAGES.get(outcome.operation)
            if message is not None:
                self._notifications.success(message)
            return
        _logger.warning("%s failed: %s", outcome.operation, outcome.error)
        self._notifications.failure(_FAILURE_MESSAGES[outcome.operation], detail=outcome.error)

    async def _send(self, submission: Submission) -> ServiceOutcome:
        try:
            if submission.operation == Operation.CREATE:
                created = await self._service.create_user(submission.payload)
                return ServiceOutcome.created(created)
            assert submission.record_id is not None  # noqa: S101
            updated = await self._service.update_user(submission.record_id, submission.payload)
            return ServiceOutcome.updated(updated)
        except UsersError as exc:
            return ServiceOutcome.failed(submission.operation, str(exc), record_id=submission.record_id)
        except ValidationError as exc:
            # A service answered with a record the store cannot key.
            return ServiceOutcome.failed(
                submission.operation,
                f"Unusable {submission.operation} response: {exc.error_count()} validation error(s)",
                record_id=submission.record_id,
            )

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def load(self) -> bool:
        """Fetch the collection; on failure the current list stays as it was."""
        try:
            await self._store.load(self._service)
        except UsersError as exc:
            self._report(ServiceOutcome.failed(Operation.LOAD, str(exc)))
            return False
        finally:
            self._loading = False
            self._render()
        return True

    def open_create(self) -> None:
        self._form.open_create()
        self._render()

    def open_edit(self, record: User | int) -> bool:
        """Open the form on *record* (or the stored record with that id)."""
        if not isinstance(record, User):
            found = self._store.get(record)
            if found is None:
                _logger.warning("Cannot edit user %s: not in the collection", record)
                return False
            record = found
        try:
            self._form.open_edit(record)
        except FormError as exc:
            _logger.warning("Cannot edit user: %s", exc)
            return False
        self._render()
        return True

    def change_field(self, path: str, value: str) -> bool:
        """Apply one keystroke-level change; rejected input leaves the buffer as is."""
        try:
            self._form.set_field(path, value)
        except FormError as exc:
            _logger.warning("Rejected change to %r: %s", path, exc)
            return False
        self._render()
        return True

    def set_username(self, value: str) -> bool:
        try:
            self._form.set_username(value)
        except FormError as exc:
            _logger.warning("Rejected username: %s", exc)
            return False
        self._render()
        return True

    async def submit(self) -> bool:
        """Validate, then create or update.

        The form closes only once the service has confirmed the change; a
        blocked or failed submission keeps it open with the buffer intact.
        """
        try:
            submission = self._form.prepare_submission()
        except FormValidationError as exc:
            _logger.info("Submission blocked: %s", exc)
            self._render()
            return False
        except FormError as exc:
            _logger.warning("Cannot submit: %s", exc)
            return False

        outcome = await self._send(submission)
        self._store.apply(outcome)
        if outcome.ok:
            self._form.finish(submission)
        self._report(outcome)
        self._render()
        return outcome.ok

    def cancel(self) -> None:
        self._form.cancel()
        self._render()

    async def delete(self, record_id: int) -> bool:
        """Delete on the service; the entry stays listed unless the call succeeds."""
        try:
            await self._service.delete_user(record_id)
        except UsersError as exc:
            outcome = ServiceOutcome.failed(Operation.DELETE, str(exc), record_id=record_id)
        else:
            outcome = ServiceOutcome.deleted(record_id)
        self._store.apply(outcome)
        self._report(outcome)
        self._render()
        return outcome.ok

    def dismiss_notification(self) -> None:
        self._notifications.dismiss()
        self._render()
