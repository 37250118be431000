"""Authoritative local copy of the user collection.

This is the only component allowed to mutate the collection, and it does
so only with data a service call has confirmed.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pyuserdesk.models.user import User
from pyuserdesk.state.events import Operation, ServiceOutcome

if TYPE_CHECKING:
    from pyuserdesk.client import UserService

_logger = logging.getLogger(__name__)


def _dedupe(records: list[User] | tuple[User, ...]) -> list[User]:
    """Collapse repeated ids; a later entry replaces the earlier one in place."""
    result: list[User] = []
    index: dict[int | None, int] = {}
    for record in records:
        position = index.get(record.id)
        if position is not None and record.id is not None:
            _logger.warning("Service listed user id %s more than once; keeping the last", record.id)
            result[position] = record
            continue
        index[record.id] = len(result)
        result.append(record)
    return result


class RecordStore:
    """In-memory ordered collection of users keyed by service id.

    Order is the service's list order followed by records created in this
    session. No two entries share an id.
    """

    def __init__(self) -> None:
        self._records: list[User] = []
        self._loaded = False

    @property
    def records(self) -> tuple[User, ...]:
        return tuple(self._records)

    @property
    def loaded(self) -> bool:
        """Whether a load has ever succeeded."""
        return self._loaded

    def __len__(self) -> int:
        return len(self._records)

    def _index_of(self, record_id: int | None) -> int | None:
        for i, record in enumerate(self._records):
            if record.id == record_id:
                return i
        return None

    def get(self, record_id: int) -> User | None:
        position = self._index_of(record_id)
        return None if position is None else self._records[position]

    async def load(self, service: UserService) -> tuple[User, ...]:
        """Fetch the remote collection and replace the local one wholesale.

        A failing fetch raises before anything is touched, so the previous
        collection (empty before the first load) stays in place.
        """
        users = await service.get_users()
        return self.apply(ServiceOutcome.loaded(users))

    def replace_all(self, records: list[User] | tuple[User, ...]) -> tuple[User, ...]:
        self._records = _dedupe(records)
        self._loaded = True
        _logger.info("Loaded %d users", len(self._records))
        return self.records

    def apply_create(self, record: User) -> tuple[User, ...]:
        """Append a created record; its id is the one the service returned."""
        if record.id is None:
            raise ValueError("created record has no id")
        position = self._index_of(record.id)
        if position is not None:
            _logger.warning("Created user id %s already listed; replacing the existing entry", record.id)
            self._records[position] = record
        else:
            self._records.append(record)
        _logger.info("Applied create of user %s", record.id)
        return self.records

    def apply_update(self, record: User) -> tuple[User, ...]:
        """Replace the entry with the same id; unknown ids leave the collection as is."""
        position = self._index_of(record.id)
        if position is None:
            _logger.warning("Updated user id %s is not listed; collection unchanged", record.id)
            return self.records
        self._records[position] = record
        _logger.info("Applied update of user %s", record.id)
        return self.records

    def apply_delete(self, record_id: int) -> tuple[User, ...]:
        """Remove the entry with *record_id*; removing an absent id is a no-op."""
        before = len(self._records)
        self._records = [record for record in self._records if record.id != record_id]
        if len(self._records) != before:
            _logger.info("Applied delete of user %s", record_id)
        return self.records

    def apply(self, outcome: ServiceOutcome) -> tuple[User, ...]:
        """Apply a service outcome; failed outcomes never mutate the collection."""
        if not outcome.ok:
            _logger.debug("Ignoring failed %s outcome: %s", outcome.operation, outcome.error)
            return self.records
        if outcome.operation == Operation.LOAD:
            return self.replace_all(outcome.records)
        if outcome.operation == Operation.CREATE:
            assert outcome.record is not None  # noqa: S101
            return self.apply_create(outcome.record)
        if outcome.operation == Operation.UPDATE:
            assert outcome.record is not None  # noqa: S101
            return self.apply_update(outcome.record)
        assert outcome.record_id is not None  # noqa: S101
        return self.apply_delete(outcome.record_id)
