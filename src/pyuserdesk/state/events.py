"""Service outcomes.

Every completed service call is turned into one of these values before
it reaches the store. Only the state layer interprets them.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, model_validator

from pyuserdesk.models.user import User


class Operation(StrEnum):
    LOAD = "load"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ServiceOutcome(BaseModel):
    """Result of one service call: the authoritative data or a failure cause."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    operation: Operation
    records: tuple[User, ...] = ()
    record: User | None = None
    record_id: int | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @model_validator(mode="after")
    def _check_shape(self) -> ServiceOutcome:
        if not self.ok:
            return self
        if self.operation in (Operation.CREATE, Operation.UPDATE):
            if self.record is None or self.record.id is None:
                raise ValueError(f"successful {self.operation} needs a record with an id")
        if self.operation == Operation.DELETE and self.record_id is None:
            raise ValueError("successful delete needs a record_id")
        return self

    @classmethod
    def loaded(cls, records: list[User] | tuple[User, ...]) -> ServiceOutcome:
        return cls(operation=Operation.LOAD, records=tuple(records))

    @classmethod
    def created(cls, record: User) -> ServiceOutcome:
        return cls(operation=Operation.CREATE, record=record, record_id=record.id)

    @classmethod
    def updated(cls, record: User) -> ServiceOutcome:
        return cls(operation=Operation.UPDATE, record=record, record_id=record.id)

    @classmethod
    def deleted(cls, record_id: int) -> ServiceOutcome:
        return cls(operation=Operation.DELETE, record_id=record_id)

    @classmethod
    def failed(cls, operation: Operation, error: str, *, record_id: int | None = None) -> ServiceOutcome:
        return cls(operation=operation, error=error or "unknown error", record_id=record_id)
