"""User record model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Address(BaseModel):
    """Postal address group of a user.

    Only ``street`` and ``city`` are edited; other keys the service sends
    (``suite``, ``zipcode``, ``geo``) are kept as extras.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    street: str = ""
    city: str = ""


class Company(BaseModel):
    """Employer group of a user."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str = ""


class User(BaseModel):
    """One user record as the service represents it.

    ``id`` is assigned by the service and is ``None`` for a record that
    has not been created yet.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int | None = None
    name: str = ""
    email: str = ""
    phone: str = ""
    username: str = ""
    website: str = ""
    address: Address = Field(default_factory=Address)
    company: Company = Field(default_factory=Company)

    @field_validator("name", "email", "phone", "username", "website", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("address", "company", mode="before")
    @classmethod
    def _none_as_empty_group(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the service, extras included and ``id`` omitted when unset."""
        return self.model_dump(mode="json", exclude={"id"} if self.id is None else None)
