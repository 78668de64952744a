"""
Data models for Notesync.

Notes mirror the server's JSON shape. Timestamps are kept as the
server sends them and never parsed.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class Note(BaseModel):
    """A note (todo item) as acknowledged by the server."""

    # Servers may send numeric ids; keep them as opaque strings
    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    id: str
    title: str = ""
    content: str = ""
    completed: bool = False
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class CreateNoteRequest(BaseModel):
    """Body for POST /notes. `completed` is left to the server when omitted."""

    title: str
    content: str
    completed: bool | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)


class UpdateNoteRequest(BaseModel):
    """Body for PUT /notes/{id}. Only the fields that were set are sent."""

    title: str | None = None
    content: str | None = None
    completed: bool | None = None

    def to_payload(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ApiResponse(BaseModel, Generic[T]):
    """Uniform result of every transport call."""

    success: bool
    data: T | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: T | None = None) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str) -> "ApiResponse[T]":
        return cls(success=False, error=error)
