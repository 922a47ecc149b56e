"""Record Schemas — Pydantic models for RPC payloads and results.

Invariants:
    - Create payloads never carry an id (unknown fields, "id" included, are dropped)
    - BlogCreate/ProjectCreate title and content: stripped, non-empty
    - ProjectCreate.link is an unvalidated string (empty allowed)
    - DeleteRecordRequest.id: non-empty after stripping

Design Decisions:
    - Server re-checks emptiness the client already checks: the API is reachable without the UI
    - field_validator for side-effect-free transforms (strip) — keeps models pure
"""

from pydantic import BaseModel, Field, field_validator


def _strip_required(v: str, field_name: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{field_name} cannot be empty or whitespace")
    return v


class BlogCreate(BaseModel):
    """publish-blog payload."""
    title: str = Field(max_length=500)
    content: str = Field(max_length=100_000)

    @field_validator("title", "content")
    @classmethod
    def strip_required(cls, v: str, info) -> str:
        return _strip_required(v, info.field_name)


class ProjectCreate(BlogCreate):
    """publish-project payload."""
    link: str = Field("", max_length=2000)


class DeleteRecordRequest(BaseModel):
    """delete-* payload."""
    id: str = Field(max_length=200)

    @field_validator("id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        return _strip_required(v, "id")


class ListRequest(BaseModel):
    """list-* payload — takes nothing."""


class BlogRecord(BaseModel):
    id: str
    title: str
    content: str


class ProjectRecord(BaseModel):
    id: str
    title: str
    content: str
    link: str


class LoginRequest(BaseModel):
    """Admin login form."""
    email: str = Field(max_length=320)
    password: str = Field(max_length=1000)
