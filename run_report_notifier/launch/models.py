"""Pydantic models for launch-tracking service API responses."""

from collections.abc import Sequence

from pydantic import BaseModel, Field


class UserInfo(BaseModel):
    """The account the API key belongs to."""

    user_id: str | None = Field(default=None, alias="userId")
    full_name: str = Field(..., alias="fullName")


class Launch(BaseModel):
    """A launch (one tracked test run)."""

    id: int
    name: str | None = None
    number: int | None = None


class LaunchPage(BaseModel):
    """A page of launches for a project."""

    content: Sequence[Launch]
