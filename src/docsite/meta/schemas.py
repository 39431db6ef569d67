"""Pydantic schemas for external metadata responses."""

from pydantic import BaseModel, Field


class ExternalMeta(BaseModel):
    """Head metadata of an external web page."""

    title: str | None = None
    description: str | None = None
    icon: str | None = Field(default=None, description="Absolute icon URL")


class VideoMeta(BaseModel):
    """Normalized video metadata."""

    pic: str | None = Field(default=None, description="Cover image URL")
    duration: int | float | None = Field(default=None, description="Duration in seconds")
