"""Canonical data contracts for saved locations and list notices."""
from __future__ import annotations

from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LocationRecord(BaseModel):
    """A saved location. Identity is the exact, case-sensitive name."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("location name must not be empty")
        return value


class LocationRow(BaseModel):
    """One row of the backend's location listing."""

    model_config = ConfigDict(extra="ignore")

    location_name: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    def to_record(self) -> LocationRecord:
        return LocationRecord(name=self.location_name, latitude=self.latitude, longitude=self.longitude)


class LocationListPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool = True
    locations: List[LocationRow] = Field(default_factory=list)


class MoveIntent(str, Enum):
    UP = "up"
    DOWN = "down"
    TOP = "top"
    BOTTOM = "bottom"


class Notice(BaseModel):
    """User-facing, non-blocking message (the client showed these as toasts)."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    level: Literal["info", "error"]
    message: str
    operation: Literal["load", "commit", "add", "delete", "health"]
