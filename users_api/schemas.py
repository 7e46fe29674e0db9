"""Request/response models used to parse bodies and serialize users."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from users_api.domain.users import ActiveStatus


class SettingPayload(BaseModel):
    name: str = Field(..., max_length=255)
    value: str = Field(default="", max_length=255)


class UserUpdateRequest(BaseModel):
    name: str = Field(..., max_length=255)
    email: str = Field(..., max_length=255)
    active_status: ActiveStatus


class UserCreateRequest(UserUpdateRequest):
    settings: List[SettingPayload] = Field(default_factory=list)

    @field_validator("settings", mode="before")
    @classmethod
    def _normalise_settings(cls, value: object) -> object:
        # a single {name, value} object is accepted as a one-item list
        if value is None or value == {}:
            return []
        if isinstance(value, dict):
            return [value]
        return value


class SettingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    value: str


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    active_status: str
    created_at: datetime
    updated_at: datetime
    settings: List[SettingResponse] = Field(default_factory=list)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str
    message: str
    details: Optional[list] = None
