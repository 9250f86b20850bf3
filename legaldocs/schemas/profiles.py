"""Schemas for saved party profiles.

Profiles are persisted as a JSON array of camelCase objects. Records written
by older versions may lack fields, so every field except ``id`` has a default.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


def utc_now_iso() -> str:
    """ISO-8601 timestamp in UTC with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ProfileBaseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class ProfileType(str, Enum):
    INDIVIDUAL = "individual"
    COMPANY = "company"


class ProfileData(ProfileBaseModel):
    """The party fields a profile can pre-fill."""
    name: str = ""
    id_number: str = ""
    nationality: str = ""
    address: str = ""
    phone: str = ""
    email: str = ""
    whatsapp: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _none_to_blank(cls, value: Any) -> Any:
        return "" if value is None else value


class SavedProfile(ProfileBaseModel):
    """A reusable, user-authored party identity."""
    id: str
    type: ProfileType = ProfileType.INDIVIDUAL
    label: str = ""
    is_default: bool = False
    is_favorite: bool = False
    created_at: str = Field(default_factory=utc_now_iso)
    updated_at: str = Field(default_factory=utc_now_iso)
    data: ProfileData = Field(default_factory=ProfileData)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: Any) -> Any:
        if isinstance(value, str) and value.lower() == ProfileType.COMPANY.value:
            return ProfileType.COMPANY
        if isinstance(value, ProfileType):
            return value
        return ProfileType.INDIVIDUAL

    @field_validator("data", mode="before")
    @classmethod
    def _data_default(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_storage(self) -> dict:
        """Serialize in the persisted camelCase layout."""
        return self.model_dump(mode="json", by_alias=True)


class ProfileCreate(ProfileBaseModel):
    """Payload for creating a profile."""
    type: ProfileType = ProfileType.INDIVIDUAL
    label: str = ""
    data: ProfileData = Field(default_factory=ProfileData)


class ProfileDataPatch(ProfileBaseModel):
    """Partial update of profile data, unset fields are left untouched."""
    name: Optional[str] = None
    id_number: Optional[str] = None
    nationality: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    whatsapp: Optional[str] = None


class ProfileUpdate(ProfileBaseModel):
    """Partial update of a profile.

    Default and favorite flags are not patchable; they change only through
    the dedicated store operations that keep the default invariant.
    """
    type: Optional[ProfileType] = None
    label: Optional[str] = None
    data: Optional[ProfileDataPatch] = None
