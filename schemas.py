# schemas.py (Pydantic v2)
from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime


# ---------- Trips ----------
class TripBase(BaseModel):
    destination: str = Field(min_length=4)
    starts_at: datetime
    ends_at: datetime

class TripWrite(TripBase):
    owner_name: str
    owner_email: EmailStr
    emails_to_invite: List[EmailStr]

class TripUpdate(TripBase):
    pass

class TripRead(BaseModel):
    id: UUID
    destination: str
    starts_at: datetime
    ends_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------- Participants ----------
class ParticipantRead(BaseModel):
    id: UUID
    name: Optional[str] = None
    email: str
    is_owner: bool
    is_confirmed: bool

    model_config = ConfigDict(from_attributes=True)

class ParticipantDetail(ParticipantRead):
    trip_id: UUID

class ParticipantWrite(BaseModel):
    """Owner-side add: name is known up front."""
    name: str = Field(min_length=2)
    email: EmailStr

class ParticipantConfirm(BaseModel):
    name: str = Field(min_length=2, description="Full name of the participant")
    email: EmailStr

class InviteWrite(BaseModel):
    email: EmailStr


# ---------- Activities ----------
class ActivityWrite(BaseModel):
    title: str = Field(min_length=4)
    occurs_at: datetime

class ActivityRead(BaseModel):
    id: UUID
    title: str
    occurs_at: datetime

    model_config = ConfigDict(from_attributes=True)

class ActivityDay(BaseModel):
    """Activities of one calendar day of the trip"""
    date: date
    activities: List[ActivityRead] = []

class ActivityDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    activity_id: UUID = Field(alias="activityId")


# ---------- Links ----------
class LinkWrite(BaseModel):
    title: str = Field(min_length=4)
    url: HttpUrl

class LinkRead(BaseModel):
    id: UUID
    title: str
    url: str

    model_config = ConfigDict(from_attributes=True)

class LinkDelete(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    link_id: UUID = Field(alias="linkId")
