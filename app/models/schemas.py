from pydantic import BaseModel, Field, EmailStr, computed_field, field_validator
from typing import Dict, List, Optional
from datetime import datetime, timezone

# User schemas
class UserBase(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    university: Optional[str] = None
    email: Optional[EmailStr] = None

class UserCreate(UserBase):
    pass

class UserUpdate(UserBase):
    """Partial update: fields left as None keep their stored value."""
    pass

class UserResponse(UserBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Profile schemas
class ProfileBase(BaseModel):
    bio: Optional[str] = None
    major: Optional[str] = None
    year: Optional[str] = None
    location: Optional[str] = None
    career_goals: Optional[str] = None
    availability: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    portfolio: Optional[str] = None
    career: Optional[str] = None
    career_experience: Optional[str] = None
    research_publications: Optional[str] = None
    awards: Optional[str] = None

class ProfileCreate(ProfileBase):
    user_id: int

class ProfileUpdate(ProfileBase):
    pass

class ProfileResponse(ProfileBase):
    id: int
    user_id: int

    class Config:
        from_attributes = True

# Language schemas
class UserLanguageCreate(BaseModel):
    user_id: int
    language_name: str = Field(..., min_length=1, max_length=100)
    proficiency_level: Optional[str] = None

class UserLanguageResponse(BaseModel):
    id: int
    user_id: int
    language_name: str
    proficiency_level: Optional[str] = None

    class Config:
        from_attributes = True

# Match schemas
class MatchCreate(BaseModel):
    user1_id: int
    user2_id: int

class MatchResponse(BaseModel):
    id: int
    user1_id: int
    user2_id: int
    matched_at: Optional[datetime] = None

    class Config:
        from_attributes = True

# Message schemas
class MatchRef(BaseModel):
    match_id: Optional[int] = Field(None, alias="matchId")

    class Config:
        populate_by_name = True

class SenderRef(BaseModel):
    user_id: Optional[int] = Field(None, alias="userId")

    class Config:
        populate_by_name = True

class MessageCreate(BaseModel):
    """
    Body of a send request.

    Accepts flat ids (snake_case or camelCase) as well as the older nested
    shape ``{"match": {"matchId": 1}, "sender": {"userId": 2}, "messageContent": "..."}``.
    Everything is optional here so the service can report which field is
    missing with its own error messages.
    """
    match_id: Optional[int] = Field(None, alias="matchId")
    sender_id: Optional[int] = Field(None, alias="senderId")
    content: Optional[str] = Field(None, alias="messageContent")
    match: Optional[MatchRef] = None
    sender: Optional[SenderRef] = None

    class Config:
        populate_by_name = True

    def resolved_match_id(self) -> Optional[int]:
        if self.match_id is not None:
            return self.match_id
        return self.match.match_id if self.match else None

    def resolved_sender_id(self) -> Optional[int]:
        if self.sender_id is not None:
            return self.sender_id
        return self.sender.user_id if self.sender else None

class MessageResponse(BaseModel):
    id: int
    match_id: int
    sender_id: int
    content: str
    sent_at: datetime
    is_read: bool

    class Config:
        from_attributes = True

    @field_validator("sent_at")
    @classmethod
    def sent_at_as_utc(cls, value: datetime) -> datetime:
        # SQLite drops the offset; stored values are always UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    # camelCase copies read by the older web and mobile clients
    @computed_field(alias="messageId")
    @property
    def message_id(self) -> int:
        return self.id

    @computed_field(alias="messageContent")
    @property
    def message_content(self) -> str:
        return self.content

    @computed_field(alias="sentAt")
    @property
    def sent_at_camel(self) -> datetime:
        return self.sent_at

    @computed_field(alias="isRead")
    @property
    def is_read_camel(self) -> bool:
        return self.is_read

    @computed_field(alias="match")
    @property
    def match_ref(self) -> Dict[str, int]:
        return {"matchId": self.match_id}

    @computed_field(alias="sender")
    @property
    def sender_ref(self) -> Dict[str, int]:
        return {"userId": self.sender_id}

class UnreadCountResponse(BaseModel):
    match_id: int
    unread_count: int
