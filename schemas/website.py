from datetime import datetime
from typing import Annotated, List, Optional

from pydantic import BaseModel, PlainSerializer

from services.about import SectionKind
from services.timeconv import to_iso

# Naive UTC column -> "2025-03-01T10:30:00+00:00"
UtcDateTime = Annotated[datetime, PlainSerializer(to_iso, return_type=str)]


# 1. Events page / API
class EventSchema(BaseModel):
    id: int
    title: str
    description: str
    event_date: UtcDateTime
    location: Optional[str] = None
    registration_link: Optional[str] = None
    registration_open_date: Optional[UtcDateTime] = None
    registration_close_date: Optional[UtcDateTime] = None
    registration_state: Optional[str] = None  # upcoming / open / closed
    created_at: UtcDateTime

    class Config:
        from_attributes = True


# 2. Resources
class ResourceSchema(BaseModel):
    id: int
    title: str
    file_type: Optional[str] = None
    file_url: str
    created_at: UtcDateTime

    class Config:
        from_attributes = True


# 3. Gallery
class GalleryImageSchema(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    image_url: str
    created_at: UtcDateTime

    class Config:
        from_attributes = True


# 4. Team
class TeamMemberSchema(BaseModel):
    id: int
    name: str
    role: str
    contact: Optional[str] = None
    photo_url: Optional[str] = None

    class Config:
        from_attributes = True


# 5. About sections (already parsed into their variant)
class ObjectiveCardSchema(BaseModel):
    title: str
    body: str

    class Config:
        from_attributes = True


class RuleGroupSchema(BaseModel):
    title: str
    items: List[str]
    flagged: bool
    as_list: bool

    class Config:
        from_attributes = True


class AboutSectionSchema(BaseModel):
    id: Optional[int] = None
    section: str
    title: str
    kind: SectionKind
    text: str
    items: List[str] = []
    cards: List[ObjectiveCardSchema] = []
    groups: List[RuleGroupSchema] = []

    class Config:
        from_attributes = True
