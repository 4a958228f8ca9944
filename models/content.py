from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey

from database import Base
from services.timeconv import utcnow


# 1. EVENTS (workshops, hackathons, talks)
class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    event_date = Column(DateTime, nullable=False, index=True)
    location = Column(String(200), nullable=True)
    registration_link = Column(String(500), nullable=True)
    registration_open_date = Column(DateTime, nullable=True)
    registration_close_date = Column(DateTime, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


# 2. RESOURCES (storage bucket: "files")
class ClubFile(Base):
    __tablename__ = "files"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    file_type = Column(String(100), nullable=True)  # MIME type jo upload ke time aaya
    file_url = Column(String(500), nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


# 3. GALLERY (storage bucket: "gallery")
class GalleryImage(Base):
    __tablename__ = "gallery"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=False)
    uploaded_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


# 4. TEAM (mentors + student coordinators)
class Coordinator(Base):
    __tablename__ = "coordinators"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    role = Column(String(100), nullable=False)
    contact = Column(String(50), nullable=True)
    photo_url = Column(String(500), nullable=True)  # Plain URL, upload nahi hota
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


# 5. ABOUT PAGE SECTIONS (vision / mission / objectives / rules ...)
class ClubInfo(Base):
    __tablename__ = "club_info"

    id = Column(Integer, primary_key=True, index=True)
    section = Column(String(50), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
