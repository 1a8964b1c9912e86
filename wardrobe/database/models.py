import uuid
from datetime import datetime

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship

from wardrobe.database.connection import Base


def new_id() -> str:
    return uuid.uuid4().hex


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=False)
    password = Column(String(255), nullable=False)  # Store hashed passwords

    # Relationships
    wardrobe_items = relationship("WardrobeItem", back_populates="owner", cascade="all, delete-orphan")
    events = relationship("Event", back_populates="owner", cascade="all, delete-orphan")


class WardrobeItem(Base):
    __tablename__ = "wardrobe_items"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(20), nullable=False)
    name = Column(String(100), nullable=False)
    color = Column(String(50), nullable=False, default="")
    style = Column(String(50), nullable=False, default="")
    seasons = Column(JSON, nullable=False, default=list)
    occasions = Column(JSON, nullable=False, default=list)
    image = Column(Text, nullable=False, default="")
    image_file_name = Column(String(255), nullable=True)  # Set when the image lives in our store
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    owner = relationship("User", back_populates="wardrobe_items")


class Event(Base):
    __tablename__ = "events"

    id = Column(String(32), primary_key=True, default=new_id)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    date = Column(DateTime, nullable=False, index=True)
    type = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)

    owner = relationship("User", back_populates="events")
