"""Database schema for the library file.

The whole library lives in one SQLite file. Photos are stored once per
user and album entries point at them, so a photo shared by two albums is
still shared after loading.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import declarative_base, relationship

CURRENT_SCHEMA_VERSION = 1

Base = declarative_base()


class SchemaVersionRow(Base):
    __tablename__ = "schema_version"

    version = Column(Integer, primary_key=True)
    applied_date = Column(String(64))


class UserRow(Base):
    """A user; ``position`` keeps roster order."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(255), nullable=False, unique=True)
    password = Column(Text)
    position = Column(Integer, nullable=False)

    albums = relationship(
        "AlbumRow", back_populates="user",
        cascade="all, delete-orphan", order_by="AlbumRow.position",
    )
    photos = relationship(
        "PhotoRow", back_populates="user",
        cascade="all, delete-orphan", order_by="PhotoRow.id",
    )


class PhotoRow(Base):
    """A photo owned by one user, unique by file path within that user."""
    __tablename__ = "photos"
    __table_args__ = (UniqueConstraint("user_id", "file_path"),)

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    file_path = Column(String(4096), nullable=False)
    date_taken = Column(DateTime, nullable=False)
    caption = Column(Text)

    user = relationship("UserRow", back_populates="photos")
    tags = relationship(
        "PhotoTagRow", back_populates="photo",
        cascade="all, delete-orphan", order_by="PhotoTagRow.id",
    )


class PhotoTagRow(Base):
    __tablename__ = "photo_tags"
    __table_args__ = (UniqueConstraint("photo_id", "name", "value"),)

    id = Column(Integer, primary_key=True)
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False, index=True)
    name = Column(String(255), nullable=False)
    value = Column(String(1024), nullable=False)

    photo = relationship("PhotoRow", back_populates="tags")


class AlbumRow(Base):
    __tablename__ = "albums"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(1024), nullable=False)
    position = Column(Integer, nullable=False)

    user = relationship("UserRow", back_populates="albums")
    entries = relationship(
        "AlbumEntryRow", back_populates="album",
        cascade="all, delete-orphan", order_by="AlbumEntryRow.position",
    )


class AlbumEntryRow(Base):
    """One slot of an album, pointing at a shared photo row."""
    __tablename__ = "album_entries"
    __table_args__ = (UniqueConstraint("album_id", "photo_id"),)

    id = Column(Integer, primary_key=True)
    album_id = Column(Integer, ForeignKey("albums.id"), nullable=False, index=True)
    photo_id = Column(Integer, ForeignKey("photos.id"), nullable=False, index=True)
    position = Column(Integer, nullable=False)

    album = relationship("AlbumRow", back_populates="entries")
    photo = relationship("PhotoRow")


class TagTypeRow(Base):
    """A custom tag type from the tag-type registry."""
    __tablename__ = "tag_types"

    name = Column(String(255), primary_key=True)
