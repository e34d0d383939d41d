"""Load and save the whole library as a single versioned file."""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Mapping

from sqlalchemy import create_engine, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from photo_album.model.album import Album
from photo_album.model.errors import PersistenceError, PhotoAlbumError
from photo_album.model.photo import Photo
from photo_album.model.tag import Tag
from photo_album.model.user import User
from photo_album.storage.schema import (
    CURRENT_SCHEMA_VERSION,
    AlbumEntryRow,
    AlbumRow,
    Base,
    PhotoRow,
    PhotoTagRow,
    SchemaVersionRow,
    TagTypeRow,
    UserRow,
)

logger = logging.getLogger(__name__)


@dataclass
class LibrarySnapshot:
    """Everything stored in a library file."""

    users: dict[str, User] = field(default_factory=dict)
    custom_tag_types: set[str] = field(default_factory=set)


class LibraryStore:
    """Reads and writes the library file.

    Saving writes a complete new database next to the target and then
    replaces the target in one step, so readers never see a partial file.
    """

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    # --- Save ---

    def save(
        self,
        users: Mapping[str, User],
        custom_tag_types: Iterable[str] = (),
    ) -> None:
        """Write the library, replacing any existing file atomically."""
        directory = self._path.resolve().parent
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                suffix=".tmp", dir=directory, prefix=f".{self._path.name}."
            )
            os.close(fd)
        except OSError as e:
            raise PersistenceError(f"Cannot write library to {self._path}: {e}") from e

        try:
            self._write_database(tmp_path, users, custom_tag_types)
            os.replace(tmp_path, self._path)
        except Exception as e:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            if isinstance(e, (SQLAlchemyError, OSError)):
                raise PersistenceError(
                    f"Failed to save library to {self._path}: {e}"
                ) from e
            raise

        logger.debug(f"Saved {len(users)} users to {self._path}")

    def _write_database(
        self,
        db_path: str,
        users: Mapping[str, User],
        custom_tag_types: Iterable[str],
    ) -> None:
        engine = create_engine(f"sqlite:///{db_path}")
        try:
            Base.metadata.create_all(engine)
            with Session(engine) as session:
                session.add(SchemaVersionRow(
                    version=CURRENT_SCHEMA_VERSION,
                    applied_date=datetime.now(timezone.utc).isoformat(),
                ))
                for position, user in enumerate(users.values()):
                    session.add(self._user_to_row(user, position))
                for name in sorted(set(custom_tag_types)):
                    session.add(TagTypeRow(name=name))
                session.commit()
        finally:
            engine.dispose()

    def _user_to_row(self, user: User, position: int) -> UserRow:
        user_row = UserRow(
            username=user.username, password=user.password, position=position,
        )
        photo_rows: dict[str, PhotoRow] = {}
        for photo in user.all_photos():
            photo_row = PhotoRow(
                file_path=photo.file_path,
                date_taken=photo.date_taken,
                caption=photo.caption,
                tags=[
                    PhotoTagRow(name=tag.name, value=tag.value)
                    for tag in photo.sorted_tags()
                ],
            )
            photo_rows[photo.file_path] = photo_row
            user_row.photos.append(photo_row)

        for album_pos, album in enumerate(user.albums):
            album_row = AlbumRow(name=album.name, position=album_pos)
            for entry_pos, photo in enumerate(album.photos):
                album_row.entries.append(AlbumEntryRow(
                    photo=photo_rows[photo.file_path], position=entry_pos,
                ))
            user_row.albums.append(album_row)
        return user_row

    # --- Load ---

    def load(self) -> LibrarySnapshot:
        """Read the library file.

        Raises PersistenceError if the file is missing, is not a library
        database, or holds data that violates the model's rules.
        """
        if not self.exists():
            raise PersistenceError(f"Library file not found: {self._path}")

        engine = create_engine(f"sqlite:///{self._path}")
        try:
            with Session(engine) as session:
                self._check_version(session)
                snapshot = LibrarySnapshot()
                user_rows = session.scalars(
                    select(UserRow).order_by(UserRow.position)
                ).all()
                for user_row in user_rows:
                    user = self._row_to_user(user_row)
                    snapshot.users[user.username] = user
                snapshot.custom_tag_types = set(
                    session.scalars(select(TagTypeRow.name)).all()
                )
        except SQLAlchemyError as e:
            raise PersistenceError(f"Malformed library file {self._path}: {e}") from e
        except PersistenceError:
            raise
        except (
            PhotoAlbumError, KeyError, ValueError, TypeError, AttributeError,
        ) as e:
            # Bad column values, e.g. an unparseable date_taken.
            raise PersistenceError(f"Invalid data in library file {self._path}: {e}") from e
        finally:
            engine.dispose()

        logger.debug(f"Loaded {len(snapshot.users)} users from {self._path}")
        return snapshot

    def _check_version(self, session: Session) -> None:
        version = session.scalar(select(func.max(SchemaVersionRow.version)))
        if version is None:
            raise PersistenceError(f"Library file has no schema version: {self._path}")
        if version > CURRENT_SCHEMA_VERSION:
            raise PersistenceError(
                f"Library file version {version} is newer than supported "
                f"version {CURRENT_SCHEMA_VERSION}"
            )

    def _row_to_user(self, user_row: UserRow) -> User:
        user = User(user_row.username, user_row.password)
        photos: dict[int, Photo] = {}
        for photo_row in user_row.photos:
            photos[photo_row.id] = Photo.from_record(
                file_path=photo_row.file_path,
                date_taken=photo_row.date_taken,
                caption=photo_row.caption,
                tags=[Tag(t.name, t.value) for t in photo_row.tags],
            )
        for album_row in user_row.albums:
            album = Album(album_row.name)
            for entry in album_row.entries:
                album.add_photo(photos[entry.photo_id])
            user.add_album(album)
        return user
