"""User model: a username, an opaque password, and owned albums."""

from __future__ import annotations

import os
from pathlib import Path

from photo_album.model.album import Album
from photo_album.model.errors import (
    DuplicateError,
    InvalidArgumentError,
    NotFoundError,
)
from photo_album.model.photo import Photo

ADMIN_USERNAME = "admin"


def is_admin_name(username: str | None) -> bool:
    """True if ``username`` is the reserved admin identity (any case)."""
    return username is not None and username.strip().lower() == ADMIN_USERNAME


class User:
    """A library user and their albums.

    Album names are unique per user, compared case-insensitively. Photos
    are interned per user: importing a path already held by one of the
    user's albums returns that same Photo object.
    """

    def __init__(self, username: str, password: str | None = None):
        if username is None or not username.strip():
            raise InvalidArgumentError("Username cannot be empty")
        self._username = username.strip()
        self._password = password
        self._albums: list[Album] = []

    @property
    def username(self) -> str:
        return self._username

    @property
    def password(self) -> str | None:
        return self._password

    @property
    def albums(self) -> list[Album]:
        return list(self._albums)

    # --- Album management ---

    def add_album(self, album: Album | None) -> bool:
        if album is None or self.has_album(album.name):
            return False
        self._albums.append(album)
        return True

    def create_album(self, name: str) -> Album:
        """Create and add an empty album. Raises DuplicateError on a name clash."""
        album = Album(name)
        if not self.add_album(album):
            raise DuplicateError(f"Album already exists: {album.name}")
        return album

    def remove_album(self, name: str) -> bool:
        before = len(self._albums)
        self._albums = [a for a in self._albums if not a.matches_name(name)]
        return len(self._albums) != before

    def find_album(self, name: str | None) -> Album | None:
        for album in self._albums:
            if album.matches_name(name):
                return album
        return None

    def get_album(self, name: str) -> Album:
        album = self.find_album(name)
        if album is None:
            raise NotFoundError(f"Album not found: {name}")
        return album

    def has_album(self, name: str | None) -> bool:
        return self.find_album(name) is not None

    def rename_album(self, old_name: str, new_name: str | None) -> bool:
        """Rename an album, keeping the same photo objects in the same order.

        Fails (returns False) when ``old_name`` is missing, ``new_name`` is
        blank, or an album called ``new_name`` already exists. The renamed
        album is appended after the user's other albums.
        """
        old_album = self.find_album(old_name)
        if old_album is None or new_name is None or not new_name.strip():
            return False
        if self.has_album(new_name):
            return False

        renamed = Album(new_name)
        for photo in old_album.photos:
            renamed.add_photo(photo)

        self.remove_album(old_name)
        return self.add_album(renamed)

    # --- Photos across albums ---

    def all_photos(self) -> list[Photo]:
        """Every photo across all albums, deduplicated, in first-seen order."""
        seen: set[Photo] = set()
        result: list[Photo] = []
        for album in self._albums:
            for photo in album.photos:
                if photo not in seen:
                    seen.add(photo)
                    result.append(photo)
        return result

    def find_photo(self, file_path: str | Path) -> Photo | None:
        file_path = os.fspath(file_path)
        for album in self._albums:
            photo = album.find_photo(file_path)
            if photo is not None:
                return photo
        return None

    def import_photo(self, file_path: str | Path) -> Photo:
        """Return the user's Photo for ``file_path``, creating it if new."""
        existing = self.find_photo(file_path)
        if existing is not None:
            return existing
        return Photo(file_path)

    def copy_photo(self, photo: Photo, target_album: str) -> bool:
        """Add ``photo`` to another album. The same object is shared."""
        target = self.get_album(target_album)
        return target.add_photo(photo)

    def move_photo(self, photo: Photo, source_album: str, target_album: str) -> bool:
        """Move ``photo`` between albums. False if the target already has it."""
        source = self.get_album(source_album)
        target = self.get_album(target_album)
        if source is target or not source.contains_photo(photo):
            return False
        if not target.add_photo(photo):
            return False
        source.remove_photo(photo)
        return True

    def __str__(self) -> str:
        return self._username

    def __repr__(self) -> str:
        return f"User(username={self._username!r}, albums={len(self._albums)})"
