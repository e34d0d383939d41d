"""Album model: a named, ordered collection of unique photos."""

from __future__ import annotations

from photo_album.model.errors import InvalidArgumentError
from photo_album.model.photo import Photo


class Album:
    """Named list of photos in insertion order, no duplicates by path."""

    def __init__(self, name: str):
        if name is None or not name.strip():
            raise InvalidArgumentError("Album name cannot be empty")
        self._name = name.strip()
        self._photos: list[Photo] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def photos(self) -> list[Photo]:
        """Photos in insertion order (a copy; mutate through the album)."""
        return list(self._photos)

    def add_photo(self, photo: Photo | None) -> bool:
        if photo is None or photo in self._photos:
            return False
        self._photos.append(photo)
        return True

    def remove_photo(self, photo: Photo | None) -> bool:
        if photo is None or photo not in self._photos:
            return False
        self._photos.remove(photo)
        return True

    def contains_photo(self, photo: Photo | None) -> bool:
        return photo is not None and photo in self._photos

    def photo_count(self) -> int:
        return len(self._photos)

    def find_photo(self, file_path: str) -> Photo | None:
        for photo in self._photos:
            if photo.file_path == file_path:
                return photo
        return None

    def matches_name(self, name: str | None) -> bool:
        """Case-insensitive name comparison used for album lookups."""
        return name is not None and self._name.lower() == name.strip().lower()

    def __contains__(self, photo: object) -> bool:
        return photo in self._photos

    def __len__(self) -> int:
        return len(self._photos)

    def __iter__(self):
        return iter(list(self._photos))

    def __str__(self) -> str:
        return f"{self._name} ({len(self._photos)} photos)"

    def __repr__(self) -> str:
        return f"Album(name={self._name!r}, photos={len(self._photos)})"
