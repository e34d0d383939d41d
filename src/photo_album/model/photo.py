"""Photo model: an image file reference with caption, date, and tags."""

from __future__ import annotations

import os
from datetime import date, datetime
from pathlib import Path
from typing import Iterable

from photo_album.model.errors import InvalidArgumentError
from photo_album.model.tag import LOCATION, Tag

DISPLAY_DATE_FORMAT = "%a %b %d %H:%M:%S %Y"


def _modification_time(path: str) -> datetime:
    """Last-modified time of a file as local time, whole seconds only."""
    mtime = os.stat(path).st_mtime
    return datetime.fromtimestamp(mtime).replace(microsecond=0)


class Photo:
    """A photo identified by its file path.

    Two photos are equal when their ``file_path`` strings are equal, so the
    same object can be shared by several albums and looked up by path.
    Strings are kept exactly as given. A ``Path`` is taken as its string
    form, which pathlib has already normalized (``Path("./a.jpg")`` is
    ``"a.jpg"``).
    """

    def __init__(self, file_path: str | Path):
        file_path = os.fspath(file_path) if file_path is not None else ""
        if not file_path:
            raise InvalidArgumentError("Photo file path cannot be empty")
        if not os.path.isfile(file_path):
            raise InvalidArgumentError(f"File does not exist: {file_path}")
        self._file_path = file_path
        self._date_taken = _modification_time(file_path)
        self._caption: str | None = None
        self._tags: set[Tag] = set()

    @classmethod
    def from_record(
        cls,
        file_path: str,
        date_taken: datetime,
        caption: str | None = None,
        tags: Iterable[Tag] = (),
    ) -> Photo:
        """Rebuild a stored photo without touching the filesystem."""
        if not file_path:
            raise InvalidArgumentError("Photo file path cannot be empty")
        photo = cls.__new__(cls)
        photo._file_path = file_path
        photo._date_taken = date_taken.replace(microsecond=0)
        photo._caption = caption
        photo._tags = set()
        for tag in tags:
            photo.add_tag(tag.name, tag.value)
        return photo

    @property
    def file_path(self) -> str:
        return self._file_path

    @property
    def file_name(self) -> str:
        return Path(self._file_path).name

    @property
    def date_taken(self) -> datetime:
        return self._date_taken

    @property
    def caption(self) -> str | None:
        return self._caption

    @caption.setter
    def caption(self, text: str | None) -> None:
        self._caption = text

    def set_caption(self, text: str | None) -> None:
        self._caption = text

    @property
    def display_caption(self) -> str:
        """Caption for display; None and empty read the same."""
        return self._caption or ""

    @property
    def tags(self) -> frozenset[Tag]:
        return frozenset(self._tags)

    def sorted_tags(self) -> list[Tag]:
        return sorted(self._tags, key=lambda t: (t.name, t.value))

    def has_tag(self, tag: Tag) -> bool:
        return tag in self._tags

    def add_tag(self, name: str, value: str) -> bool:
        """Add a tag. Returns whether the tag set changed.

        Location is single-valued: adding one replaces any existing
        location tag.
        """
        tag = Tag(name, value)
        if tag in self._tags:
            return False
        if tag.name == LOCATION:
            self._tags = {t for t in self._tags if t.name != LOCATION}
        self._tags.add(tag)
        return True

    def remove_tag(self, name: str, value: str) -> bool:
        tag = Tag(name, value)
        if tag not in self._tags:
            return False
        self._tags.discard(tag)
        return True

    def formatted_date(self) -> str:
        return self._date_taken.strftime(DISPLAY_DATE_FORMAT)

    def date_as_local_date(self) -> date:
        return self._date_taken.date()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Photo):
            return NotImplemented
        return self._file_path == other._file_path

    def __hash__(self) -> int:
        return hash(self._file_path)

    def __str__(self) -> str:
        caption = self._caption if self._caption is not None else "(no caption)"
        return f"{self.file_name} | {caption} | {self.formatted_date()}"

    def __repr__(self) -> str:
        return f"Photo(file_path={self._file_path!r}, tags={len(self._tags)})"
