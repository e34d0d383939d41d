"""Search engine evaluating tag and date predicates over a user's photos."""

from __future__ import annotations

from typing import Iterable

from photo_album.model.album import Album
from photo_album.model.errors import DuplicateError, InvalidArgumentError
from photo_album.model.photo import Photo
from photo_album.model.user import User
from photo_album.query.parser import Combinator, Query


class SearchEngine:
    """Run queries against a user's library and save results as albums."""

    def run(self, user: User, query: Query) -> list[Photo]:
        """Return the photos matching ``query``, in candidate order.

        Candidates are all of the user's photos, deduplicated, in the order
        their albums first list them. The result keeps that order for
        every combinator, including OR.
        """
        candidates = user.all_photos()
        return [p for p in candidates if self._matches(p, query)]

    def _matches(self, photo: Photo, query: Query) -> bool:
        in_first = query.tag1 is None or photo.has_tag(query.tag1)

        if query.tag2 is None or query.combinator is Combinator.NONE:
            matched = in_first
        else:
            in_second = photo.has_tag(query.tag2)
            if query.combinator is Combinator.AND:
                matched = in_first and in_second
            else:
                matched = in_first or in_second

        if not matched:
            return False
        if query.has_date_range:
            day = photo.date_as_local_date()
            return query.start_date <= day <= query.end_date
        return True

    def save_as(self, user: User, name: str, photos: Iterable[Photo]) -> Album:
        """Create a new album on ``user`` holding ``photos`` in order."""
        if name is None or not name.strip():
            raise InvalidArgumentError("Album name cannot be empty")
        if user.has_album(name):
            raise DuplicateError(f"Album already exists: {name.strip()}")
        album = Album(name)
        for photo in photos:
            album.add_photo(photo)
        user.add_album(album)
        return album
