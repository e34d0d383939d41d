"""Error kinds raised by the photo album core."""

from __future__ import annotations


class PhotoAlbumError(Exception):
    """Base class for all photo album errors."""


class InvalidArgumentError(PhotoAlbumError, ValueError):
    """A required value was missing or empty, or an image file is missing."""


class NotFoundError(PhotoAlbumError, KeyError):
    """A lookup by name (album, user) found nothing."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message.
        return str(self.args[0]) if self.args else ""


class DuplicateError(PhotoAlbumError):
    """A uniqueness rule would be violated."""


class InvalidQueryError(PhotoAlbumError, ValueError):
    """Search input could not be parsed."""


class PersistenceError(PhotoAlbumError, OSError):
    """Reading or writing the library file failed."""
