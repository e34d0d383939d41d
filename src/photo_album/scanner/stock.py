"""Build the default ``stock`` user from a directory of images."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from photo_album.model.album import Album
from photo_album.model.errors import PhotoAlbumError
from photo_album.model.user import User

logger = logging.getLogger(__name__)

DEFAULT_STOCK_EXTENSIONS = frozenset({"jpg", "jpeg", "png", "bmp", "gif"})


@dataclass
class ScanResult:
    """Result of a stock directory scan."""

    total_found: int = 0
    added: int = 0
    errors: int = 0
    error_files: list[str] = field(default_factory=list)


class StockSeeder:
    """Turn the images of one directory into a single-album user."""

    def __init__(
        self,
        extensions: Iterable[str] | None = None,
        username: str = "stock",
        password: str | None = "stock",
        album_name: str = "stock",
    ):
        if extensions is None:
            extensions = DEFAULT_STOCK_EXTENSIONS
        self._extensions = {ext.lower().lstrip(".") for ext in extensions}
        self._username = username
        self._password = password
        self._album_name = album_name

    @property
    def username(self) -> str:
        return self._username

    def find_image_files(self, directory: str | Path) -> list[Path]:
        """Image files directly inside ``directory``, sorted by name.

        A missing directory yields no files.
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning(f"Stock directory not found: {directory}")
            return []
        return sorted(
            (
                p for p in directory.iterdir()
                if p.is_file() and p.suffix.lower().lstrip(".") in self._extensions
            ),
            key=lambda p: p.name,
        )

    def build(self, directory: str | Path) -> tuple[User, ScanResult]:
        """Create the stock user with one album of every usable image."""
        image_files = self.find_image_files(directory)
        result = ScanResult(total_found=len(image_files))

        user = User(self._username, self._password)
        album = Album(self._album_name)
        for filepath in image_files:
            try:
                photo = user.import_photo(filepath)
            except (PhotoAlbumError, OSError) as e:
                # Unreadable files are skipped, not fatal.
                logger.warning(f"Skipping stock image {filepath}: {e}")
                result.errors += 1
                result.error_files.append(str(filepath))
                continue
            if album.add_photo(photo):
                result.added += 1

        user.add_album(album)
        logger.info(
            f"Stock scan of {directory}: {result.added} added, "
            f"{result.errors} skipped"
        )
        return user, result
