"""The photo library: every user, loaded from and saved to one file."""

from __future__ import annotations

import logging
from pathlib import Path

from photo_album.config.config import ConfigManager
from photo_album.model.errors import (
    DuplicateError,
    InvalidArgumentError,
    NotFoundError,
    PersistenceError,
)
from photo_album.model.tag import TagTypeRegistry
from photo_album.model.user import User, is_admin_name
from photo_album.scanner.stock import ScanResult, StockSeeder
from photo_album.storage.codec import LibraryStore

logger = logging.getLogger(__name__)

DEFAULT_LIBRARY_PATH = "users.dat"
DEFAULT_STOCK_DIR = "data"


class Library:
    """Holds all users and persists them.

    On construction the library file is loaded if it exists; otherwise the
    stock user is seeded from ``stock_dir`` and the new library is saved
    right away. Pass ``autoload=False`` to start empty without touching
    the disk.
    """

    def __init__(
        self,
        path: str | Path = DEFAULT_LIBRARY_PATH,
        stock_dir: str | Path = DEFAULT_STOCK_DIR,
        seeder: StockSeeder | None = None,
        autoload: bool = True,
    ):
        self._store = LibraryStore(path)
        self._stock_dir = Path(stock_dir)
        self._seeder = seeder or StockSeeder()
        self._users: dict[str, User] = {}
        self._tag_types = TagTypeRegistry()
        self.load_error: PersistenceError | None = None
        if autoload:
            self.open()

    @classmethod
    def from_config(cls, config: ConfigManager, autoload: bool = True) -> Library:
        """Create a library from the ``library`` and ``stock`` config sections."""
        seeder = StockSeeder(
            extensions=config.stock_extensions(),
            username=config.get("stock.username", "stock"),
            password=config.get("stock.password", "stock"),
            album_name=config.get("stock.album", "stock"),
        )
        return cls(
            path=config.resolve_path("library.path") or DEFAULT_LIBRARY_PATH,
            stock_dir=config.resolve_path("stock.directory") or DEFAULT_STOCK_DIR,
            seeder=seeder,
            autoload=autoload,
        )

    @property
    def path(self) -> Path:
        return self._store.path

    @property
    def tag_types(self) -> TagTypeRegistry:
        return self._tag_types

    # --- Lifecycle ---

    def open(self) -> None:
        """Load the library file, or seed stock and save when it is absent."""
        if self._store.exists():
            self.load()
        else:
            logger.info(f"No library at {self.path}; seeding stock user")
            self.seed_stock()
            self.save()

    def load(self) -> bool:
        """Replace the in-memory library with the file's contents.

        On failure the library is left empty, the error is kept in
        ``load_error``, and False is returned.
        """
        try:
            snapshot = self._store.load()
        except PersistenceError as e:
            logger.error(f"Failed to load library: {e}")
            self._users = {}
            self._tag_types = TagTypeRegistry()
            self.load_error = e
            return False
        self._users = snapshot.users
        self._tag_types = TagTypeRegistry(custom_types=snapshot.custom_tag_types)
        self.load_error = None
        return True

    def save(self) -> None:
        """Write every user to the library file. Raises PersistenceError."""
        self._store.save(self._users, self._tag_types.custom_types)

    def close(self) -> None:
        """Save on clean shutdown."""
        self.save()

    def __enter__(self) -> Library:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()

    # --- Stock ---

    def seed_stock(self, directory: str | Path | None = None) -> ScanResult:
        """Add (or replace) the stock user built from ``directory``."""
        user, result = self._seeder.build(directory or self._stock_dir)
        self._users[user.username] = user
        return result

    # --- Users ---

    def get_user(self, username: str) -> User:
        user = self._users.get(username)
        if user is None:
            raise NotFoundError(f"User not found: {username}")
        return user

    def has_user(self, username: str) -> bool:
        return username in self._users

    def all_users(self) -> list[User]:
        return list(self._users.values())

    def add_user(self, user: User) -> None:
        """Add a user and save immediately."""
        if is_admin_name(user.username):
            raise InvalidArgumentError("'admin' is reserved and cannot be stored")
        if user.username in self._users:
            raise DuplicateError(f"User already exists: {user.username}")
        self._users[user.username] = user
        try:
            self.save()
        except PersistenceError:
            del self._users[user.username]
            raise
        logger.info(f"Added user {user.username}")

    def remove_user(self, username: str) -> bool:
        """Remove a user and save. Returns False if there was no such user.

        If the save fails the user is put back in its original place.
        """
        if is_admin_name(username):
            raise InvalidArgumentError("The admin user cannot be removed")
        if username not in self._users:
            return False
        previous = dict(self._users)
        del self._users[username]
        try:
            self.save()
        except PersistenceError:
            self._users = previous
            raise
        logger.info(f"Removed user {username}")
        return True

    def login(self, username: str) -> User | None:
        """Sign in by name.

        Returns None for the admin identity. Unknown names get a new user
        with no password, which is saved right away.
        """
        if username is None or not username.strip():
            raise InvalidArgumentError("Username cannot be empty")
        username = username.strip()
        if is_admin_name(username):
            return None
        if username not in self._users:
            self.add_user(User(username))
        return self._users[username]
