"""Roster management for the reserved admin identity."""

from __future__ import annotations

from photo_album.library.manager import Library
from photo_album.model.errors import DuplicateError, InvalidArgumentError
from photo_album.model.user import User, is_admin_name


class AdminConsole:
    """List, create, and delete the non-admin users of a library."""

    def __init__(self, library: Library):
        self._library = library

    def list_users(self) -> list[str]:
        return [
            u.username for u in self._library.all_users()
            if not is_admin_name(u.username)
        ]

    def create_user(self, username: str) -> User:
        """Create a user with no password. The library saves it once."""
        if username is None or not username.strip():
            raise InvalidArgumentError("Username cannot be empty")
        username = username.strip()
        if is_admin_name(username):
            raise InvalidArgumentError("'admin' is a reserved username")
        if self._library.has_user(username):
            raise DuplicateError(f"User already exists: {username}")
        user = User(username)
        self._library.add_user(user)
        return user

    def delete_user(self, username: str) -> bool:
        if is_admin_name(username):
            return False
        return self._library.remove_user(username)
