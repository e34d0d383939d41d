"""Command-line entry point for the photo album library."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from photo_album.config.config import ConfigManager
from photo_album.library.admin import AdminConsole
from photo_album.library.manager import Library
from photo_album.model.errors import PhotoAlbumError
from photo_album.query.engine import SearchEngine
from photo_album.query.parser import Query

logger = logging.getLogger(__name__)


def setup_logging(config: ConfigManager, verbose: bool = False) -> None:
    """Configure root logging from the ``logging`` config section."""
    level_name = str(config.get("logging.level", "INFO")).upper()
    level = logging.DEBUG if verbose else getattr(logging, level_name, logging.INFO)

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.get("logging.log_to_file", False):
        handlers.append(
            logging.FileHandler(config.get("logging.log_file", "photo_album.log"))
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=handlers,
        force=True,
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="photo-album",
        description="Photo Album - users, albums, tags, and search",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to config YAML file",
    )
    parser.add_argument(
        "--library", type=str, default=None,
        help="Library file path (overrides library.path)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    stock = sub.add_parser(
        "generate-stock", help="Create a fresh library with the stock user",
    )
    stock.add_argument(
        "--data", type=str, default=None,
        help="Stock image directory (overrides stock.directory)",
    )

    sub.add_parser("users", help="List users (admin)")

    create_user = sub.add_parser("create-user", help="Create a user (admin)")
    create_user.add_argument("username")

    delete_user = sub.add_parser("delete-user", help="Delete a user (admin)")
    delete_user.add_argument("username")

    albums = sub.add_parser("albums", help="List a user's albums")
    albums.add_argument("username")

    create_album = sub.add_parser("create-album", help="Create an album")
    create_album.add_argument("username")
    create_album.add_argument("name")

    rename_album = sub.add_parser("rename-album", help="Rename an album")
    rename_album.add_argument("username")
    rename_album.add_argument("old_name")
    rename_album.add_argument("new_name")

    delete_album = sub.add_parser("delete-album", help="Delete an album")
    delete_album.add_argument("username")
    delete_album.add_argument("name")

    add_photo = sub.add_parser("add-photo", help="Add an image file to an album")
    add_photo.add_argument("username")
    add_photo.add_argument("album")
    add_photo.add_argument("path")

    tag = sub.add_parser("tag", help="Tag a photo (NAME=VALUE)")
    tag.add_argument("username")
    tag.add_argument("path")
    tag.add_argument("tag")

    search = sub.add_parser("search", help="Search a user's photos")
    search.add_argument("username")
    search.add_argument("--tag1", default=None, help="First tag as name=value")
    search.add_argument("--tag2", default=None, help="Second tag as name=value")
    search.add_argument(
        "--op", default="None",
        help="How to combine tag1 and tag2: None, AND or OR",
    )
    search.add_argument("--start", default=None, help="Start date (inclusive)")
    search.add_argument("--end", default=None, help="End date (inclusive)")
    search.add_argument(
        "--save-as", dest="save_as", default=None,
        help="Save the results as a new album",
    )
    return parser


def _load_config(args: argparse.Namespace) -> ConfigManager:
    config = ConfigManager(args.config)
    if args.library:
        config.set("library.path", str(Path(args.library).resolve()))
    return config


def _generate_stock(config: ConfigManager, args: argparse.Namespace) -> int:
    if args.data:
        config.set("stock.directory", str(Path(args.data).resolve()))
    library = Library.from_config(config, autoload=False)
    result = library.seed_stock()
    library.save()
    print(
        f"Wrote {library.path} with user 'stock' "
        f"({result.added} photos, {result.errors} skipped)"
    )
    return 0


def _run_command(library: Library, args: argparse.Namespace, config: ConfigManager) -> int:
    admin = AdminConsole(library)
    command = args.command

    if command == "users":
        for name in admin.list_users():
            print(name)
        return 0

    if command == "create-user":
        user = admin.create_user(args.username)
        print(f"Created user {user.username}")
        return 0

    if command == "delete-user":
        if not admin.delete_user(args.username):
            print(f"Error: cannot delete user '{args.username}'")
            return 1
        print(f"Deleted user {args.username}")
        return 0

    user = library.get_user(args.username)

    if command == "albums":
        for album in user.albums:
            print(str(album))
        return 0

    if command == "create-album":
        album = user.create_album(args.name)
        library.save()
        print(f"Created album {album.name}")
        return 0

    if command == "rename-album":
        if not user.rename_album(args.old_name, args.new_name):
            print(f"Error: cannot rename '{args.old_name}' to '{args.new_name}'")
            return 1
        library.save()
        print(f"Renamed {args.old_name} to {args.new_name}")
        return 0

    if command == "delete-album":
        if not user.remove_album(args.name):
            print(f"Error: album not found: {args.name}")
            return 1
        library.save()
        print(f"Deleted album {args.name}")
        return 0

    if command == "add-photo":
        album = user.get_album(args.album)
        photo = user.import_photo(args.path)
        if not album.add_photo(photo):
            print(f"Error: {photo.file_name} is already in {album.name}")
            return 1
        library.save()
        print(f"Added {photo.file_name} to {album.name}")
        return 0

    if command == "tag":
        photo = user.find_photo(args.path)
        if photo is None:
            print(f"Error: photo not found: {args.path}")
            return 1
        name, sep, value = args.tag.partition("=")
        if not sep:
            print(f"Error: expected NAME=VALUE, got '{args.tag}'")
            return 1
        if not photo.add_tag(name, value):
            print(f"Error: {photo.file_name} already has tag {args.tag}")
            return 1
        library.save()
        print(f"Tagged {photo.file_name} with {name.strip().lower()}={value.strip().lower()}")
        return 0

    if command == "search":
        query = Query.from_text(
            tag1=args.tag1,
            tag2=args.tag2,
            combinator=args.op,
            start_date=args.start,
            end_date=args.end,
            date_format=config.get("search.date_format", "%Y-%m-%d"),
        )
        engine = SearchEngine()
        results = engine.run(user, query)
        for photo in results:
            print(str(photo))
        if args.save_as:
            album = engine.save_as(user, args.save_as, results)
            library.save()
            print(f"Saved {album.photo_count()} photos to album {album.name}")
        return 0

    raise ValueError(f"Unknown command: {command}")


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    config = _load_config(args)
    setup_logging(config, args.verbose)

    try:
        if args.command == "generate-stock":
            return _generate_stock(config, args)
        library = Library.from_config(config)
        if library.load_error is not None:
            print(f"Error: {library.load_error}")
            return 1
        return _run_command(library, args, config)
    except PhotoAlbumError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
