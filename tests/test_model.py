"""Tests for tags, photos, albums, and users."""

from datetime import date, datetime
from pathlib import Path

import pytest

from photo_album.model.album import Album
from photo_album.model.errors import (
    DuplicateError,
    InvalidArgumentError,
    NotFoundError,
)
from photo_album.model.photo import Photo
from photo_album.model.tag import PRESET_TAG_TYPES, Tag, TagTypeRegistry
from photo_album.model.user import User, is_admin_name


class TestTag:
    def test_normalized_on_construction(self):
        tag = Tag("  Person ", " Alice  ")
        assert tag.name == "person"
        assert tag.value == "alice"

    def test_equality_and_hash_use_normalized_pair(self):
        assert Tag("PERSON", "alice") == Tag("person", " Alice")
        assert len({Tag("person", "alice"), Tag("Person", "ALICE")}) == 1
        assert Tag("person", "alice") != Tag("person", "bob")

    def test_str(self):
        assert str(Tag("Location", "Paris")) == "location: paris"

    @pytest.mark.parametrize("name,value", [
        ("", "alice"), ("person", ""), ("   ", "x"), (None, "x"), ("x", None),
    ])
    def test_empty_or_none_rejected(self, name, value):
        with pytest.raises(InvalidArgumentError):
            Tag(name, value)

    def test_immutable(self):
        tag = Tag("person", "alice")
        with pytest.raises(AttributeError):
            tag.name = "other"


class TestTagTypeRegistry:
    def test_presets(self):
        registry = TagTypeRegistry()
        assert registry.all_types() == {"person", "location"}
        assert PRESET_TAG_TYPES == {"person", "location"}

    def test_add_custom_type_normalizes(self):
        registry = TagTypeRegistry()
        assert registry.add_custom_type("  Event ")
        assert "event" in registry.all_types()
        assert registry.custom_types == {"event"}
        assert registry.is_known("EVENT")

    def test_blank_and_known_types_ignored(self):
        registry = TagTypeRegistry()
        assert not registry.add_custom_type("   ")
        assert not registry.add_custom_type(None)
        assert not registry.add_custom_type("Person")
        assert registry.custom_types == set()

    def test_registries_are_independent(self):
        a = TagTypeRegistry()
        b = TagTypeRegistry()
        a.add_custom_type("pet")
        assert "pet" not in b.all_types()


class TestPhoto:
    def test_missing_file_rejected(self, tmp_path):
        with pytest.raises(InvalidArgumentError):
            Photo(str(tmp_path / "nope.jpg"))

    def test_empty_path_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Photo("")

    def test_string_path_kept_as_given(self, make_image, monkeypatch):
        path = Path(make_image("a.jpg"))
        monkeypatch.chdir(path.parent)
        assert Photo("./a.jpg").file_path == "./a.jpg"
        assert Photo(Path("./a.jpg")).file_path == "a.jpg"
        assert Photo(path).file_path == str(path)

    def test_directory_rejected(self, tmp_path):
        with pytest.raises(InvalidArgumentError):
            Photo(str(tmp_path))

    def test_date_from_mtime_without_microseconds(self, make_image):
        path = make_image("a.jpg", datetime(2024, 3, 5, 10, 30, 15, 987000))
        photo = Photo(path)
        assert photo.date_taken == datetime(2024, 3, 5, 10, 30, 15)
        assert photo.date_taken.microsecond == 0
        assert photo.date_as_local_date() == date(2024, 3, 5)

    def test_formatted_date(self, make_image):
        photo = Photo(make_image("a.jpg", datetime(2024, 3, 5, 10, 0, 0)))
        assert photo.formatted_date() == "Tue Mar 05 10:00:00 2024"

    def test_location_is_single_valued(self, make_image):
        photo = Photo(make_image("a.jpg"))
        assert photo.add_tag("location", "paris") is True
        assert photo.add_tag("Location", " Rome ") is True
        assert photo.tags == {Tag("location", "rome")}

    def test_multiple_people_allowed(self, make_image):
        photo = Photo(make_image("a.jpg"))
        assert photo.add_tag("person", "alice")
        assert photo.add_tag("person", "bob")
        assert photo.add_tag("location", "paris")
        assert len(photo.tags) == 3
        locations = [t for t in photo.tags if t.name == "location"]
        assert len(locations) == 1

    def test_duplicate_tag_returns_false(self, make_image):
        photo = Photo(make_image("a.jpg"))
        assert photo.add_tag("person", "alice")
        assert photo.add_tag(" PERSON", "Alice ") is False
        assert photo.add_tag("location", "paris")
        assert photo.add_tag("location", "paris") is False
        assert photo.tags == {Tag("person", "alice"), Tag("location", "paris")}

    def test_tags_stored_normalized(self, make_image):
        photo = Photo(make_image("a.jpg"))
        photo.add_tag("  Event ", " Birthday Party ")
        for tag in photo.tags:
            assert tag.name == tag.name.strip().lower()
            assert tag.value == tag.value.strip().lower()

    def test_remove_tag(self, make_image):
        photo = Photo(make_image("a.jpg"))
        photo.add_tag("person", "alice")
        assert photo.remove_tag("Person", " ALICE") is True
        assert photo.remove_tag("person", "alice") is False
        assert photo.tags == frozenset()

    def test_empty_tag_rejected(self, make_image):
        photo = Photo(make_image("a.jpg"))
        with pytest.raises(InvalidArgumentError):
            photo.add_tag("person", "  ")

    def test_tags_snapshot_is_read_only(self, make_image):
        photo = Photo(make_image("a.jpg"))
        photo.add_tag("person", "alice")
        with pytest.raises(AttributeError):
            photo.tags.add(Tag("person", "bob"))

    def test_caption(self, make_image):
        photo = Photo(make_image("a.jpg"))
        assert photo.caption is None
        assert photo.display_caption == ""
        photo.set_caption("")
        assert photo.display_caption == ""
        photo.set_caption("Sunset")
        assert photo.caption == "Sunset"

    def test_equality_by_path(self, make_image):
        path = make_image("a.jpg")
        assert Photo(path) == Photo(path)
        assert hash(Photo(path)) == hash(Photo(path))
        assert Photo(path) != Photo(make_image("b.jpg"))

    def test_str(self, make_image):
        photo = Photo(make_image("a.jpg", datetime(2024, 3, 5, 10, 0, 0)))
        assert str(photo) == "a.jpg | (no caption) | Tue Mar 05 10:00:00 2024"
        photo.set_caption("Beach")
        assert str(photo) == "a.jpg | Beach | Tue Mar 05 10:00:00 2024"

    def test_from_record_does_not_need_file(self):
        photo = Photo.from_record(
            "/gone/a.jpg",
            datetime(2024, 1, 1, 8, 0, 0),
            caption="old",
            tags=[Tag("person", "alice"), Tag("location", "paris")],
        )
        assert photo.file_path == "/gone/a.jpg"
        assert photo.caption == "old"
        assert photo.tags == {Tag("person", "alice"), Tag("location", "paris")}


class TestAlbum:
    def test_blank_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            Album("  ")

    def test_add_preserves_order(self, make_image):
        album = Album("Trip")
        photos = [Photo(make_image(n)) for n in ("c.jpg", "a.jpg", "b.jpg")]
        for photo in photos:
            assert album.add_photo(photo)
        assert album.photos == photos
        assert album.photo_count() == 3
        assert len(album) == 3

    def test_duplicate_by_path_rejected(self, make_image):
        path = make_image("a.jpg")
        album = Album("Trip")
        assert album.add_photo(Photo(path))
        assert album.add_photo(Photo(path)) is False
        assert album.add_photo(None) is False
        assert album.photo_count() == 1

    def test_remove_and_contains(self, make_image):
        album = Album("Trip")
        photo = Photo(make_image("a.jpg"))
        album.add_photo(photo)
        assert album.contains_photo(photo)
        assert photo in album
        assert album.remove_photo(photo)
        assert album.remove_photo(photo) is False
        assert not album.contains_photo(photo)

    def test_photos_returns_copy(self, make_image):
        album = Album("Trip")
        album.add_photo(Photo(make_image("a.jpg")))
        album.photos.clear()
        assert album.photo_count() == 1

    def test_str(self, make_image):
        album = Album("Trip")
        album.add_photo(Photo(make_image("a.jpg")))
        assert str(album) == "Trip (1 photos)"


class TestUser:
    def test_blank_username_rejected(self):
        with pytest.raises(InvalidArgumentError):
            User("  ")

    def test_admin_name(self):
        assert is_admin_name("admin")
        assert is_admin_name(" ADMIN ")
        assert not is_admin_name("administrator")
        assert not is_admin_name(None)

    def test_duplicate_album_name_case_insensitive(self):
        user = User("u")
        assert user.add_album(Album("Vacation"))
        assert user.add_album(Album("vacation")) is False
        assert len(user.albums) == 1

    def test_add_none_album(self):
        assert User("u").add_album(None) is False

    def test_create_album_duplicate_raises(self):
        user = User("u")
        user.create_album("Vacation")
        with pytest.raises(DuplicateError):
            user.create_album("VACATION")

    def test_get_album_case_insensitive(self):
        user = User("u")
        album = Album("Vacation")
        user.add_album(album)
        assert user.get_album("vAcAtIoN") is album
        with pytest.raises(NotFoundError):
            user.get_album("Work")

    def test_remove_album(self):
        user = User("u")
        user.add_album(Album("Vacation"))
        assert user.remove_album("VACATION")
        assert user.remove_album("Vacation") is False
        assert user.albums == []

    def test_album_names_stay_unique(self):
        user = User("u")
        for name in ["A", "a", "B", " b ", "C", "A"]:
            user.add_album(Album(name))
        user.rename_album("C", "b")
        user.rename_album("C", "D")
        names = [a.name.lower() for a in user.albums]
        assert len(names) == len(set(names))

    def test_rename_preserves_photos(self, make_image):
        user = User("u")
        album = Album("Old")
        photos = [Photo(make_image(n)) for n in ("a.jpg", "b.jpg", "c.jpg")]
        for photo in photos:
            album.add_photo(photo)
        user.add_album(album)
        user.add_album(Album("Other"))

        assert user.rename_album("old", "New")
        renamed = user.get_album("new")
        assert renamed.name == "New"
        assert renamed.photos == photos
        assert all(a is b for a, b in zip(renamed.photos, photos))
        assert not user.has_album("Old")
        assert [a.name for a in user.albums] == ["Other", "New"]

    def test_rename_failures(self):
        user = User("u")
        user.add_album(Album("A"))
        user.add_album(Album("B"))
        assert user.rename_album("missing", "C") is False
        assert user.rename_album("A", "b") is False
        assert user.rename_album("A", "a") is False
        assert user.rename_album("A", "  ") is False
        assert [a.name for a in user.albums] == ["A", "B"]

    def test_all_photos_dedup_in_first_seen_order(self, make_image):
        user = User("u")
        x, y, z = (Photo(make_image(n)) for n in ("x.jpg", "y.jpg", "z.jpg"))
        first, second = Album("First"), Album("Second")
        first.add_photo(y)
        first.add_photo(x)
        second.add_photo(x)
        second.add_photo(z)
        user.add_album(first)
        user.add_album(second)
        assert user.all_photos() == [y, x, z]

    def test_import_photo_interns_by_path(self, make_image):
        path = make_image("a.jpg")
        user = User("u")
        album = user.create_album("One")
        photo = user.import_photo(path)
        album.add_photo(photo)
        assert user.import_photo(path) is photo
        assert user.find_photo(path) is photo
        assert user.find_photo("/elsewhere.jpg") is None

    def test_copy_shares_photo(self, make_image):
        user = User("u")
        source = user.create_album("Source")
        user.create_album("Target")
        photo = user.import_photo(make_image("a.jpg"))
        source.add_photo(photo)

        assert user.copy_photo(photo, "target")
        assert user.copy_photo(photo, "target") is False
        photo.set_caption("shared")
        photo.add_tag("person", "alice")
        copied = user.get_album("Target").photos[0]
        assert copied is photo
        assert copied.caption == "shared"
        assert Tag("person", "alice") in copied.tags

    def test_copy_to_missing_album(self, make_image):
        user = User("u")
        photo = user.import_photo(make_image("a.jpg"))
        with pytest.raises(NotFoundError):
            user.copy_photo(photo, "nowhere")

    def test_move_photo(self, make_image):
        user = User("u")
        source = user.create_album("Source")
        target = user.create_album("Target")
        photo = user.import_photo(make_image("a.jpg"))
        source.add_photo(photo)

        assert user.move_photo(photo, "Source", "Target")
        assert not source.contains_photo(photo)
        assert target.photos[0] is photo

    def test_move_rejected_when_target_has_photo(self, make_image):
        user = User("u")
        source = user.create_album("Source")
        target = user.create_album("Target")
        photo = user.import_photo(make_image("a.jpg"))
        source.add_photo(photo)
        target.add_photo(photo)

        assert user.move_photo(photo, "Source", "Target") is False
        assert source.contains_photo(photo)
        assert user.move_photo(photo, "Source", "source") is False
