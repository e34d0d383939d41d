"""Tags and the tag-type registry."""

from __future__ import annotations

from dataclasses import dataclass, field

from photo_album.model.errors import InvalidArgumentError

LOCATION = "location"
PRESET_TAG_TYPES: frozenset[str] = frozenset({"person", LOCATION})


def normalize(text: str | None) -> str:
    """Lowercase and trim a tag name or value."""
    if text is None:
        return ""
    return text.strip().lower()


@dataclass(frozen=True)
class Tag:
    """A normalized name/value pair such as ``person: alice``.

    Both parts are lowercased and trimmed on construction, so equality
    and hashing work on the normalized pair.
    """

    name: str
    value: str

    def __post_init__(self) -> None:
        if self.name is None or self.value is None:
            raise InvalidArgumentError("Tag name and value cannot be None")
        name = normalize(self.name)
        value = normalize(self.value)
        if not name or not value:
            raise InvalidArgumentError(
                f"Tag name and value cannot be empty: {self.name!r}={self.value!r}"
            )
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "value", value)

    def __str__(self) -> str:
        return f"{self.name}: {self.value}"


@dataclass
class TagTypeRegistry:
    """Preset tag types plus the custom types users have added.

    Advisory only: photos may carry tags whose name is not registered.
    """

    custom_types: set[str] = field(default_factory=set)

    def add_custom_type(self, tag_type: str | None) -> bool:
        """Register a custom type. Returns False for blank or known types."""
        normalized = normalize(tag_type)
        if not normalized or normalized in self.all_types():
            return False
        self.custom_types.add(normalized)
        return True

    def all_types(self) -> set[str]:
        return set(PRESET_TAG_TYPES) | self.custom_types

    def is_known(self, tag_type: str) -> bool:
        return normalize(tag_type) in self.all_types()
