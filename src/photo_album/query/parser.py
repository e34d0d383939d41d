"""Search query model and parser for the text the search form collects.

A query has up to two tag predicates, a combinator, and an optional
inclusive date range:

    tag1        = name '=' value        e.g. person=alice
    tag2        = name '=' value        e.g. location=paris
    combinator  = 'None' | 'AND' | 'OR'
    start, end  = YYYY-MM-DD

Blank fields mean "not given". Names and values are normalized the same
way tags are (lowercased, trimmed).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from photo_album.model.errors import InvalidArgumentError, InvalidQueryError
from photo_album.model.tag import Tag

DEFAULT_DATE_FORMAT = "%Y-%m-%d"


class Combinator(Enum):
    NONE = "none"
    AND = "and"
    OR = "or"

    @classmethod
    def parse(cls, text: str | None) -> Combinator:
        """Parse 'None', 'AND' or 'OR' (any case). Blank means NONE."""
        if text is None or not text.strip():
            return cls.NONE
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise InvalidQueryError(
                f"Unknown combinator '{text}' (expected None, AND or OR)"
            ) from None


@dataclass(frozen=True)
class Query:
    """A composite search: two tag predicates and a date range."""

    tag1: Tag | None = None
    tag2: Tag | None = None
    combinator: Combinator = Combinator.NONE
    start_date: date | None = None
    end_date: date | None = None

    @property
    def has_date_range(self) -> bool:
        """The date filter applies only when both bounds are given."""
        return self.start_date is not None and self.end_date is not None

    @classmethod
    def from_text(
        cls,
        tag1: str | None = None,
        tag2: str | None = None,
        combinator: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> Query:
        """Build a query from raw form fields.

        Raises InvalidQueryError for a tag that is not ``name=value`` or a
        date that does not match ``date_format``.
        """
        return cls(
            tag1=parse_tag_predicate(tag1),
            tag2=parse_tag_predicate(tag2),
            combinator=Combinator.parse(combinator),
            start_date=parse_date(start_date, date_format),
            end_date=parse_date(end_date, date_format),
        )


def parse_tag_predicate(text: str | None) -> Tag | None:
    """Parse ``name=value`` into a Tag; blank input returns None."""
    if text is None or not text.strip():
        return None
    parts = text.split("=")
    if len(parts) != 2:
        raise InvalidQueryError(f"Expected tag as name=value, got '{text}'")
    try:
        return Tag(parts[0], parts[1])
    except InvalidArgumentError as e:
        raise InvalidQueryError(
            f"Expected tag as name=value, got '{text}'"
        ) from e


def parse_date(text: str | None, date_format: str = DEFAULT_DATE_FORMAT) -> date | None:
    """Parse a calendar date; blank input returns None."""
    if text is None or not text.strip():
        return None
    try:
        return datetime.strptime(text.strip(), date_format).date()
    except ValueError:
        raise InvalidQueryError(
            f"Invalid date '{text}' (expected {date_format})"
        ) from None
