"""Tests for the constants module."""

import pytest

from slaveplay.constants import (
    FIELD_ALIASES,
    FIELD_PREFIXES,
    Field,
    SeekType,
)


def test_seek_flags() -> None:
    """Test the numeric seek modes."""
    assert SeekType.RELATIVE.flag == 0
    assert SeekType.PERCENT.flag == 1
    assert SeekType.ABSOLUTE.flag == 2


def test_field_prefixes() -> None:
    """Test the reply prefix of each field."""
    assert Field.TIME_POS.prefix == "ANS_TIME_POSITION"
    assert Field.TIME_LENGTH.prefix == "ANS_LENGTH"
    assert Field.FILE_NAME.prefix == "ANS_FILENAME"
    assert Field.META_GENRE.prefix == "ANS_META_GENRE"
    assert Field.VIDEO_RESOLUTION.prefix == "ANS_VIDEO_RESOLUTION"
    assert set(FIELD_PREFIXES) == set(Field)


def test_field_lookup() -> None:
    """Test resolving names and aliases."""
    assert Field.lookup("meta_title") is Field.META_TITLE
    assert Field.lookup("TITLE") is Field.META_TITLE
    assert Field.lookup("time_position") is Field.TIME_POS
    for alias, field in FIELD_ALIASES.items():
        assert Field.lookup(alias) is field


def test_field_lookup_unknown() -> None:
    """Test that unknown names raise ValueError."""
    with pytest.raises(ValueError):
        Field.lookup("bpm")
