"""
Constants used throughout the application.
"""

from enum import StrEnum

# Default seconds to wait for a reply line
DEFAULT_TIMEOUT = 2.0

# Arguments that put MPlayer into slave mode
SLAVE_ARGS = ("-slave", "-quiet")


class VolumeAction(StrEnum):
    """Volume command actions."""

    UP = "up"
    DOWN = "down"
    SET = "set"


class SeekType(StrEnum):
    """Seek command modes."""

    RELATIVE = "relative"
    PERCENT = "percent"
    ABSOLUTE = "absolute"

    @property
    def flag(self) -> int:
        """Numeric mode understood by the seek command."""
        match self:
            case SeekType.PERCENT:
                return 1
            case SeekType.ABSOLUTE:
                return 2
            case _:
                return 0


class SpeedType(StrEnum):
    """Playback speed adjustment modes."""

    SET = "set"
    INCREMENT = "increment"
    MULTIPLY = "multiply"


class LoopAction(StrEnum):
    """Loop command actions."""

    NONE = "none"
    FOREVER = "forever"
    SET = "set"


class Field(StrEnum):
    """Fields that can be queried with get_* commands."""

    TIME_POS = "time_pos"
    TIME_LENGTH = "time_length"
    FILE_NAME = "file_name"
    VIDEO_CODEC = "video_codec"
    VIDEO_BITRATE = "video_bitrate"
    VIDEO_RESOLUTION = "video_resolution"
    AUDIO_CODEC = "audio_codec"
    AUDIO_BITRATE = "audio_bitrate"
    AUDIO_SAMPLES = "audio_samples"
    META_TITLE = "meta_title"
    META_ARTIST = "meta_artist"
    META_ALBUM = "meta_album"
    META_YEAR = "meta_year"
    META_COMMENT = "meta_comment"
    META_TRACK = "meta_track"
    META_GENRE = "meta_genre"

    @property
    def prefix(self) -> str:
        """Prefix of the ANS_ reply line for this field."""
        return FIELD_PREFIXES[self]

    @classmethod
    def lookup(cls, name: str) -> "Field":
        """Resolve a field name or one of its aliases.

        Raises:
            ValueError: If the name is not a known field or alias
        """
        name = name.lower()
        if name in FIELD_ALIASES:
            return FIELD_ALIASES[name]
        return cls(name)


# Reply prefixes; most are ANS_ plus the upper-cased field name
FIELD_PREFIXES: dict[Field, str] = {
    field: f"ANS_{field.value.upper()}" for field in Field
}
FIELD_PREFIXES[Field.TIME_POS] = "ANS_TIME_POSITION"
FIELD_PREFIXES[Field.TIME_LENGTH] = "ANS_LENGTH"
FIELD_PREFIXES[Field.FILE_NAME] = "ANS_FILENAME"

FIELD_ALIASES: dict[str, Field] = {
    "time_position": Field.TIME_POS,
    "filename": Field.FILE_NAME,
    "title": Field.META_TITLE,
    "album": Field.META_ALBUM,
    "year": Field.META_YEAR,
    "artist": Field.META_ARTIST,
    "comment": Field.META_COMMENT,
    "genre": Field.META_GENRE,
}

# Fields shown by `slaveplay info` when none are requested
INFO_FIELDS = (
    Field.FILE_NAME,
    Field.TIME_LENGTH,
    Field.META_TITLE,
    Field.META_ARTIST,
    Field.META_ALBUM,
)
