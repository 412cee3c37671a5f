from enum import StrEnum
from enum import auto


class UpperCaseStrEnum(StrEnum):
    """A StrEnum whose auto() values are the upper-cased member names."""

    @staticmethod
    def _generate_next_value_(
        name: str,
        start: int,
        count: int,
        last_values: list[str],
    ) -> str:
        return name.upper()


# === Enums ===


class LineKind(UpperCaseStrEnum):
    """How a raw env file line is treated before key/value parsing."""

    # Empty lines and lines whose first character is '#'
    IGNORE = auto()
    # Everything else, including whitespace-only lines
    CANDIDATE = auto()


class LogLevel(UpperCaseStrEnum):
    """Log verbosity level."""

    TRACE = auto()
    DEBUG = auto()
    INFO = auto()
    WARNING = auto()
    ERROR = auto()
