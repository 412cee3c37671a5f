from collections.abc import Iterable
from collections.abc import Iterator
from typing import Final

import deal

from imbue.envfile.data_types import CandidatePair
from imbue.envfile.data_types import EnvEntry
from imbue.envfile.primitives import LineKind

COMMENT_PREFIX: Final[str] = "#"
KEY_VALUE_SEPARATOR: Final[str] = "="
QUOTE_CHARACTERS: Final[tuple[str, ...]] = ('"', "'")
# Characters with the Unicode White_Space property. Narrower than str.isspace(), which also
# counts the \x1c-\x1f separator controls as whitespace.
WHITESPACE_CHARACTERS: Final[str] = (
    "\t\n\v\f\r \x85\xa0\u1680\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)


@deal.has()
def classify_line(line: str) -> LineKind:
    """Decide whether a raw line can be ignored or should be parsed as a key/value pair.

    Only the first character is inspected: a line of spaces is a candidate, and so is
    a line with whitespace before its '#'.
    """
    if line == "" or line.startswith(COMMENT_PREFIX):
        return LineKind.IGNORE
    return LineKind.CANDIDATE


@deal.has()
def split_candidate(line: str) -> CandidatePair | None:
    """Split a candidate line at its first '=', or return None if it has none."""
    raw_key, separator, raw_value = line.partition(KEY_VALUE_SEPARATOR)
    if not separator:
        return None
    return CandidatePair(raw_key=raw_key, raw_value=raw_value)


@deal.has()
def strip_matching_quotes(value: str) -> str:
    """Remove one pair of matching outer quotes, if present.

    Interior content is left untouched (no unescaping), and only a single layer is
    removed. A lone quote character is not a pair, so it is returned unchanged.
    """
    if len(value) >= 2 and value[0] == value[-1] and value[0] in QUOTE_CHARACTERS:
        return value[1:-1]
    return value


@deal.has()
def normalize_pair(pair: CandidatePair) -> EnvEntry:
    key = pair.raw_key.strip(WHITESPACE_CHARACTERS)
    value = pair.raw_value.strip(WHITESPACE_CHARACTERS)
    return EnvEntry(key=key, value=strip_matching_quotes(value))


@deal.has()
def parse_line(line: str) -> EnvEntry | None:
    """Parse one raw line (without its terminator) into an entry.

    Returns None for empty lines, comments and malformed lines. Malformed lines are
    never an error.
    """
    if classify_line(line) == LineKind.IGNORE:
        return None
    pair = split_candidate(line)
    if pair is None:
        return None
    return normalize_pair(pair)


def iter_entries(lines: Iterable[str]) -> Iterator[EnvEntry]:
    """Lazily parse lines in order, dropping ignorable and malformed ones."""
    for line in lines:
        entry = parse_line(line)
        if entry is not None:
            yield entry


@deal.has()
def parse_env_content(content: str) -> dict[str, str]:
    """Parse the full text of an env file into a dict.

    Lines are split like a line scanner would (a trailing '\\r' before each '\\n' is
    dropped). Later duplicates of a key replace earlier ones.
    """
    lines = (line.removesuffix("\r") for line in content.split("\n"))
    return {entry.key: entry.value for entry in iter_entries(lines)}
