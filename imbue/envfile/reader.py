from collections.abc import Iterator
from pathlib import Path

from imbue.envfile.data_types import DEFAULT_ENV_FILE_ENCODING
from imbue.envfile.errors import EnvFileDecodeError


def iter_env_file_lines(path: Path | str, encoding: str = DEFAULT_ENV_FILE_ENCODING) -> Iterator[str]:
    """Yield the lines of an env file in order, without their terminators.

    Lines end at '\\n' only, and a single '\\r' right before it is dropped too, so CRLF
    files read the same as LF files while a stray '\\r' elsewhere stays part of the line.

    The file is opened on the first next() call and closed when the generator is
    exhausted, closed, or garbage collected, so callers that stop early should close it
    (or use contextlib.closing). Errors from open() propagate unchanged. Decoding
    failures are raised as EnvFileDecodeError, which is also an OSError.
    """
    line_number = 0
    with open(path, encoding=encoding, newline="\n") as handle:
        try:
            for raw_line in handle:
                line_number += 1
                yield raw_line.removesuffix("\n").removesuffix("\r")
        except UnicodeDecodeError as e:
            raise EnvFileDecodeError(Path(path), line_number, encoding, e.reason) from e
