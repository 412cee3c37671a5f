"""Loading env files into the environment, and reading values out of them.

Example .env file:

    # Database settings
    DB_HOST=localhost
    DB_PORT=5432
    APP_NAME="My Application"
    API_KEY='secret-key'

load_env() writes every entry into the environment, with later duplicates of a key
winning. get_env() returns the first value for a single key and never touches the
environment. Both raise OSError if the file cannot be opened or read, and silently
skip lines that are not KEY=VALUE. An unknown encoding raises InvalidEncodingError
before any file is opened.
"""

from contextlib import closing
from pathlib import Path
from typing import Final

import deal
from loguru import logger

from imbue.envfile.config import get_env_file_config
from imbue.envfile.config import resolve_env_file_config
from imbue.envfile.data_types import EnvEntry
from imbue.envfile.data_types import EnvFileConfig
from imbue.envfile.environment_store import EnvironmentStoreInterface
from imbue.envfile.environment_store import OsEnvironmentStore
from imbue.envfile.logging import log_call
from imbue.envfile.logging import log_span
from imbue.envfile.parsing import iter_entries
from imbue.envfile.reader import iter_env_file_lines

# Process environments store C strings, so these can never be set
_NUL_CHARACTER: Final[str] = "\x00"


@deal.has()
def _get_unstorable_reason(entry: EnvEntry) -> str | None:
    """Return why the environment cannot hold this entry, or None if it can."""
    if not entry.key:
        return "empty key"
    if _NUL_CHARACTER in entry.key or _NUL_CHARACTER in entry.value:
        return "NUL character"
    return None


@log_call
def load_env(
    path: Path | str | None = None,
    store: EnvironmentStoreInterface | None = None,
    encoding: str | None = None,
    config: EnvFileConfig | None = None,
) -> None:
    """Write every entry of an env file into the environment, in file order.

    Each write overwrites the previous value, so the last occurrence of a key wins.
    Entries the environment cannot hold (empty keys, NUL characters) are skipped.
    Entries written before a mid-file read error stay written.

    Defaults to the real process environment. Without an explicit config, the path and
    encoding come from ENVFILE_* variables as they are when the call starts; entries
    written by this call do not change how the rest of the file is read.
    """
    resolved = resolve_env_file_config(get_env_file_config() if config is None else config, path, encoding)
    target = OsEnvironmentStore() if store is None else store

    written_count = 0
    with log_span("Loading env file {}", resolved.path, path=str(resolved.path)):
        with closing(iter_env_file_lines(resolved.path, resolved.encoding)) as lines:
            for entry in iter_entries(lines):
                reason = _get_unstorable_reason(entry)
                if reason is not None:
                    logger.trace("Skipping entry with {}", reason)
                    continue
                target.set(entry.key, entry.value)
                written_count += 1
        logger.debug("Loaded {} entries from {}", written_count, resolved.path)


@log_call
def get_env(
    key: str,
    path: Path | str | None = None,
    encoding: str | None = None,
    config: EnvFileConfig | None = None,
) -> str:
    """Return the value of the first entry for key in an env file, or "" if there is none.

    The key must match exactly (case-sensitive, after trimming the file's key). Reading
    stops at the first match. The environment is neither read nor written, so missing
    arguments fall back to the given config or to the built-in defaults (.env, utf-8).
    """
    resolved = resolve_env_file_config(EnvFileConfig() if config is None else config, path, encoding)

    with log_span("Looking up {} in env file {}", key, resolved.path, path=str(resolved.path)):
        with closing(iter_env_file_lines(resolved.path, resolved.encoding)) as lines:
            for entry in iter_entries(lines):
                if entry.key == key:
                    return entry.value
        logger.debug("Key {} not found in {}", key, resolved.path)
        return ""


@log_call
def read_env_values(
    path: Path | str | None = None,
    encoding: str | None = None,
    config: EnvFileConfig | None = None,
) -> dict[str, str]:
    """Return what load_env would write, without touching the environment.

    Later duplicates of a key win, as with load_env. Like get_env, this never reads the
    environment for its defaults.
    """
    resolved = resolve_env_file_config(EnvFileConfig() if config is None else config, path, encoding)

    with log_span("Reading env file {}", resolved.path, path=str(resolved.path)):
        with closing(iter_env_file_lines(resolved.path, resolved.encoding)) as lines:
            values = {
                entry.key: entry.value for entry in iter_entries(lines) if _get_unstorable_reason(entry) is None
            }
        logger.debug("Read {} keys from {}", len(values), resolved.path)
        return values
