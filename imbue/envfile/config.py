import codecs
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Final

from imbue.envfile.data_types import EnvFileConfig
from imbue.envfile.errors import InvalidEncodingError

# Environment variables that override the defaults in EnvFileConfig.
# Empty values are treated as unset.
ENV_FILE_PATH_VAR: Final[str] = "ENVFILE_PATH"
ENV_FILE_ENCODING_VAR: Final[str] = "ENVFILE_ENCODING"


def get_env_file_config(environ: Mapping[str, str] | None = None) -> EnvFileConfig:
    """Build the config from defaults, overridden by ENVFILE_* environment variables.

    Reads os.environ unless another mapping is given.
    """
    source = os.environ if environ is None else environ
    config = EnvFileConfig()

    path_override = source.get(ENV_FILE_PATH_VAR, "")
    if path_override:
        config = config.model_copy(update={"path": Path(path_override)})

    encoding_override = source.get(ENV_FILE_ENCODING_VAR, "")
    if encoding_override:
        config = config.model_copy(update={"encoding": encoding_override})

    return config


def resolve_env_file_config(
    base: EnvFileConfig,
    path: Path | str | None = None,
    encoding: str | None = None,
) -> EnvFileConfig:
    """Apply explicit arguments over base and check that the encoding is a known codec.

    Raises InvalidEncodingError for unknown encodings, so nothing is opened or written
    with a config that cannot be used.
    """
    config = base
    if path is not None:
        config = config.model_copy(update={"path": Path(path)})
    if encoding is not None:
        config = config.model_copy(update={"encoding": encoding})
    try:
        codecs.lookup(config.encoding)
    except LookupError as e:
        raise InvalidEncodingError(config.encoding) from e
    return config
