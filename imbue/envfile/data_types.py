from pathlib import Path
from typing import Final

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

DEFAULT_ENV_FILE_PATH: Final[Path] = Path(".env")
DEFAULT_ENV_FILE_ENCODING: Final[str] = "utf-8"


class FrozenModel(BaseModel):
    """Base class for immutable pydantic models that prevent attribute mutation after construction."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=False,
    )


class MutableModel(BaseModel):
    """Base class for mutable pydantic models that allow attribute mutation after construction."""

    model_config = ConfigDict(
        frozen=False,
        extra="forbid",
        arbitrary_types_allowed=False,
    )


class CandidatePair(FrozenModel):
    """A candidate line split at its first '=', before any trimming or unquoting."""

    raw_key: str = Field(description="Everything before the first '='")
    raw_value: str = Field(description="Everything after the first '=' (may itself contain '=')")


class EnvEntry(FrozenModel):
    """A normalized key/value pair, ready to be written to the environment."""

    key: str = Field(description="Key with surrounding whitespace removed")
    value: str = Field(description="Value with surrounding whitespace and one matching pair of outer quotes removed")


class EnvFileConfig(FrozenModel):
    """Where env files are read from when callers do not pass an explicit path."""

    path: Path = Field(default=DEFAULT_ENV_FILE_PATH, description="Env file used when no path is given")
    encoding: str = Field(default=DEFAULT_ENV_FILE_ENCODING, description="Text encoding of env files")
