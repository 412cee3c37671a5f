from pathlib import Path


class BaseEnvFileError(Exception):
    """Base exception for all envfile errors."""


class EnvFileDecodeError(BaseEnvFileError, OSError):
    """Raised when a line of an env file cannot be decoded with the configured encoding.

    Subclasses OSError so that callers only ever need to handle a single I/O error kind
    for anything that goes wrong while reading an env file.
    """

    def __init__(self, path: Path, line_number: int, encoding: str, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        self.encoding = encoding
        self.reason = reason
        super().__init__(f"Cannot decode {path} as {encoding} after line {line_number}: {reason}")

    def __str__(self) -> str:
        return f"Cannot decode {self.path} as {self.encoding} after line {self.line_number}: {self.reason}"


class InvalidEncodingError(BaseEnvFileError, ValueError):
    """Raised before any file is opened when the configured encoding is not a known codec."""

    def __init__(self, encoding: str) -> None:
        self.encoding = encoding
        super().__init__(f"Unknown env file encoding: {encoding}")
