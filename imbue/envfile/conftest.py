from collections.abc import Callable
from collections.abc import Generator
from pathlib import Path

import pytest
from loguru import logger

from imbue.envfile.config import ENV_FILE_ENCODING_VAR
from imbue.envfile.config import ENV_FILE_PATH_VAR
from imbue.envfile.environment_store import InMemoryEnvironmentStore

WriteEnvFile = Callable[[str], Path]


@pytest.fixture(autouse=True)
def isolate_env_file_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep ENVFILE_* settings from the developer's shell out of every test."""
    monkeypatch.delenv(ENV_FILE_PATH_VAR, raising=False)
    monkeypatch.delenv(ENV_FILE_ENCODING_VAR, raising=False)


@pytest.fixture
def write_env_file(tmp_path: Path) -> WriteEnvFile:
    """Return a function that writes the given content to a fresh env file and returns its path."""
    counter = 0

    def _write(content: str) -> Path:
        nonlocal counter
        counter += 1
        env_file = tmp_path / f"env-test-{counter}.env"
        env_file.write_bytes(content.encode("utf-8"))
        return env_file

    return _write


@pytest.fixture
def memory_store() -> InMemoryEnvironmentStore:
    return InMemoryEnvironmentStore()


@pytest.fixture
def captured_log_messages() -> Generator[list[str], None, None]:
    """Collect every message logged during the test, at all levels."""
    messages: list[str] = []
    handler_id = logger.add(lambda message: messages.append(message.record["message"]), level="TRACE", format="{message}")
    yield messages
    logger.remove(handler_id)
