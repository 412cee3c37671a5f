import functools
import inspect
import os
import sys
import time
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any
from typing import Final
from typing import ParamSpec
from typing import TypeVar

import deal
from loguru import logger

from imbue.envfile.primitives import LogLevel

P = ParamSpec("P")
R = TypeVar("R")

_MAX_LOG_VALUE_REPR_LENGTH: Final[int] = 200


def setup_logging(level: LogLevel | str = LogLevel.INFO) -> None:
    """Replace loguru's sinks with a single stderr sink at the given level.

    The library itself only logs at DEBUG and TRACE, so this is mainly useful for
    applications that want to see which env files were read.
    """
    resolved_level = LogLevel(str(level).upper())
    logger.remove()
    logger.add(
        sys.stderr,
        level=resolved_level.value,
        format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
    )


@deal.has()
def _format_arg_value(value: Any) -> str:
    """Format an argument value for logging, truncating if too long."""
    str_value = str(value) if isinstance(value, os.PathLike) else repr(value)
    if len(str_value) > _MAX_LOG_VALUE_REPR_LENGTH:
        return str_value[: _MAX_LOG_VALUE_REPR_LENGTH - 3] + "..."
    return str_value


def log_call(func: Callable[P, R]) -> Callable[P, R]:
    """Decorator that logs calls of public entry points at debug level.

    Arguments are bound as structured logging fields. Return values are never logged,
    since they are typically values read out of env files (and env files hold secrets).
    """
    func_name = getattr(func, "__name__", repr(func))
    sig = inspect.signature(func)

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        bound_args = sig.bind(*args, **kwargs)
        bound_args.apply_defaults()
        log_fields = {name: _format_arg_value(value) for name, value in bound_args.arguments.items()}
        logger.debug("Calling {}", func_name, **log_fields)

        start_time = time.monotonic()
        result = func(*args, **kwargs)
        elapsed = time.monotonic() - start_time
        logger.trace("Calling {} [done in {:.5f} sec]", func_name, elapsed)

        return result

    return wrapper


@contextmanager
def log_span(message: str, *args: Any, **context: Any) -> Iterator[None]:
    """Log a debug message on entry and a trace message with timing on exit.

    Keyword arguments are bound via logger.contextualize, so every message logged
    inside the span carries them as extra fields.
    """
    with logger.contextualize(**context):
        logger.debug(message, *args)
        start_time = time.monotonic()
        try:
            yield
        except BaseException:
            elapsed = time.monotonic() - start_time
            logger.trace(message + " [failed after {:.5f} sec]", *args, elapsed)
            raise
        else:
            elapsed = time.monotonic() - start_time
            logger.trace(message + " [done in {:.5f} sec]", *args, elapsed)
