"""
Loguru sinks and shared state for Logger.io

Everything that writes a log line in this service goes through one bound
loguru logger: stdout always, an hourly file under settings.LOG_DIR when
DEBUG is on, and the stdlib `logging` tree (granian, sqlalchemy, anyio)
forwarded through InterceptHandler.
"""

from contextvars import ContextVar
from datetime import datetime, timezone
from enum import StrEnum
import logging
import re
import sys
from typing import TYPE_CHECKING, Optional

from loguru import logger as loguru_logger


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.logging.service_context import get_service_context


SENSITIVE_KEYWORDS = frozenset(
    {
        'password',
        'token',
        'access_token',
        'secret_key',
        'authorization',
        'cookie',
    }
)
MASK = '********'
DEPTH_LINE = '│'
MAX_CONTENT_LENGTH = 500

chain_start_time_var: ContextVar[float] = ContextVar('chain_start_time_var', default=0)
call_depth_var: ContextVar[int] = ContextVar('call_depth_var', default=0)


class ExtraField(StrEnum):
    SERVICE_CONTEXT = 'service_context'
    CHAIN_START_TIME = 'chain_start_time'
    CALL_TARGET = 'call_target'


class GeneratorMethod(StrEnum):
    NEXT = 'next'
    SEND = 'send'
    THROW = 'throw'


def default_extra() -> dict[str, str]:
    return {
        ExtraField.SERVICE_CONTEXT: get_service_context(),
        ExtraField.CHAIN_START_TIME: '',
        ExtraField.CALL_TARGET: '',
    }


# granian access line: 127.0.0.1 - "POST /api/reservation HTTP/1.1" - 201 - 8ms
_ACCESS_LINE = re.compile(r'"\S+ \S+ HTTP/[\d.]+" - (?P<status>\d{3})\b')


def access_log_level(message: str) -> Optional[str]:
    """Map an access-log line to a level by its status code; None for anything else."""
    match = _ACCESS_LINE.search(message)
    if match is None:
        return None
    status = int(match['status'])
    if status >= 500:
        return 'CRITICAL'
    if status >= 400:
        return 'ERROR'
    if status >= 300:
        return 'WARNING'
    return 'SUCCESS' if status >= 200 else 'INFO'


class InterceptHandler(logging.Handler):
    _QUIET_PREFIXES = ('aiosqlite', 'sqlalchemy', 'asyncio')

    def emit(self, record: logging.LogRecord) -> None:
        if record.levelno <= logging.DEBUG and record.name.startswith(self._QUIET_PREFIXES):
            return

        message = record.getMessage()
        level: str | int | None = access_log_level(message)
        if level is None:
            try:
                level = loguru_logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

        # Walk out of the logging module so loguru reports the real caller
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back  # type: ignore
            depth += 1

        custom_logger.opt(depth=depth, exception=record.exc_info).log(level, message)


io_log_format = ' | '.join(
    (
        f'<c>{{extra[{ExtraField.SERVICE_CONTEXT}]}}</>',
        '<lvl>{level:<8}</>',
        f'<c>{{file}}::{{function}}:{{line}}</>=><y>{{extra[{ExtraField.CALL_TARGET}]}}</>',
        '{message}',
        '<lk>{elapsed}</>',
        f'<lk>{{extra[{ExtraField.CHAIN_START_TIME}]:<18}}</>',
    )
)


def configure_sinks(bound: 'LoguruLogger') -> None:
    min_level = 'DEBUG' if settings.DEBUG else 'INFO'
    loguru_logger.remove()
    bound.add(sys.stdout, format=io_log_format, level=min_level, enqueue=True)

    if settings.DEBUG:
        hour = datetime.now(timezone.utc).strftime('%Y-%m-%d_%H')
        bound.add(
            settings.LOG_DIR / f'{settings.LOG_FILE_PREFIX}{hour}.log',
            format=io_log_format,
            rotation=settings.LOG_ROTATION,
            retention=settings.LOG_RETENTION,
            compression='gz',
            enqueue=True,
            level=min_level,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


custom_logger = loguru_logger.bind(**default_extra())
configure_sinks(custom_logger)
