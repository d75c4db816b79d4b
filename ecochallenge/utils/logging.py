"""
Logging configuration for EcoChallenge.

Registry and ledger events are key-value structlog events. Hosts that
serialize requests can bind the caller for the duration of one request with
``request_context`` so every event of that request carries it.
"""

import sys
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional
import structlog
from structlog.typing import FilteringBoundLogger, Processor

from ..config import Settings, get_config

LOG_FILE_NAME = "ecochallenge.log"


def _resolve_level(config: Settings, level: Optional[str]) -> int:
    name = (level or config.log_level).upper()
    return getattr(logging, name, logging.INFO)


def _processors(config: Settings) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="ISO", key="timestamp"),
        structlog.processors.format_exc_info,
    ]
    if config.log_to_file:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    return processors


def _attach_file_handler(config: Settings, level: int) -> Path:
    logs_dir = Path(config.log_dir)
    logs_dir.mkdir(parents=True, exist_ok=True)
    path = logs_dir / LOG_FILE_NAME

    file_handler = logging.FileHandler(path)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(message)s"))
    logging.getLogger().addHandler(file_handler)
    return path


def setup_logging(config: Optional[Settings] = None,
                  level: Optional[str] = None) -> FilteringBoundLogger:
    """Setup structured logging; ``level`` overrides the configured log level."""
    config = config or get_config()
    log_level = _resolve_level(config, level)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level, force=True)

    log_file = _attach_file_handler(config, log_level) if config.log_to_file else None

    structlog.configure(
        processors=_processors(config),
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    logger = structlog.get_logger("ecochallenge")
    logger.info("Logging configured", level=logging.getLevelName(log_level),
                log_file=str(log_file) if log_file else None)
    return logger


@contextmanager
def request_context(caller: str, **fields) -> Iterator[None]:
    """Bind the caller (and extra fields) to every event logged inside the block."""
    with structlog.contextvars.bound_contextvars(caller=caller, **fields):
        yield
