import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional, Union

import structlog

from ..core.config import get_settings
from .lru_cache import LRUCache


def setup_logging(
    log_level: Optional[str] = None,
    log_to_file: bool = False,
    logs_dir: Optional[Union[str, Path]] = None,
) -> None:
    """Set up logging for an application embedding softlru caches.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL);
            defaults to SOFTLRU_LOG_LEVEL
        log_to_file: Whether to log to a rotating file in addition to console
        logs_dir: Directory for the log file (defaults to ./logs)
    """
    if log_level is None:
        log_level = get_settings().log_level
    level = getattr(logging, log_level.upper())

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.set_exc_info,
            (
                structlog.processors.JSONRenderer()
                if log_to_file
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)

    if log_to_file:
        logs_path = Path(logs_dir) if logs_dir is not None else Path("logs")
        logs_path.mkdir(parents=True, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            logs_path / "softlru.log", maxBytes=10 * 1024 * 1024, backupCount=5  # 10MB
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
            )
        )
        root_logger.addHandler(file_handler)


def get_cache_logger(name: str = None) -> structlog.BoundLogger:
    """Get a structured logger for cache reporting.

    Args:
        name: Logger name (defaults to "softlru")
    """
    if name is None:
        name = "softlru"
    return structlog.get_logger(name)


def log_cache_stats(cache: LRUCache, logger: structlog.BoundLogger = None) -> None:
    """Emit one structured record with a cache's counters.

    Args:
        cache: Cache to report on
        logger: Logger to use (creates one if not provided)
    """
    if logger is None:
        logger = get_cache_logger()

    stats = cache.stats()
    logger.info(
        "Cache statistics",
        cache=cache.name(),
        size=stats.size,
        capacity=stats.capacity,
        hits=stats.hits,
        misses=stats.misses,
        puts=stats.puts,
        created=stats.created,
        evictions=stats.evictions,
        hit_rate=round(stats.hit_rate, 2),
    )
