import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog.runtime.context import get_config

_FMT_PLAIN = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records (SQLAlchemy, etc.) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging() -> None:
    """Reset Loguru sinks from the current configuration and route stdlib logging into it."""
    main_config = get_config()
    cfg = main_config.logging
    verbose_traces = main_config.app.environment != "production"

    logger.remove()
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=_FMT_PLAIN,
        colorize=True,
        backtrace=verbose_traces,
        diagnose=verbose_traces,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_json = cfg.format == "json"
        logger.add(
            str(path),
            level=cfg.level,
            format="{message}" if is_json else _FMT_PLAIN,
            serialize=is_json,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            enqueue=True,
            backtrace=verbose_traces,
            diagnose=verbose_traces,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    # SQL echo is controlled by database.echo, not by the log level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.info(
        "Logging configured for {} (level={}, file={})",
        main_config.app.name,
        cfg.level,
        cfg.file or "-",
    )
