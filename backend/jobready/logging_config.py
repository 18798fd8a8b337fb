import logging
import logging.config

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
# Request lines come from our own middleware; SQL echo only when asked for.
QUIET_LOGGERS = ("uvicorn.access", "httpx", "sqlalchemy.engine")


def _resolve_level(level: int | str | None) -> int:
    if level is None:
        from jobready.config import settings

        level = settings.log_level
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def setup_logging(level: int | str | None = None) -> None:
    """Send every logger to stdout at LOG_LEVEL (or `level`), replacing earlier root handlers."""
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"default": {"format": LOG_FORMAT}},
            "handlers": {
                "stdout": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "stream": "ext://sys.stdout",
                }
            },
            "root": {"level": _resolve_level(level), "handlers": ["stdout"]},
            "loggers": {name: {"level": "WARNING"} for name in QUIET_LOGGERS},
        }
    )
