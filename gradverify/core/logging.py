# gradverify/core/logging.py
import logging
import sys

from pythonjsonlogger import jsonlogger

from gradverify.core.config import Settings

# chatty third-party loggers kept at WARNING unless we run at DEBUG
_NOISY = ("sqlalchemy.engine", "passlib", "multipart")


def configure_logging(settings: Settings) -> None:
    """
    One JSON object per line on stdout, tagged with the app and environment.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = []

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        jsonlogger.JsonFormatter(
            "%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "name": "logger"},
            static_fields={"app": settings.app_name, "env": settings.environment},
        )
    )
    root.addHandler(handler)

    for name in _NOISY:
        logging.getLogger(name).setLevel(logging.DEBUG if level <= logging.DEBUG else logging.WARNING)

    logging.getLogger("uvicorn.access").setLevel(level)
    logging.getLogger("uvicorn.error").setLevel(level)
