import logging
import logging.config
from pathlib import Path
from app.core.config import settings

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_logging_config() -> dict:
    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "stream": "ext://sys.stdout"
        }
    }
    app_handlers = ["console"]

    if settings.LOG_DIR:
        log_path = Path(settings.LOG_DIR)
        log_path.mkdir(exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "detailed",
            "filename": str(log_path / "app.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
        handlers["error_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "ERROR",
            "formatter": "detailed",
            "filename": str(log_path / "error.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
        # OAuth provider failures get their own file for diagnosis
        handlers["oauth_file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": "DEBUG",
            "formatter": "detailed",
            "filename": str(log_path / "oauth.log"),
            "maxBytes": 10485760,
            "backupCount": 5
        }
        app_handlers = ["console", "file", "error_file"]

    loggers = {
        "app": {
            "level": settings.LOG_LEVEL,
            "handlers": app_handlers,
            "propagate": False
        },
        "uvicorn.access": {
            "level": "WARNING",
            "handlers": ["console"],
            "propagate": False
        }
    }
    if "oauth_file" in handlers:
        loggers["app.services.oauth"] = {
            "level": "DEBUG",
            "handlers": app_handlers + ["oauth_file"],
            "propagate": False
        }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "detailed": {"format": FORMAT}
        },
        "handlers": handlers,
        "root": {
            "level": settings.LOG_LEVEL,
            "handlers": ["console"]
        },
        "loggers": loggers
    }


def configure_logging():
    logging.config.dictConfig(build_logging_config())
