from pydantic_settings import BaseSettings, SettingsConfigDict

from .version import __version__


class GlobalSettings(BaseSettings):
    model_config = SettingsConfigDict(
        # `.env.prod` takes priority over `.env`
        env_file=(".env", ".env.prod"),
        extra="ignore",
    )

    APP_NAME: str = "awsapi"
    APP_VERSION: str = __version__
    SENTRY_DSN: str | None = None
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_REGION: str = "us-east-1"
    # transport policy used by AwsBasicApi.perform_get / perform_post
    REQUEST_TIMEOUT: float = 10.0
    REQUEST_RETRIES: int = 3


settings = GlobalSettings()


LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s [%(name)s:%(lineno)d] %(message)s",
            "datefmt": "%d-%m-%Y %I:%M:%S",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": settings.LOG_LEVEL,
            "formatter": "standard",
            "stream": "ext://sys.stderr",
        },
    },
    "loggers": {
        settings.APP_NAME: {
            "handlers": ["console"],
            "level": settings.LOG_LEVEL,
            "propagate": True,
        },
        "httpx": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
        "httpcore": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}
