import sentry_sdk

from .config import settings
from .logging import root_logger

logger = root_logger.getChild(__name__)


def init_sentry():
    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            release=f"{settings.APP_NAME}@{settings.APP_VERSION}",
            debug=settings.DEBUG,
        )
        return True
    logger.warning("No SENTRY_DSN set, Sentry integration disabled")
    return False
