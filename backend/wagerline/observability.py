"""Logfire observability initialization and instrumentation."""

import logging

import logfire

from wagerline import __version__
from wagerline.config import Settings

logger = logging.getLogger(__name__)


def initialize_logfire(settings: Settings) -> None:
    """
    Initialize Logfire for the settlement core.

    Must be called ONCE at process startup (CLI or Celery worker).

    Instruments:
    - Python logging (bridged to Logfire)
    - Redis client (notification publishes)
    - SQLAlchemy engine (entity persistence)
    """
    if not settings.logfire_token:
        logger.warning("Logfire token not set - observability disabled")
        return

    try:
        logfire.configure(
            token=settings.logfire_token,
            service_name="wagerline",
            service_version=__version__,
            environment=settings.environment,
        )

        root_logger = logging.getLogger()
        root_logger.addHandler(logfire.LogfireLoggingHandler())

        logfire.instrument_redis()

        from wagerline.database.session import get_engine

        logfire.instrument_sqlalchemy(engine=get_engine())

        logger.info("Logfire tracking initialized")

    except Exception as e:
        logger.warning(f"Failed to initialize Logfire: {e}")
