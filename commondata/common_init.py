import logging
import os
import enum
from typing import Optional

import sentry_sdk
import structlog


# env variable holding the Sentry Environment name
SENTRY_ENVIRONMENT_ENV = "SENTRY_ENVIRONMENT"

# env variable that switches console output to one JSON object per line
LOG_JSON_ENV = "LOG_JSON"


class Environment(str, enum.Enum):
    """Identifies an environment, as used at Sentry.io."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


def configure_logging(command: Optional[str] = None, level: int = logging.INFO):
    """Configure stdlib logging and structlog, and if SENTRY_DSN is set, Sentry.

    Parameters:
        command: a command name added to the Sentry events.
        level: level set on the root logger.
    """

    # structlog renders through stdlib logging so that messages from pandas, matplotlib and
    # requests share one handler and format.
    # Based on https://www.structlog.org/en/stable/standard-library.html#rendering-using-structlog-based-formatters-within-logging
    structlog.configure(
        context_class=dict,
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            # wrap_for_formatter must be the last processor. It converts the processed event dict
            # to something that the ProcessorFormatter understands.
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if os.getenv(LOG_JSON_ENV):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    # matplotlib logs font cache scans at INFO.
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    sentry_dsn = os.getenv("SENTRY_DSN")
    sentry_environment = None
    if SENTRY_ENVIRONMENT_ENV in os.environ:
        sentry_environment = Environment(os.getenv(SENTRY_ENVIRONMENT_ENV))

    if sentry_dsn:
        sentry_sdk.init(sentry_dsn, environment=sentry_environment)

        if command:
            sentry_sdk.set_tag("command", command)
