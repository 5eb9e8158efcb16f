"""Runtime configuration and structured logging setup.

Values are read once from the environment (or a ``.env`` / ``settings.ini``
file) through python-decouple.  Every setting has a default so the cache
layer can be instantiated in tests without any configuration.
"""

import logging.config
import re

import structlog
from decouple import config

# ---------------------------------------------------------------------------
# Remote service
# ---------------------------------------------------------------------------
API_BASE_URL = config("API_BASE_URL", default="http://localhost:8080")
API_VERSION = config("API_VERSION", default="/api/v1")
API_TIMEOUT = config("API_TIMEOUT", default=30.0, cast=float)
API_TOKEN = config("API_TOKEN", default="")

# ---------------------------------------------------------------------------
# Cache behaviour
# ---------------------------------------------------------------------------
DEFAULT_PAGE_SIZE = config("DEFAULT_PAGE_SIZE", default=10, cast=int)
LOW_STOCK_THRESHOLD = config("LOW_STOCK_THRESHOLD", default=10, cast=int)
SELECTOR_CACHE_SIZE = config("SELECTOR_CACHE_SIZE", default=16, cast=int)

# ---------------------------------------------------------------------------
# Presentation
# ---------------------------------------------------------------------------
CURRENCY_SYMBOL = config("CURRENCY_SYMBOL", default="đ")
COUPON_URGENCY_DAYS = config("COUPON_URGENCY_DAYS", default=3, cast=int)

LOG_LEVEL = config("LOG_LEVEL", default="INFO")

# ---------------------------------------------------------------------------
# Structured Logging (structlog + stdlib logging)
# ---------------------------------------------------------------------------
SENSITIVE_PATTERN = re.compile(
    r"(bearer\s+[A-Za-z0-9\-._~+/]+=*)"  # Authorization header values
    r"|((?<![\w:.-])\+?\d{9,13}(?![\w:.-]))"  # phone numbers
    r"|(password|passwd|secret|token|authorization)"
    r"""([=:]\s*["']?)([^\s,}"']+)""",
    re.IGNORECASE,
)


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks tokens, passwords and phone numbers in log values."""
    for key, value in list(event_dict.items()):
        if isinstance(value, str):
            event_dict[key] = SENSITIVE_PATTERN.sub("***MASKED***", value)
    return event_dict


# Shared processors used by both structlog and stdlib logging
_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": structlog.stdlib.ProcessorFormatter,
            "processors": [
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
            "foreign_pre_chain": _shared_processors,
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "httpx": {
            "handlers": ["console"],
            "level": "WARNING",
            "propagate": False,
        },
    },
}


def configure_logging() -> None:
    """Install the JSON logging pipeline for the host application."""
    logging.config.dictConfig(LOGGING)
    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
