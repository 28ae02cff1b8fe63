import logging
from collections.abc import MutableMapping
from typing import Any

import structlog

from tasklist.config import Config

NOISY_LOGGERS = ["pymongo", "pymongo.topology", "pymongo.connection", "pymongo.pool", "pymongo.server", "pymongo.command"]

# Event keys whose values must never reach the log output
SECRET_KEYS = frozenset({"password", "password_hash", "token", "session_token", "sid", "secret"})
REDACTED = "[redacted]"


def redact_secrets(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Replace credential values in an event with a placeholder."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def resolve_log_level(config: Config) -> int:
    if config.log_level:
        return logging.getLevelNamesMapping()[config.log_level.upper()]
    return logging.DEBUG if config.debug else logging.INFO


def setup_logging(config: Config) -> None:
    log_level = resolve_log_level(config)

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(log_level)

    # Driver chatter drowns out request logs
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        redact_secrets,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if config.debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
