import logging

import structlog

from tablefilter.config import get_config


def setup_logging(debug: bool | None = None) -> None:
    """Configure structlog over stdlib logging.

    Filter mutations and engine lifecycle events are logged at debug level,
    so they only show up when debug is enabled.

    Args:
        debug: Overrides the TABLEFILTER_DEBUG setting when given
    """
    if debug is None:
        debug = get_config().debug
    log_level = logging.DEBUG if debug else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
    )

    processors: list[structlog.types.Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if debug:
        # Readable filter_value_set / filters_replaced events while building a table view
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        # One JSON object per event, e.g. for a server forwarding query fragments
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
