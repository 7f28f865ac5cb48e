"""Structlog configuration and logger setup.

Every event carries the application it was emitted for (``app``), so log
lines from the yes-no, timer, admin and other apps sharing the runtime can
be told apart. Rendering is console output in development and JSON in
production; nothing is emitted under pytest.

Usage:
    from localekit.logging import configure_logging, get_module_logger

    # Configure logging at app startup
    configure_logging(app_name="timer")

    # Get a logger for your module
    logger = get_module_logger()
    logger.info("locale_loaded", locale="de-DE")

Dependencies:
    - localekit.configuration.settings
"""

import inspect
import logging
import sys
from typing import Any, Callable, List, MutableMapping, Optional

import structlog
from structlog.stdlib import BoundLogger

from localekit.configuration import settings

EventDict = MutableMapping[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

SERVICE_NAME = "localekit"


def _is_test_environment() -> bool:
    """Detect if running in a test environment.

    Returns:
        True if pytest is in sys.modules, False otherwise
    """
    return "pytest" in sys.modules


def add_app_context(app_name: Optional[str]) -> Processor:
    """Build a processor tagging events with the service and application.

    Values bound explicitly on a logger (``logger.bind(app=...)``) win.

    Args:
        app_name: Application identifier, e.g. "timer". None tags only
            the service.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", SERVICE_NAME)
        if app_name:
            event_dict.setdefault("app", app_name)
        return event_dict

    return processor


def _build_processors(prod_mode: bool, app_name: Optional[str]) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_app_context(app_name),
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
    app_name: Optional[str] = None,
) -> BoundLogger:
    """Configure structured logging for the translation runtime.

    Args:
        log_level: Log level override (DEBUG, INFO, WARNING, ...).
            Defaults to settings.LOG_LEVEL.
        is_production: JSON output when True, console output when False.
            Defaults to settings.is_production.
        app_name: Application tagged on every event. Defaults to
            settings.i18n.app_name.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        # root level above CRITICAL: processors run, nothing is emitted
        logging.root.setLevel(logging.CRITICAL + 1)
        structlog.configure(
            processors=[
                add_app_context(app_name),
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            level=logging.CRITICAL + 1,
            force=True,
        )
        return structlog.stdlib.get_logger()

    prod_mode = is_production if is_production is not None else settings.is_production
    structlog.configure(
        processors=_build_processors(prod_mode, app_name or settings.i18n.app_name),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    effective_log_level = log_level or settings.LOG_LEVEL
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, effective_log_level.upper(), logging.INFO),
    )

    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module.

    Binds ``component`` (last module path segment, e.g. "loader") and
    ``module_path`` ("localekit.i18n.loader").

    Returns:
        Logger bound with the calling module's context
    """
    current_frame = inspect.currentframe()
    frame = current_frame.f_back if current_frame is not None else None
    module = inspect.getmodule(frame) if frame is not None else None
    if module is None:
        return logger.bind(component="unknown")

    module_name = module.__name__
    return logger.bind(component=module_name.rsplit(".", 1)[-1], module_path=module_name)
