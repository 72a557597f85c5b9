from __future__ import annotations

"""Central logging configuration for xmlplus.

Applications embedding xmlplus import and call :func:`setup_logging` at
start-up; the library itself only creates module loggers.
"""

import logging
import logging.config
import os
from typing import Optional

from xmlplus.config import ConfigManager

__all__ = ["setup_logging"]


def setup_logging(log_dir: Optional[str] = None) -> None:
    """Configure logging from the ``logging`` configuration section."""
    log_dir = log_dir or os.environ.get("XMLPLUS_LOG_DIR", "logs")
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, "xmlplus.log")

    logging_config = ConfigManager().get_logging_config()
    if logging_config and isinstance(logging_config, dict) and logging_config.get("version"):
        config = dict(logging_config)
        handlers = {name: dict(handler) for name, handler in config.get("handlers", {}).items()}
        if "file" in handlers:
            handlers["file"]["filename"] = log_file
        config["handlers"] = handlers
        try:
            logging.config.dictConfig(config)
            logging.getLogger(__name__).info("===== Logging initialised from config files =====")
        except (ValueError, TypeError, AttributeError, ImportError) as exc:
            _setup_minimal_logging()
            logging.getLogger(__name__).error("Invalid logging config, using minimal fallback: %s", exc)
    else:
        _setup_minimal_logging()
        logging.getLogger(__name__).warning("No logging config found, using minimal fallback")

    _apply_debug_overrides()


def _setup_minimal_logging() -> None:
    """Set up console-only logging when config is unavailable."""
    minimal_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'simple': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            },
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'formatter': 'simple',
                'level': 'INFO',
            },
        },
        'root': {
            'level': 'INFO',
            'handlers': ['console'],
        },
    }
    logging.config.dictConfig(minimal_config)


def _apply_debug_overrides() -> None:
    """Apply environment-driven module-specific debug overrides.

    ``XMLPLUS_DEBUG_MODULES=comma,separated,logger,names`` sets DEBUG on each
    listed logger. ``XMLPLUS_DEBUG_EDITS=true`` is a shortcut for the
    mutation engine.
    """
    targets = []
    if os.environ.get('XMLPLUS_DEBUG_EDITS', '').strip().lower() in {'1', 'true', 'yes', 'on'}:
        targets.append('xmlplus.core.mutation')
    extra_modules = os.environ.get('XMLPLUS_DEBUG_MODULES', '').strip()
    if extra_modules:
        targets.extend([m.strip() for m in extra_modules.split(',') if m.strip()])

    for name in targets:
        logger = logging.getLogger(name)
        logger.setLevel(logging.DEBUG)
        # Ensure at least one handler emits DEBUG for this logger
        if not any(h.level <= logging.DEBUG for h in logger.handlers):
            handler = logging.StreamHandler()
            handler.setLevel(logging.DEBUG)
            handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(handler)
        logger.info("Debug override active for logger '%s'", name)
