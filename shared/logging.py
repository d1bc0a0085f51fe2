"""
Shared logging configuration for the access-jwt token codec.
"""

import sys
import structlog
import logging
import time
from typing import Any, Dict, Optional


# Event keys whose values are masked before rendering
SENSITIVE_KEYS = ("key", "secret", "signature", "token", "password")
REDACTED = "***"


def configure_logging(service_name: str, log_level: str = "info", env: Optional[str] = None) -> None:
    """Configure structured logging for a service."""
    level = getattr(logging, log_level.upper())

    def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        event_dict.setdefault("service", service_name)
        if env:
            event_dict.setdefault("env", env)
        return event_dict

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            redact_sensitive,
            add_timestamp,
            structlog.processors.JSONRenderer()
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )
    # basicConfig is a no-op once the root logger has handlers
    logging.getLogger().setLevel(level)


def redact_sensitive(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Mask values of event keys that look like key material or tokens."""
    for name in list(event_dict):
        if name == "event":
            continue
        lowered = name.lower()
        if any(marker in lowered for marker in SENSITIVE_KEYS):
            event_dict[name] = REDACTED
    return event_dict


def add_timestamp(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add high-precision timestamp to log events."""
    event_dict["timestamp"] = time.time()
    return event_dict


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
