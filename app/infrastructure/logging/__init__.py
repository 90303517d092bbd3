"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the application using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for request-scoped logging
    - get_correlation_id(): Get current correlation ID from context

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_request_context,
    )

    # At application startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")

    # In request handler
    with bind_request_context(correlation_id="req-123", locale="en-US"):
        logger.info("processing_request")
"""

# Core logging setup
from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

# Request context binding
from infrastructure.logging.context import (
    CORRELATION_ID_HEADER,
    bind_request_context,
    get_correlation_id,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_module_logger",
    # Context
    "CORRELATION_ID_HEADER",
    "bind_request_context",
    "get_correlation_id",
]
