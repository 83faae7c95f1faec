"""Structured logging with per-run context using structlog and contextvars."""

import logging
import sys
from contextvars import ContextVar

import structlog

# Context variables for the current research run
current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
current_entrypoint: ContextVar[str | None] = ContextVar("current_entrypoint", default=None)

_configured = False

# Dependencies that are too chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "urllib3", "openai", "anthropic", "langchain", "langchain_core")


def setup_structured_logging(level: str = "INFO", json_output: bool = True) -> None:
    """Configure structlog and route stdlib logging to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        json_output: Render JSON lines; otherwise a human-readable console format
    """
    global _configured
    if _configured:
        return

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,  # Inject run context
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout may carry the report or MCP JSON-RPC; logs always go to stderr
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stderr,
    )
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


def bind_run_context(run_id: str, entrypoint: str) -> None:
    """Bind run context for all subsequent logs in this async context.

    Args:
        run_id: Unique research run identifier
        entrypoint: Where the run was started from (cli, run_deep_research)
    """
    current_run_id.set(run_id)
    current_entrypoint.set(entrypoint)
    structlog.contextvars.bind_contextvars(run_id=run_id, entrypoint=entrypoint)


def clear_run_context() -> None:
    """Clear run context after the run completes."""
    current_run_id.set(None)
    current_entrypoint.set(None)
    structlog.contextvars.clear_contextvars()


def get_run_logger(name: str = "mcp_server_deep_research") -> structlog.stdlib.BoundLogger:
    """Get a structlog logger carrying the bound run context."""
    return structlog.get_logger(name)


def get_current_run_id() -> str | None:
    """Get the current run ID from context."""
    return current_run_id.get()


def get_current_entrypoint() -> str | None:
    """Get the entry point of the current run from context."""
    return current_entrypoint.get()
