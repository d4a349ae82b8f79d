"""Observability components: logging and metrics."""

from pantry_chef.observability.logging import (
    bind_context,
    clear_context,
    get_context,
    get_logger,
    logger,
    setup_logging,
    unbind_context,
)
from pantry_chef.observability.metrics import record_generation_outcome, setup_metrics


__all__ = [
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "record_generation_outcome",
    "setup_logging",
    "setup_metrics",
    "unbind_context",
]
