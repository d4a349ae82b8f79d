"""Prometheus metrics instrumentation.

Provides:
- HTTP request metrics for the FastAPI app
- A counter of recipe generation outcomes
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from prometheus_client import Counter
from prometheus_fastapi_instrumentator import Instrumentator, metrics

from pantry_chef.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import FastAPI

    from pantry_chef.core.config import Settings

logger = get_logger(__name__)

METRIC_NAMESPACE = "pantry_chef"

RECIPE_GENERATIONS = Counter(
    "recipe_generations",
    "Recipe generation requests by outcome (success, repaired, failed)",
    labelnames=("outcome",),
    namespace=METRIC_NAMESPACE,
)


def record_generation_outcome(outcome: str) -> None:
    """Increment the generation counter for ``outcome``."""
    RECIPE_GENERATIONS.labels(outcome=outcome).inc()


def setup_metrics(app: FastAPI, settings: Settings) -> Instrumentator | None:
    """Instrument the app and expose ``{prefix}/metrics``.

    Args:
        app: The FastAPI application instance.
        settings: Application settings.

    Returns:
        The configured Instrumentator, or None when metrics are disabled.
    """
    if not settings.observability.metrics.enabled:
        logger.info("Metrics collection disabled")
        return None

    prefix = settings.api.v1_prefix

    instrumentator = Instrumentator(
        should_group_status_codes=True,
        should_ignore_untemplated=True,
        excluded_handlers=[
            f"{prefix}/health",
            f"{prefix}/ready",
            f"{prefix}/metrics",
        ],
    )

    instrumentator.add(
        metrics.default(
            metric_namespace=METRIC_NAMESPACE,
            metric_subsystem="http",
        )
    )

    instrumentator.instrument(app)

    metrics_endpoint = f"{prefix}/metrics"
    instrumentator.expose(
        app,
        endpoint=metrics_endpoint,
        include_in_schema=True,
        tags=["Monitoring"],
    )

    logger.info("Prometheus metrics configured", endpoint=metrics_endpoint)

    return instrumentator


__all__ = ["RECIPE_GENERATIONS", "record_generation_outcome", "setup_metrics"]
