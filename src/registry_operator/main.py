"""Main entry point for the Registry Operator."""

from __future__ import annotations

import os
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from . import tracing
from .handlers import registry as registry_handlers


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    structured_logging.setup_structured_logging()
    tracing.initialize_tracing()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = int(os.getenv("MAX_WORKERS", "4"))

    # Restart the watch periodically; the re-list re-delivers every Registry
    settings.watching.server_timeout = int(os.getenv("WATCH_SERVER_TIMEOUT_SECONDS", "300"))

    metrics_port = int(os.getenv("METRICS_PORT", "8080"))
    health.start_health_server(metrics_port)
    health.mark_ready()


@kopf.on.cleanup()
def shutdown(**_: Any) -> None:
    """Stop in-flight reconciliations before their next step."""
    health.mark_not_ready()
    registry_handlers.shutdown_requested.set()


def main() -> None:
    """Run the operator against all namespaces."""
    kopf.run(clusterwide=True)


if __name__ == "__main__":
    main()
